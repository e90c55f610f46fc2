"""Stream primitives consumed by the failed message handling.

Exports:
    ReceivedMessage: Transient message handed to a receiver
    Range: Inclusive stream id range
    StreamLog: Read interface of the stream log
    MessageReceiver: Receiver capability protocol
    ReceiverRegistry: Identity to factory mapping
    register_receiver: Decorator registering on the default registry
"""

from infrastructure.streams.log import StreamLog
from infrastructure.streams.models import Range, ReceivedMessage, StreamEntry
from infrastructure.streams.receivers import (
    MessageReceiver,
    ReceiverRegistry,
    default_identity,
    default_registry,
    register_receiver,
)

__all__ = [
    "ReceivedMessage",
    "Range",
    "StreamEntry",
    "StreamLog",
    "MessageReceiver",
    "ReceiverRegistry",
    "default_identity",
    "default_registry",
    "register_receiver",
]
