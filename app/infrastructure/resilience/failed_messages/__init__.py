"""Failed message handling for stream consumers.

When a receiver raises while handling a message read from a stream, the
failure is stored. Stored failures can later be replayed, one at a time or
all at once, through the receiver that originally failed.

Architecture:
- FailedMessage: Immutable record of one failed delivery
- FailedMessagesRepository: Storage interface (in-memory and Redis)
- ReceiverResolver: Rebuilds receivers from their persisted identity
- FailedMessagesHandler: Stores failures and retries them

Usage:
    from infrastructure.resilience.failed_messages import (
        FailedMessagesHandler,
        InMemoryFailedMessagesRepository,
        RetryFailedError,
    )
    from integrations.redis import RedisStreamLog

    handler = FailedMessagesHandler(
        repository=InMemoryFailedMessagesRepository(),
        stream_log=RedisStreamLog(),
    )

    # Consumer side
    try:
        receiver.handle(message)
    except Exception as e:
        handler.store(message, receiver, e)

    # Operator side
    report = handler.retry_all()
    for outcome in report.failed:
        print(outcome.error)
"""

from infrastructure.resilience.failed_messages.exceptions import (
    FailedMessagesError,
    FailedMessagesStorageError,
    InvalidReceiverError,
    MessageNotFoundError,
    ReceiverResolutionError,
    RetryFailedError,
    UnknownReceiverError,
)
from infrastructure.resilience.failed_messages.factory import (
    create_failed_messages_repository,
)
from infrastructure.resilience.failed_messages.handler import (
    NO_MATCHING_MESSAGES,
    FailedMessagesHandler,
)
from infrastructure.resilience.failed_messages.models import (
    FailedMessage,
    RetryOutcome,
    RetryReport,
)
from infrastructure.resilience.failed_messages.redis_repository import (
    RedisFailedMessagesRepository,
)
from infrastructure.resilience.failed_messages.repository import (
    FailedMessagesRepository,
    InMemoryFailedMessagesRepository,
)
from infrastructure.resilience.failed_messages.resolver import ReceiverResolver

__all__ = [
    # Models
    "FailedMessage",
    "RetryOutcome",
    "RetryReport",
    # Repository
    "FailedMessagesRepository",
    "InMemoryFailedMessagesRepository",
    "RedisFailedMessagesRepository",
    "create_failed_messages_repository",
    # Retry
    "FailedMessagesHandler",
    "ReceiverResolver",
    "NO_MATCHING_MESSAGES",
    # Errors
    "FailedMessagesError",
    "FailedMessagesStorageError",
    "ReceiverResolutionError",
    "UnknownReceiverError",
    "InvalidReceiverError",
    "MessageNotFoundError",
    "RetryFailedError",
]
