"""Message receivers and their registry.

A receiver is anything exposing ``handle(message)``. Receivers are persisted
by a stable identity string so they can be rebuilt later, without the
dispatch context that originally invoked them.

Usage:

    from infrastructure.streams import register_receiver, ReceivedMessage

    @register_receiver("orders.projector")
    class OrdersProjector:
        def handle(self, message: ReceivedMessage) -> None:
            ...
"""

from threading import Lock
from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable

from infrastructure.logging import get_module_logger
from infrastructure.streams.models import ReceivedMessage

logger = get_module_logger()

ReceiverFactory = Callable[[], object]


@runtime_checkable
class MessageReceiver(Protocol):
    """Capability required from every receiver."""

    def handle(self, message: ReceivedMessage) -> None:
        """Process one message. Raising marks the delivery as failed."""
        ...


def default_identity(receiver_cls: type) -> str:
    """Dotted import path of a receiver class."""
    return f"{receiver_cls.__module__}.{receiver_cls.__qualname__}"


class ReceiverRegistry:
    """Maps receiver identities to factories.

    This is the host application's container for receivers: it decides how
    a receiver is constructed, including any dependencies it needs.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, ReceiverFactory] = {}
        self._identities: Dict[type, str] = {}
        self._lock = Lock()

    def register(
        self,
        identity: str,
        factory: ReceiverFactory,
        receiver_cls: Optional[type] = None,
    ) -> None:
        """Register a factory under an identity.

        Args:
            identity: Stable key persisted with failed messages
            factory: Zero-argument callable building the receiver
            receiver_cls: Class built by the factory, used to map instances
                back to their identity
        """
        if not identity:
            raise ValueError("identity is required")
        with self._lock:
            self._factories[identity] = factory
            if receiver_cls is not None:
                self._identities[receiver_cls] = identity
        logger.debug(
            "registered_message_receiver",
            identity=identity,
            total_receivers=len(self._factories),
        )

    def receiver(self, identity: Optional[str] = None):
        """Class decorator registering a receiver.

        Args:
            identity: Optional key. Defaults to the class's import path.
        """

        def decorator(receiver_cls: type) -> type:
            self.register(
                identity or default_identity(receiver_cls),
                receiver_cls,
                receiver_cls=receiver_cls,
            )
            return receiver_cls

        return decorator

    def get(self, identity: str) -> Optional[ReceiverFactory]:
        with self._lock:
            return self._factories.get(identity)

    def identity_of(self, receiver: object) -> str:
        """Identity to persist for a receiver instance."""
        receiver_cls = type(receiver)
        with self._lock:
            identity = self._identities.get(receiver_cls)
        return identity or default_identity(receiver_cls)

    def registered(self) -> List[str]:
        with self._lock:
            return list(self._factories.keys())

    def clear(self) -> None:
        """Remove every registration.

        WARNING: This is intended for testing only.
        """
        with self._lock:
            self._factories.clear()
            self._identities.clear()
        logger.debug("cleared_message_receivers")


# Process-wide registry used when no explicit registry is injected
default_registry = ReceiverRegistry()


def register_receiver(identity: Optional[str] = None):
    """Register a receiver class on the default registry."""
    return default_registry.receiver(identity)
