"""Receiver resolution for retries.

Turns the identity string persisted with a failed message back into a live
receiver. Registered factories win; otherwise the identity is treated as the
dotted import path of a receiver class built with no arguments.
"""

import importlib
import inspect
from typing import Optional

from infrastructure.logging import get_module_logger
from infrastructure.resilience.failed_messages.exceptions import (
    InvalidReceiverError,
    ReceiverResolutionError,
    UnknownReceiverError,
)
from infrastructure.streams.receivers import (
    MessageReceiver,
    ReceiverFactory,
    ReceiverRegistry,
    default_registry,
)

logger = get_module_logger()


class ReceiverResolver:
    """Resolves receiver identities to receiver instances.

    Args:
        registry: Registry consulted first. Defaults to the process-wide
            registry filled by ``register_receiver``.
    """

    def __init__(self, registry: Optional[ReceiverRegistry] = None) -> None:
        self.registry = registry if registry is not None else default_registry

    def resolve(self, identity: str) -> MessageReceiver:
        """Build the receiver for an identity.

        Raises:
            UnknownReceiverError: No registration or class matches the identity
            InvalidReceiverError: The built object cannot handle messages
            ReceiverResolutionError: The factory raised while building
        """
        factory = self.registry.get(identity) or self._import_class(identity)
        if factory is None:
            logger.warning("receiver_unknown", identity=identity)
            raise UnknownReceiverError(identity, "Receiver class does not exists")

        try:
            receiver = factory()
        except Exception as e:
            logger.error("receiver_build_failed", identity=identity, error=str(e))
            raise ReceiverResolutionError(
                identity, f"Receiver could not be built: {e}"
            ) from e

        if not isinstance(receiver, MessageReceiver) or not callable(
            getattr(receiver, "handle", None)
        ):
            logger.warning(
                "receiver_invalid",
                identity=identity,
                resolved_type=type(receiver).__name__,
            )
            raise InvalidReceiverError(
                identity,
                "Receiver class is not an instance of MessageReceiver contract",
            )

        return receiver

    def identity_of(self, receiver: object) -> str:
        """Identity to persist so `receiver` can be resolved again later."""
        return self.registry.identity_of(receiver)

    @staticmethod
    def _import_class(identity: str) -> Optional[ReceiverFactory]:
        module_name, _, class_name = identity.rpartition(".")
        if not module_name or not class_name.isidentifier():
            return None

        try:
            module = importlib.import_module(module_name)
        except (ImportError, TypeError, ValueError):
            return None

        candidate = getattr(module, class_name, None)
        if not inspect.isclass(candidate):
            return None
        return candidate
