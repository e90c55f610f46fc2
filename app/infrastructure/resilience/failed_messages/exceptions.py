"""Exceptions raised by the failed message handling.

Every exception inherits from FailedMessagesError so callers can catch the
whole family. Resolution and lookup errors never reach callers of
``FailedMessagesHandler.retry`` directly: they arrive wrapped in a
RetryFailedError whose ``cause`` is the original exception.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from infrastructure.resilience.failed_messages.models import FailedMessage


class FailedMessagesError(Exception):
    """Base exception for failed message handling."""

    pass


class FailedMessagesStorageError(FailedMessagesError):
    """Raised when the repository backend cannot confirm an operation.

    Treated as fatal: it is never wrapped or retried by the handler.
    """

    pass


class ReceiverResolutionError(FailedMessagesError):
    """Raised when a receiver identity cannot be turned into a receiver."""

    def __init__(self, identity: str, message: str):
        self.identity = identity
        super().__init__(message)


class UnknownReceiverError(ReceiverResolutionError):
    """Raised when no registration or importable class matches the identity.

    Example:
        >>> resolver.resolve("not a class")
        Traceback (most recent call last):
        ...
        UnknownReceiverError: Receiver class does not exists
    """

    pass


class InvalidReceiverError(ReceiverResolutionError):
    """Raised when the resolved object has no callable ``handle`` method."""

    pass


class MessageNotFoundError(FailedMessagesError):
    """Raised when a point lookup on a stream does not return exactly one entry."""

    def __init__(self, stream: str, message_id: str, found: int = 0):
        self.stream = stream
        self.message_id = message_id
        self.found = found
        super().__init__(
            f"Expected one message [{message_id}] on {stream} stream, found {found}"
        )


class RetryFailedError(FailedMessagesError):
    """Raised when retrying a failed message did not succeed.

    Attributes:
        failed_message: The record that was being retried
        reason: Text of the underlying cause
        cause: The underlying exception, when there is one
    """

    def __init__(
        self,
        failed_message: "FailedMessage",
        reason: str,
        cause: Optional[BaseException] = None,
    ):
        self.failed_message = failed_message
        self.reason = reason
        self.cause = cause
        super().__init__(
            f"Failed to retry [{failed_message.id}] on {failed_message.stream} "
            f"stream by [{failed_message.receiver}] receiver. Error: {reason}"
        )
