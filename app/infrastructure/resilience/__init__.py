"""Resilience patterns for stream consumers.

Contains the failed message store and retry handling.
"""

from infrastructure.resilience.failed_messages import (
    FailedMessage,
    FailedMessagesHandler,
    FailedMessagesRepository,
    InMemoryFailedMessagesRepository,
    RedisFailedMessagesRepository,
    RetryFailedError,
    RetryReport,
)

__all__ = [
    "FailedMessage",
    "FailedMessagesHandler",
    "FailedMessagesRepository",
    "InMemoryFailedMessagesRepository",
    "RedisFailedMessagesRepository",
    "RetryFailedError",
    "RetryReport",
]
