"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.failed_messages import (
    FailedMessagesSettings,
)

__all__ = [
    "FailedMessagesSettings",
]
