"""Failed messages infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class FailedMessagesSettings(InfrastructureSettings):
    """Configuration for failed message storage and retries.

    Environment Variables:
        FAILED_MESSAGES_BACKEND: Repository backend - 'memory' or 'redis'
        FAILED_MESSAGES_KEY: Redis hash holding the failed message records
        STREAM_PREFIX: Optional prefix applied to stream names on read

    Backends:
        - memory: Process-local repository (development, testing)
        - redis: Redis hash shared by every consumer instance (production)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.failed_messages.backend == "redis":
            key = settings.failed_messages.key
        ```
    """

    backend: str = Field(
        default="redis",
        alias="FAILED_MESSAGES_BACKEND",
        description="Failed messages backend: 'memory' or 'redis'",
    )
    key: str = Field(
        default="streamer:failed_messages",
        alias="FAILED_MESSAGES_KEY",
        description="Redis hash key holding failed message records",
    )
    stream_prefix: str = Field(
        default="",
        alias="STREAM_PREFIX",
        description="Prefix prepended to stream names when reading the log",
    )
