"""Factory for creating failed messages repositories based on configuration."""

from typing import TYPE_CHECKING, Optional

from infrastructure.logging import get_module_logger
from infrastructure.resilience.failed_messages.redis_repository import (
    RedisFailedMessagesRepository,
)
from infrastructure.resilience.failed_messages.repository import (
    FailedMessagesRepository,
    InMemoryFailedMessagesRepository,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()


def create_failed_messages_repository(
    backend: Optional[str] = None,
    settings: Optional["Settings"] = None,
) -> FailedMessagesRepository:
    """Create the repository selected by configuration.

    Args:
        backend: Optional backend override (memory, redis).
            If None, uses settings.failed_messages.backend
        settings: Optional Settings instance. Defaults to the application
            settings from the provider.

    Returns:
        FailedMessagesRepository implementation

    Raises:
        ValueError: If an unknown backend is specified

    Examples:
        >>> repository = create_failed_messages_repository()
        >>> repository = create_failed_messages_repository(backend="memory")
    """
    if settings is None:
        from infrastructure.services.providers import get_settings

        settings = get_settings()

    backend = backend or settings.failed_messages.backend

    if backend == "memory":
        logger.info("creating_in_memory_failed_messages_repository")
        return InMemoryFailedMessagesRepository()

    elif backend == "redis":
        from integrations.redis import get_redis_client

        logger.info(
            "creating_redis_failed_messages_repository",
            key=settings.failed_messages.key,
        )
        return RedisFailedMessagesRepository(
            client=get_redis_client(settings),
            key=settings.failed_messages.key,
        )

    else:
        raise ValueError(
            f"Unknown failed messages backend: {backend}. Supported: memory, redis"
        )
