"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.resilience.failed_messages import (
    FailedMessagesHandler,
    FailedMessagesRepository,
    ReceiverResolver,
    create_failed_messages_repository,
)
from infrastructure.streams import default_registry
from integrations.redis import RedisStreamLog


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_failed_messages_repository() -> FailedMessagesRepository:
    """
    Get application-scoped failed messages repository singleton.

    Returns:
        FailedMessagesRepository: Backend selected by settings.failed_messages.backend
    """
    return create_failed_messages_repository(settings=get_settings())


@lru_cache
def get_failed_messages_handler() -> FailedMessagesHandler:
    """
    Get application-scoped failed messages handler singleton.

    Wires the configured repository, the Redis stream log and the default
    receiver registry.

    Usage:
        handler = get_failed_messages_handler()
        report = handler.retry_all()

    Returns:
        FailedMessagesHandler: Cached handler instance
    """
    settings = get_settings()
    return FailedMessagesHandler(
        repository=get_failed_messages_repository(),
        stream_log=RedisStreamLog(prefix=settings.failed_messages.stream_prefix),
        resolver=ReceiverResolver(default_registry),
    )
