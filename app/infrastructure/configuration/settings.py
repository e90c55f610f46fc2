"""Streamer configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.integrations import RedisSettings
from infrastructure.configuration.infrastructure import FailedMessagesSettings


class Settings(BaseSettings):
    """Streamer configuration settings - main aggregator.

    Aggregates the domain-specific settings into a single configuration object:

    - **Integrations**: External services (Redis)
    - **Infrastructure**: Core system behavior (failed messages)

    Environment Variables:
        PREFIX: Environment prefix for multi-tenant deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        host = settings.redis.REDIS_HOST
        backend = settings.failed_messages.backend

        if settings.is_production:
            # Production-specific logic...
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    redis: RedisSettings
    failed_messages: FailedMessagesSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "redis": RedisSettings,
            "failed_messages": FailedMessagesSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
