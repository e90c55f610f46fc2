"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    RedisSettings: Redis connection settings
    FailedMessagesSettings: Failed message storage settings

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    redis_host = settings.redis.REDIS_HOST
    backend = settings.failed_messages.backend
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.integrations import RedisSettings
from infrastructure.configuration.infrastructure import FailedMessagesSettings

__all__ = ["Settings", "RedisSettings", "FailedMessagesSettings"]
