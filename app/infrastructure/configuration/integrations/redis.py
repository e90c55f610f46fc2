"""Redis connection settings."""

from typing import Optional

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class RedisSettings(IntegrationSettings):
    """Connection settings for the Redis server hosting the streams.

    Environment Variables:
        REDIS_HOST: Redis hostname (default: localhost)
        REDIS_PORT: Redis port (default: 6379)
        REDIS_DB: Database index (default: 0)
        REDIS_PASSWORD: Optional password
        REDIS_SOCKET_TIMEOUT: Socket and connect timeout in seconds (default: 5)
        REDIS_MAX_CONNECTIONS: Connection pool size (default: 10)
    """

    REDIS_HOST: str = Field(default="localhost")
    REDIS_PORT: int = Field(default=6379)
    REDIS_DB: int = Field(default=0)
    REDIS_PASSWORD: Optional[str] = Field(default=None)
    REDIS_SOCKET_TIMEOUT: float = Field(default=5.0)
    REDIS_MAX_CONNECTIONS: int = Field(default=10)
