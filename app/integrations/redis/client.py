"""Redis client for the stream log and failed message storage.

Builds a single Redis client over a shared connection pool. The client is
created on first use and pinged so a misconfigured server fails fast.

Usage:
    from integrations.redis import get_redis_client

    client = get_redis_client()
    client.xrange("orders.created", min="-", max="+", count=10)
"""

from typing import TYPE_CHECKING, Optional

from redis import ConnectionPool, Redis, RedisError  # type: ignore
from redis.exceptions import ConnectionError, TimeoutError  # type: ignore

from infrastructure.logging import get_module_logger

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()

# Global connection pool (initialized on first use)
_connection_pool: Optional[ConnectionPool] = None
_redis_client: Optional[Redis] = None


def get_redis_client(settings: Optional["Settings"] = None) -> Redis:
    """Get or create the Redis client with connection pooling.

    Args:
        settings: Optional Settings instance. Defaults to the application
            settings from the provider.

    Returns:
        Redis: Redis client instance with connection pooling

    Raises:
        ConnectionError: If unable to connect to Redis
    """
    global _connection_pool, _redis_client

    if _redis_client is not None:
        return _redis_client

    if settings is None:
        from infrastructure.services.providers import get_settings

        settings = get_settings()

    redis_settings = settings.redis

    try:
        if _connection_pool is None:
            _connection_pool = ConnectionPool(
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
                db=redis_settings.REDIS_DB,
                password=redis_settings.REDIS_PASSWORD,
                decode_responses=True,  # Auto-decode bytes to strings
                max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
                socket_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
                socket_connect_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
                retry_on_timeout=True,
                health_check_interval=30,
            )
            logger.info(
                "redis_connection_pool_created",
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
                db=redis_settings.REDIS_DB,
            )

        client = Redis(connection_pool=_connection_pool)
        client.ping()
        logger.info("redis_client_connected")

        _redis_client = client
        return _redis_client

    except (ConnectionError, TimeoutError, RedisError) as e:
        logger.error(
            "redis_connection_failed",
            error=str(e),
            host=redis_settings.REDIS_HOST,
        )
        raise


def reset_redis_client() -> None:
    """Drop the cached client and pool so the next call reconnects."""
    global _connection_pool, _redis_client

    if _connection_pool is not None:
        _connection_pool.disconnect()
    _connection_pool = None
    _redis_client = None
