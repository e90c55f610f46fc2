"""Redis integration: shared client and stream log."""

from integrations.redis.client import get_redis_client, reset_redis_client
from integrations.redis.streams import RedisStreamLog

__all__ = [
    "get_redis_client",
    "reset_redis_client",
    "RedisStreamLog",
]
