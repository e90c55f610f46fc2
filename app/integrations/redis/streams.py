"""Redis Streams implementation of the stream log."""

from typing import List, Optional

from redis import Redis, RedisError  # type: ignore

from infrastructure.logging import get_module_logger
from infrastructure.streams.models import Range, StreamEntry
from integrations.redis.client import get_redis_client

logger = get_module_logger()


class RedisStreamLog:
    """Reads entries from Redis streams with XRANGE.

    Each logical stream name maps to one Redis stream key, optionally
    prefixed. Errors from Redis are logged and re-raised unchanged.

    Args:
        client: Optional Redis client. Defaults to the shared client.
        prefix: Optional prefix prepended to every stream name.
    """

    def __init__(self, client: Optional[Redis] = None, prefix: str = "") -> None:
        self._client = client
        self.prefix = prefix

    @property
    def client(self) -> Redis:
        if self._client is None:
            self._client = get_redis_client()
        return self._client

    def stream_key(self, stream: str) -> str:
        return f"{self.prefix}{stream}"

    def read_range(
        self, stream: str, id_range: Range, limit: int | None = None
    ) -> List[StreamEntry]:
        key = self.stream_key(stream)
        try:
            entries = self.client.xrange(
                key, min=id_range.start, max=id_range.stop, count=limit
            )
        except RedisError as e:
            logger.error(
                "redis_stream_read_failed",
                stream=key,
                start=id_range.start,
                stop=id_range.stop,
                error=str(e),
            )
            raise

        logger.debug(
            "redis_stream_read",
            stream=key,
            start=id_range.start,
            stop=id_range.stop,
            count=len(entries),
        )
        return [(message_id, dict(content)) for message_id, content in entries]
