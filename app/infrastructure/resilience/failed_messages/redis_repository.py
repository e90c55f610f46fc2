"""Redis-backed failed messages repository for multi-instance deployments.

Storage layout:
    One hash (default key "streamer:failed_messages").
    Field: message id. Value: the record as flat JSON
    {"id", "stream", "receiver", "error", "date", "attempt"}.

Every write is a single Redis command, so concurrent writers cannot corrupt
the hash. Removal of a stored record is a compare-and-delete executed as a
Lua script: the field is only deleted while it still holds the same attempt.
Entries that are not valid JSON objects are deleted.
"""

from typing import Callable, List, Optional

from redis import Redis, RedisError  # type: ignore

from infrastructure.logging import get_module_logger
from infrastructure.resilience.failed_messages.exceptions import (
    FailedMessagesStorageError,
)
from infrastructure.resilience.failed_messages.models import FailedMessage
from infrastructure.resilience.failed_messages.repository import (
    Clock,
    snapshot_order,
    utcnow,
)

logger = get_module_logger()

DEFAULT_KEY = "streamer:failed_messages"

# KEYS[1] = hash key, ARGV[1] = message id, ARGV[2] = expected attempt ("" for
# records stored without one), ARGV[3] = expected "date"
REMOVE_IF_SAME_ATTEMPT = """
local current = redis.call('HGET', KEYS[1], ARGV[1])
if not current then
    return 0
end
local ok, stored = pcall(cjson.decode, current)
if ok and type(stored) == 'table' then
    local attempt = stored['attempt']
    if type(attempt) ~= 'string' then
        attempt = ''
    end
    if attempt ~= ARGV[2] then
        return 0
    end
    if attempt == '' and stored['date'] ~= ARGV[3] then
        return 0
    end
end
return redis.call('HDEL', KEYS[1], ARGV[1])
"""


class RedisFailedMessagesRepository:
    """Redis hash implementation of FailedMessagesRepository.

    Args:
        client: Redis client (decode_responses=True)
        key: Hash key holding the records
        clock: Optional callable returning the current time
    """

    def __init__(
        self,
        client: Redis,
        key: str = DEFAULT_KEY,
        clock: Clock | None = None,
    ) -> None:
        self.client = client
        self.key = key
        self._clock = clock or utcnow
        self._remove_if_same_attempt = client.register_script(REMOVE_IF_SAME_ATTEMPT)

        logger.info("redis_failed_messages_repository_initialized", key=key)

    def add(self, record: FailedMessage) -> FailedMessage:
        """Store a record in the hash.

        Raises:
            FailedMessagesStorageError: If Redis does not accept the write
        """
        stored = record.stamped(self._clock())
        self._execute(
            "add",
            lambda: self.client.hset(self.key, stored.id, stored.to_json()),
            message_id=stored.id,
        )

        logger.info(
            "failed_message_added",
            message_id=stored.id,
            stream=stored.stream,
            receiver=stored.receiver,
        )
        return stored

    def remove(self, record: FailedMessage) -> None:
        if record.recorded_at is None:
            removed = self._execute(
                "remove",
                lambda: self.client.hdel(self.key, record.id),
                message_id=record.id,
            )
        else:
            removed = self._execute(
                "remove",
                lambda: self._remove_if_same_attempt(
                    keys=[self.key],
                    args=[
                        record.id,
                        record.attempt or "",
                        record.recorded_at.isoformat(),
                    ],
                ),
                message_id=record.id,
            )

        if removed:
            logger.info("failed_message_removed", message_id=record.id)
        else:
            logger.debug("failed_message_remove_noop", message_id=record.id)

    def all(self) -> List[FailedMessage]:
        raw_records = self._execute("all", lambda: self.client.hgetall(self.key))

        records = []
        for message_id, raw in raw_records.items():
            try:
                records.append(FailedMessage.from_json(raw))
            except ValueError as e:
                # Left in place so an operator can inspect or flush it
                logger.warning(
                    "failed_message_unreadable",
                    message_id=message_id,
                    error=str(e),
                )

        return sorted(records, key=snapshot_order)

    def exists(self, message_id: str) -> bool:
        return bool(
            self._execute(
                "exists",
                lambda: self.client.hexists(self.key, message_id),
                message_id=message_id,
            )
        )

    def find(self, message_id: str) -> Optional[FailedMessage]:
        raw = self._execute(
            "find",
            lambda: self.client.hget(self.key, message_id),
            message_id=message_id,
        )
        if raw is None:
            return None
        try:
            return FailedMessage.from_json(raw)
        except ValueError as e:
            logger.warning(
                "failed_message_unreadable",
                message_id=message_id,
                error=str(e),
            )
            return None

    def count(self) -> int:
        return int(self._execute("count", lambda: self.client.hlen(self.key)))

    def flush(self) -> None:
        self._execute("flush", lambda: self.client.delete(self.key))
        logger.info("failed_messages_flushed", key=self.key)

    def _execute(self, operation: str, command: Callable, **context):
        """Run a Redis command, converting client errors to storage errors."""
        try:
            return command()
        except RedisError as e:
            logger.error(
                "redis_failed_messages_operation_failed",
                operation=operation,
                key=self.key,
                error=str(e),
                **context,
            )
            raise FailedMessagesStorageError(
                f"Failed to {operation} failed messages in {self.key}: {e}"
            ) from e
