"""Failed message storage.

The repository is the only owner of persisted failed messages. It holds at
most one record per message id; adding a record for an id that is already
stored replaces it.

The protocol-based design allows multiple storage backends (in-memory, Redis).
"""

import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Protocol

from infrastructure.logging import get_module_logger
from infrastructure.resilience.failed_messages.models import FailedMessage

logger = get_module_logger()

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def snapshot_order(record: FailedMessage):
    """Sort key for snapshots: oldest failure first, then by id."""
    recorded_at = record.recorded_at or datetime.min.replace(tzinfo=timezone.utc)
    if recorded_at.tzinfo is None:
        recorded_at = recorded_at.replace(tzinfo=timezone.utc)
    return (recorded_at, record.id)


class FailedMessagesRepository(Protocol):
    """Storage interface for failed messages.

    Implementations must persist synchronously: ``add`` returns only once the
    record is stored and raises FailedMessagesStorageError otherwise.

    Methods:
        add: Store a record, replacing any record with the same id
        remove: Delete the stored record for a failed attempt
        all: Snapshot of stored records
        exists: Whether a record is stored for an id
        find: Stored record for an id
        count: Number of stored records
        flush: Delete every stored record
    """

    def add(self, record: FailedMessage) -> FailedMessage:
        """Store a record and return it stamped with its storage time.

        Args:
            record: FailedMessage to store

        Returns:
            The stored record, with recorded_at set
        """
        ...

    def remove(self, record: FailedMessage) -> None:
        """Delete the stored record for `record.id`.

        Removing an absent id is a no-op. When `record` was stored (it
        carries a recorded_at), a stored record from a different attempt (a
        newer failure of the same message) is left untouched, even if both
        were stored at the same instant.

        Args:
            record: FailedMessage to remove
        """
        ...

    def all(self) -> List[FailedMessage]:
        """Return a snapshot of stored records, oldest first."""
        ...

    def exists(self, message_id: str) -> bool:
        ...

    def find(self, message_id: str) -> Optional[FailedMessage]:
        ...

    def count(self) -> int:
        ...

    def flush(self) -> None:
        ...


class InMemoryFailedMessagesRepository:
    """In-memory implementation of FailedMessagesRepository.

    Thread-safe and suitable for single-process deployments, development and
    tests. Records do not survive a restart; use the Redis repository when
    failures must be shared between consumers.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        """Initialize the in-memory repository.

        Args:
            clock: Optional callable returning the current time. Defaults to
                the UTC wall clock.
        """
        self._records: Dict[str, FailedMessage] = {}
        self._lock = threading.Lock()
        self._clock = clock or utcnow

    def add(self, record: FailedMessage) -> FailedMessage:
        stored = record.stamped(self._clock())
        with self._lock:
            replaced = record.id in self._records
            self._records[record.id] = stored

        logger.info(
            "failed_message_added",
            message_id=stored.id,
            stream=stored.stream,
            receiver=stored.receiver,
            replaced=replaced,
        )
        return stored

    def remove(self, record: FailedMessage) -> None:
        with self._lock:
            current = self._records.get(record.id)
            if current is None:
                return
            if not record.is_same_attempt(current):
                logger.debug(
                    "failed_message_remove_skipped_newer_record",
                    message_id=record.id,
                )
                return
            del self._records[record.id]

        logger.info("failed_message_removed", message_id=record.id)

    def all(self) -> List[FailedMessage]:
        with self._lock:
            records = list(self._records.values())
        return sorted(records, key=snapshot_order)

    def exists(self, message_id: str) -> bool:
        with self._lock:
            return message_id in self._records

    def find(self, message_id: str) -> Optional[FailedMessage]:
        with self._lock:
            return self._records.get(message_id)

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def flush(self) -> None:
        with self._lock:
            flushed = len(self._records)
            self._records.clear()
        logger.info("failed_messages_flushed", count=flushed)
