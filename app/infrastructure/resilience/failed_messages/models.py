"""Failed message models.

FailedMessage is the durable record of one failed delivery. RetryOutcome and
RetryReport describe the result of retrying a batch of records.
"""

import json
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from infrastructure.resilience.failed_messages.exceptions import RetryFailedError


@dataclass(frozen=True)
class FailedMessage:
    """Record of a message that a receiver failed to handle.

    Records are immutable. A message that fails again is removed and a new
    record with the same id is added in its place.

    Fields:
        id: Stream-assigned id of the original message
        stream: Name of the stream (event) the message was read from
        receiver: Identity of the receiver that must handle the message
        error: Description of the failure
        recorded_at: When the repository stored the record; None until stored
        attempt: Token unique to one stored failure, set together with
            recorded_at. Two failures of the same message never share it,
            even when they are stored at the same instant.

    Persisted form (field names are stable, operator tooling reads them):
        {"id": ..., "stream": ..., "receiver": ..., "error": ..., "date": ...,
         "attempt": ...}
    """

    id: str
    stream: str
    receiver: str
    error: str
    recorded_at: Optional[datetime] = None
    attempt: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate required fields."""
        if not self.id:
            raise ValueError("id is required")
        if not self.receiver:
            raise ValueError("receiver is required")

    def stamped(self, recorded_at: datetime) -> "FailedMessage":
        """Copy of this record stored at `recorded_at`, as a new attempt."""
        return replace(self, recorded_at=recorded_at, attempt=uuid.uuid4().hex)

    def is_same_attempt(self, other: "FailedMessage") -> bool:
        """Whether both records describe the same stored failure.

        Records without a timestamp match any record with the same id.
        Stored records are told apart by their attempt token; the timestamp
        is only compared for records persisted without one.
        """
        if self.id != other.id:
            return False
        if self.recorded_at is None or other.recorded_at is None:
            return True
        if self.attempt is not None or other.attempt is not None:
            return self.attempt == other.attempt
        return self.recorded_at == other.recorded_at

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "stream": self.stream,
            "receiver": self.receiver,
            "error": self.error,
            "date": self.recorded_at.isoformat() if self.recorded_at else None,
            "attempt": self.attempt,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FailedMessage":
        """Deserialize a record from its persisted form.

        Raises:
            ValueError: If required fields are missing or invalid.
        """
        try:
            date = data.get("date")
            recorded_at = datetime.fromisoformat(date) if date else None
            return cls(
                id=str(data["id"]),
                stream=data.get("stream") or "",
                receiver=data["receiver"],
                error=data.get("error") or "",
                recorded_at=recorded_at,
                attempt=data.get("attempt") or None,
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid failed message data: {e}") from e

    @classmethod
    def from_json(cls, raw: str) -> "FailedMessage":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid failed message JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValueError("Invalid failed message data: expected an object")
        return cls.from_dict(data)


@dataclass(frozen=True)
class RetryOutcome:
    """Result of retrying a single failed message."""

    failed_message: FailedMessage
    error: Optional[RetryFailedError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class RetryReport:
    """Per-record outcomes of a bulk retry, in the order they were attempted."""

    outcomes: List[RetryOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[RetryOutcome]:
        return [outcome for outcome in self.outcomes if outcome.succeeded]

    @property
    def failed(self) -> List[RetryOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    def as_stats(self) -> Dict[str, int]:
        """Counts suitable for structured logging."""
        return {
            "processed": len(self.outcomes),
            "successful": len(self.succeeded),
            "failed": len(self.failed),
        }
