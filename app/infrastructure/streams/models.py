"""Stream message models.

ReceivedMessage is the transient value handed to a receiver for one
processing attempt. Range is the inclusive id window used to read entries
back from a stream.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

# (message id, content) as returned by the stream log
StreamEntry = Tuple[str, Dict[str, Any]]


@dataclass(frozen=True)
class Range:
    """Inclusive range of stream ids.

    Redis accepts "-" and "+" as the lowest and highest possible ids.
    A range whose start equals its stop is a point lookup.
    """

    start: str = "-"
    stop: str = "+"

    @classmethod
    def single(cls, message_id: str) -> "Range":
        return cls(start=message_id, stop=message_id)


@dataclass(frozen=True)
class ReceivedMessage:
    """A message delivered to a receiver.

    Attributes:
        id: Stream-assigned id ("<milliseconds>-<sequence>")
        content: Raw entry fields, normally "name" and a JSON "data" payload
    """

    id: str
    content: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("id is required")

    @property
    def name(self) -> str:
        """Event name carried by the message, or an empty string."""
        if not isinstance(self.content, Mapping):
            return ""
        name = self.content.get("name")
        return name if isinstance(name, str) else ""

    @property
    def data(self) -> Optional[Any]:
        """Decoded "data" payload.

        Returns None when the payload is absent and the raw value when it
        is not valid JSON.
        """
        if not isinstance(self.content, Mapping):
            return None
        raw = self.content.get("data")
        if raw is None:
            return None
        if not isinstance(raw, (str, bytes, bytearray)):
            return raw
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return raw
