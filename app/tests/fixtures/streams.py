"""In-memory stream log used in place of Redis streams."""

from typing import Any, Dict, List, Optional, Tuple

from infrastructure.streams import Range, StreamEntry


def _id_key(message_id: str) -> Tuple[int, int]:
    milliseconds, _, sequence = message_id.partition("-")
    return int(milliseconds), int(sequence or 0)


class FakeStreamLog:
    """Stream log backed by dictionaries.

    Ids must use the "<milliseconds>-<sequence>" format or be plain integers.
    """

    def __init__(self) -> None:
        self.streams: Dict[str, List[StreamEntry]] = {}
        self.reads: List[Tuple[str, Range, Optional[int]]] = []
        self.error: Optional[Exception] = None

    def append(self, stream: str, message_id: str, content: Dict[str, Any]) -> str:
        entries = self.streams.setdefault(stream, [])
        entries.append((message_id, dict(content)))
        entries.sort(key=lambda entry: _id_key(entry[0]))
        return message_id

    def trim(self, stream: str, message_id: str) -> None:
        self.streams[stream] = [
            entry for entry in self.streams.get(stream, []) if entry[0] != message_id
        ]

    def read_range(
        self, stream: str, id_range: Range, limit: int | None = None
    ) -> List[StreamEntry]:
        self.reads.append((stream, id_range, limit))
        if self.error is not None:
            raise self.error

        low = None if id_range.start == "-" else _id_key(id_range.start)
        high = None if id_range.stop == "+" else _id_key(id_range.stop)
        found = [
            (message_id, dict(content))
            for message_id, content in self.streams.get(stream, [])
            if (low is None or _id_key(message_id) >= low)
            and (high is None or _id_key(message_id) <= high)
        ]
        return found[:limit] if limit is not None else found
