"""Stream log interface."""

from typing import List, Protocol

from infrastructure.streams.models import Range, StreamEntry


class StreamLog(Protocol):
    """Read access to an append-only, id-ordered stream log.

    Implementations must support a range collapsed to a single id and a
    result count limit. Backend failures propagate to the caller.
    """

    def read_range(
        self, stream: str, id_range: Range, limit: int | None = None
    ) -> List[StreamEntry]:
        """Return entries of `stream` whose ids fall inside `id_range`.

        Args:
            stream: Logical stream name
            id_range: Inclusive id range
            limit: Maximum number of entries to return

        Returns:
            List of (id, content) tuples in id order
        """
        ...
