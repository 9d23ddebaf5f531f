"""Mini README: In-memory record of ledger batches accepted this session.

Each accepted batch is placed in front of everything recorded before it,
keeping its own order. Nothing is trimmed or written to disk.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple

from ..ledger import LogEntry
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class HistoryLog:
    """Newest-first list of submitted ledger entries."""

    def __init__(self) -> None:
        self._entries: Tuple[LogEntry, ...] = ()

    def prepend(self, batch: Iterable[LogEntry]) -> None:
        batch = tuple(batch)
        self._entries = batch + self._entries
        LOGGER.debug("History now holds %s entries", len(self._entries))

    def entries(self) -> Tuple[LogEntry, ...]:
        return self._entries

    def as_dicts(self) -> List[Dict[str, object]]:
        return [entry.as_dict() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)
