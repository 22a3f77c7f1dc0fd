"""In-memory request statistics.

Counts requests per URI. Fed by the HTTP middleware and read by the
``stats`` and ``status`` console commands.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class StatsService:
    """Thread-safe per-URI request counter."""

    def __init__(self) -> None:
        self._records: dict[str, int] = {}
        self._lock = threading.Lock()

    def record(self, uri: str) -> None:
        with self._lock:
            self._records[uri] = self._records.get(uri, 0) + 1

    def count_records(self) -> int:
        """Number of distinct URIs seen."""
        with self._lock:
            return len(self._records)

    def sum_records(self) -> int:
        """Total number of recorded requests."""
        with self._lock:
            return sum(self._records.values())

    def fetch_stats(self, predicate: Callable[[str, int], bool] | None = None) -> list[tuple[str, int]]:
        """Return matching (uri, count) pairs, most requested first."""
        with self._lock:
            items = list(self._records.items())
        if predicate is not None:
            items = [(uri, count) for uri, count in items if predicate(uri, count)]
        items.sort(key=lambda item: (-item[1], item[0]))
        return items

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
