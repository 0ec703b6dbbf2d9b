"""Process-wide high-score leaderboard."""

from __future__ import annotations

import bisect
import itertools
import logging
import threading
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    """A submitted score. ``seq`` records insertion order for stable ties."""

    name: str
    score: int
    seq: int = field(default=0, compare=False, repr=False)

    @property
    def sort_key(self) -> tuple[int, int]:
        return -self.score, self.seq

    def to_dict(self) -> dict:
        return {"name": self.name, "score": self.score}


class Leaderboard:
    """Ranked list of scores, highest first, ties in submission order.

    Entries are kept sorted on insert so reads never sort. A *capacity*
    bounds retained entries; by default every submission is kept.
    """

    def __init__(
        self,
        capacity: int | None = None,
        default_limit: int = 10,
    ) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be at least 1.")
        if default_limit < 1:
            raise ValueError("default_limit must be at least 1.")
        self.capacity = capacity
        self.default_limit = default_limit
        self._entries: list[LeaderboardEntry] = []
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def submit(self, name: str, score: int) -> int | None:
        """Insert a score and return its 1-based rank.

        Returns ``None`` when the leaderboard is full and the entry ranks
        below every retained one.
        """
        with self._lock:
            entry = LeaderboardEntry(name=name, score=score, seq=next(self._counter))
            index = bisect.bisect_left(
                self._entries, entry.sort_key, key=lambda e: e.sort_key,
            )
            self._entries.insert(index, entry)
            if self.capacity is not None and len(self._entries) > self.capacity:
                del self._entries[self.capacity:]
            rank = index + 1 if index < len(self._entries) else None

        logger.info("Score %d submitted by %r (rank %s).", score, name, rank)
        return rank

    def top(self, n: int | None = None) -> list[LeaderboardEntry]:
        """Return up to *n* entries, best first."""
        limit = self.default_limit if n is None else n
        if limit < 0:
            raise ValueError("n must be >= 0.")
        with self._lock:
            return self._entries[:limit]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
