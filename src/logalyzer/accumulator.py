"""Streaming hit counter for one aggregation window."""

from collections import Counter
from dataclasses import dataclass


@dataclass(frozen=True)
class RankedEntry:
    """A classification key and its hit count, taken from a snapshot."""

    key: str
    count: int


class Accumulator:
    """Counts accepted lines per classification key.

    Counting and ranking never interleave: a window is read out with
    snapshot_and_reset(), which leaves the accumulator empty.
    """

    def __init__(self):
        self._hits: Counter[str] = Counter()
        self._total = 0

    def __len__(self) -> int:
        return len(self._hits)

    @property
    def total(self) -> int:
        """Lines counted since the last reset."""
        return self._total

    def increment(self, key: str) -> None:
        self._hits[key] += 1
        self._total += 1

    def snapshot_and_reset(self) -> list[RankedEntry]:
        """Return all (key, count) pairs in encounter order and start a new window."""
        hits = self._hits
        self._hits = Counter()
        self._total = 0
        return [RankedEntry(key, count) for key, count in hits.items()]
