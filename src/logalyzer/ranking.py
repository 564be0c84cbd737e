"""Ranking of accumulated hit counts."""

from dataclasses import dataclass

from logalyzer.accumulator import RankedEntry


@dataclass
class RankingResult:
    """Entries ordered by descending count, plus the biggest entry.

    The order among entries with equal counts is not guaranteed; callers
    must not rely on it.
    """

    entries: list[RankedEntry]
    biggest: RankedEntry | None


def rank(entries: list[RankedEntry]) -> RankingResult:
    """Sort entries by descending count and find the one with most hits.

    Args:
        entries: Snapshot taken from an Accumulator.

    Returns:
        RankingResult; biggest is the first entry seen with the maximum
        count, or None when there are no entries.
    """
    biggest = None
    for entry in entries:
        if biggest is None or entry.count > biggest.count:
            biggest = entry

    ranked = sorted(entries, key=lambda entry: entry.count, reverse=True)
    return RankingResult(entries=ranked, biggest=biggest)
