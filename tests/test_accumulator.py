"""Tests for the hit accumulator and ranking."""

import random

from logalyzer.accumulator import Accumulator, RankedEntry
from logalyzer.ranking import rank


class TestAccumulator:
    def setup_method(self):
        self.accumulator = Accumulator()

    def test_starts_empty(self):
        assert len(self.accumulator) == 0
        assert self.accumulator.total == 0
        assert self.accumulator.snapshot_and_reset() == []

    def test_increment(self):
        for key in ['/a', '/b', '/a']:
            self.accumulator.increment(key)
        assert len(self.accumulator) == 2
        assert self.accumulator.total == 3

    def test_snapshot_in_encounter_order(self):
        for key in ['/b', '/a', '/b', '/c']:
            self.accumulator.increment(key)
        assert self.accumulator.snapshot_and_reset() == [
            RankedEntry('/b', 2),
            RankedEntry('/a', 1),
            RankedEntry('/c', 1),
        ]

    def test_snapshot_resets(self):
        self.accumulator.increment('/a')
        self.accumulator.snapshot_and_reset()
        assert len(self.accumulator) == 0
        assert self.accumulator.total == 0
        self.accumulator.increment('/a')
        assert self.accumulator.snapshot_and_reset() == [RankedEntry('/a', 1)]

    def test_count_conservation(self):
        rng = random.Random(7)
        keys = [f'/page/{rng.randint(0, 30)}' for _ in range(1000)]
        for key in keys:
            self.accumulator.increment(key)
        snapshot = self.accumulator.snapshot_and_reset()
        assert sum(entry.count for entry in snapshot) == len(keys)
        assert len(snapshot) == len(set(keys))


class TestRank:
    def test_empty(self):
        result = rank([])
        assert result.entries == []
        assert result.biggest is None

    def test_descending_by_count(self):
        entries = [RankedEntry('/a', 1), RankedEntry('/b', 5), RankedEntry('/c', 3)]
        result = rank(entries)
        assert [entry.key for entry in result.entries] == ['/b', '/c', '/a']

    def test_non_increasing_with_ties(self):
        rng = random.Random(3)
        entries = [RankedEntry(f'/k{i}', rng.randint(1, 5)) for i in range(200)]
        counts = [entry.count for entry in rank(entries).entries]
        assert all(first >= second for first, second in zip(counts, counts[1:]))
        assert sorted(counts, reverse=True) == counts

    def test_keeps_all_entries(self):
        entries = [RankedEntry('/a', 2), RankedEntry('/b', 2), RankedEntry('/c', 1)]
        assert sorted(rank(entries).entries, key=lambda e: e.key) == entries

    def test_biggest(self):
        entries = [RankedEntry('/a', 1), RankedEntry('/b', 9), RankedEntry('/c', 3)]
        assert rank(entries).biggest == RankedEntry('/b', 9)

    def test_biggest_with_tie_has_max_count(self):
        entries = [RankedEntry('/a', 4), RankedEntry('/b', 4), RankedEntry('/c', 1)]
        biggest = rank(entries).biggest
        assert biggest.count == 4
        assert biggest.key in {'/a', '/b'}

    def test_does_not_mutate_input(self):
        entries = [RankedEntry('/a', 1), RankedEntry('/b', 2)]
        rank(entries)
        assert entries == [RankedEntry('/a', 1), RankedEntry('/b', 2)]
