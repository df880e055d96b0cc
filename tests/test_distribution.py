"""Tests for distribution helpers."""

import pytest

from app.utils.distribution import distribute, distribute_many, distribution_from_counts


def as_tuples(entries):
    return [(entry.label, entry.count, entry.ratio) for entry in entries]


class TestDistributionFromCounts:
    def test_even_split(self):
        entries = distribution_from_counts({"Cheerful": 5, "Calm": 5})
        assert as_tuples(entries) == [("Calm", 5, 0.5), ("Cheerful", 5, 0.5)]

    def test_empty(self):
        assert distribution_from_counts({}) == []

    def test_zero_counts_dropped(self):
        entries = distribution_from_counts({"pop": 3, "jazz": 0})
        assert as_tuples(entries) == [("pop", 3, 1.0)]

    def test_ordered_by_count_then_label(self):
        entries = distribution_from_counts({"b": 1, "a": 1, "c": 4, "d": 2})
        assert [entry.label for entry in entries] == ["c", "d", "a", "b"]

    @pytest.mark.parametrize(
        "counts",
        [
            {"x": 1},
            {"x": 1, "y": 2, "z": 3},
            {f"label {i}": i + 1 for i in range(17)},
        ],
    )
    def test_ratios_sum_to_one(self, counts):
        entries = distribution_from_counts(counts)
        assert sum(entry.ratio for entry in entries) == pytest.approx(1.0)
        assert sum(entry.count for entry in entries) == sum(counts.values())
        assert all(0 < entry.ratio <= 1 for entry in entries)


class TestDistribute:
    def test_single_label(self):
        items = ["Calm", "Calm", "Tense", "Calm"]
        assert as_tuples(distribute(items, lambda item: item)) == [
            ("Calm", 3, 0.75),
            ("Tense", 1, 0.25),
        ]

    def test_missing_key_skipped(self):
        items = [{"type": "album"}, {"type": None}, {"type": "single"}]
        entries = distribute(items, lambda item: item["type"])
        assert as_tuples(entries) == [("album", 1, 0.5), ("single", 1, 0.5)]

    def test_multi_label_counts_memberships(self):
        artists = [["pop", "rock"], ["pop"], ["jazz"]]
        assert as_tuples(distribute_many(artists, lambda genres: genres)) == [
            ("pop", 2, 0.5),
            ("jazz", 1, 0.25),
            ("rock", 1, 0.25),
        ]

    def test_multi_label_duplicates_count_once(self):
        entries = distribute_many([["pop", "pop"]], lambda genres: genres)
        assert as_tuples(entries) == [("pop", 1, 1.0)]

    def test_no_items(self):
        assert distribute_many([], lambda genres: genres) == []
