"""
Label distributions over filtered sets.

Counts can come from the store (GROUP BY pushed down) or from rows already
in memory; both end in distribution_from_counts so ordering and ratios are
computed the same way.
"""
from collections import Counter
from typing import Callable, Iterable, Mapping, Optional, TypeVar

from app.schemas.common import DistributionEntry

T = TypeVar("T")


def distribution_from_counts(counts: Mapping[str, int]) -> list[DistributionEntry]:
    """
    Turn label counts into distribution entries.

    Ratios are taken against the sum of counts. Entries are ordered by count
    descending, then label ascending. Labels with no members are dropped,
    and an empty total gives an empty list.
    """
    observed = {label: count for label, count in counts.items() if count and count > 0}
    total = sum(observed.values())
    if total == 0:
        return []

    ordered = sorted(observed.items(), key=lambda item: (-item[1], item[0]))
    return [
        DistributionEntry(label=label, count=count, ratio=count / total)
        for label, count in ordered
    ]


def distribute(items: Iterable[T], key: Callable[[T], Optional[str]]) -> list[DistributionEntry]:
    """Single-label group-by: each item counts once under key(item)."""
    counts = Counter(label for label in map(key, items) if label is not None)
    return distribution_from_counts(counts)


def distribute_many(
    items: Iterable[T],
    keys: Callable[[T], Iterable[str]],
) -> list[DistributionEntry]:
    """
    Multi-label group-by: each item counts once under every label it has.

    Ratios are therefore relative to the number of memberships, not to the
    number of items.
    """
    counts: Counter[str] = Counter()
    for item in items:
        counts.update(set(keys(item)))
    return distribution_from_counts(counts)
