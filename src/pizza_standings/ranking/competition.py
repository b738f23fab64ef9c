"""Standard competition ranking ("1224") for leaderboards."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from pizza_standings.models.standings import LeaderboardEntry, RankedEntry


def competition_ranks(ratings: Sequence[float]) -> list[int]:
    """Assign competition ranks to ratings already sorted descending.

    Equal ratings share a rank; the next distinct rating is ranked one
    past the number of entries strictly above it.

    Args:
        ratings: Ratings sorted from highest to lowest.

    Returns:
        1-based ranks, one per rating.

    Example:
        >>> competition_ranks([5.0, 5.0, 4.0, 3.0])
        [1, 1, 3, 4]
    """
    ranks: list[int] = []
    for i, rating in enumerate(ratings):
        if i > 0 and rating == ratings[i - 1]:
            ranks.append(ranks[-1])
        else:
            ranks.append(i + 1)
    return ranks


def rank_entries(entries: Sequence[LeaderboardEntry]) -> tuple[RankedEntry, ...]:
    """Turn representative entries for one category into a ranked leaderboard.

    The sort is stable, so entries with equal ratings keep their input
    order. Ratings compare exactly; there is no tolerance.

    Args:
        entries: One entry per restaurant (or restaurant + dish).

    Returns:
        Ranked entries sorted by rating descending.
    """
    if not entries:
        return ()

    ordered = sorted(entries, key=lambda e: e.rating, reverse=True)
    ranks = competition_ranks([e.rating for e in ordered])
    counts = Counter(e.rating for e in ordered)

    return tuple(
        RankedEntry.from_entry(entry, rank=rank, is_tied=counts[entry.rating] > 1)
        for entry, rank in zip(ordered, ranks, strict=True)
    )
