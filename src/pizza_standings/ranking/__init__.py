"""Ranking module for Pizza Standings.

Converts per-category representative entries into tie-aware leaderboards.
"""

from pizza_standings.ranking.competition import competition_ranks, rank_entries

__all__ = [
    "competition_ranks",
    "rank_entries",
]
