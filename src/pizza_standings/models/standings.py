"""Leaderboard output types.

These are derived values: they are rebuilt on every engine run and never
stored.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass(frozen=True, kw_only=True)
class LeaderboardEntry:
    """One restaurant's representative rating in a category.

    Attributes:
        restaurant_id: Restaurant identifier.
        restaurant_name: Display name used in leaderboard links.
        restaurant_slug: Optional URL slug.
        rating: Best single rating achieved in the category.
        category: Category key the entry belongs to.
        item_name: Pizza order text for per-pizza entries.
        visit_date: ISO date of the visit that achieved the rating.
    """

    restaurant_id: str
    restaurant_name: str
    restaurant_slug: str | None = None
    rating: float
    category: str
    item_name: str | None = None
    visit_date: str | None = None


@dataclass(frozen=True, kw_only=True)
class RankedEntry(LeaderboardEntry):
    """A leaderboard entry with its competition rank."""

    rank: int
    is_tied: bool = False

    @classmethod
    def from_entry(cls, entry: LeaderboardEntry, rank: int, is_tied: bool) -> RankedEntry:
        base = {f.name: getattr(entry, f.name) for f in fields(LeaderboardEntry)}
        return cls(**base, rank=rank, is_tied=is_tied)

    @property
    def rank_label(self) -> str:
        """Rank as shown in tables: ``T-2`` for a shared rank."""
        return f"T-{self.rank}" if self.is_tied else str(self.rank)


@dataclass(frozen=True)
class Leaderboard:
    """A ranked list of entries for one rating category."""

    title: str
    category: str
    entries: tuple[RankedEntry, ...] = ()
    description: str | None = None

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "entries": [asdict(e) for e in self.entries],
        }


@dataclass(frozen=True)
class StandingsData:
    """The full leaderboard bundle produced from one snapshot.

    The headline leaderboards are always present, possibly empty. The list
    families only hold leaderboards with at least one entry.
    """

    overall: Leaderboard
    pizza_overall: Leaderboard
    pizza_components: tuple[Leaderboard, ...] = ()
    other_stuff: tuple[Leaderboard, ...] = ()
    same_named_pizzas: tuple[Leaderboard, ...] = ()
    restaurant_count: int = 0

    def all_leaderboards(self) -> list[Leaderboard]:
        """Every leaderboard in display order."""
        return [
            self.overall,
            self.pizza_overall,
            *self.pizza_components,
            *self.other_stuff,
            *self.same_named_pizzas,
        ]

    def get(self, category: str) -> Leaderboard | None:
        """Find a leaderboard in the bundle by category key."""
        for leaderboard in self.all_leaderboards():
            if leaderboard.category == category:
                return leaderboard
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall.to_dict(),
            "pizzaOverall": self.pizza_overall.to_dict(),
            "pizzaComponents": [lb.to_dict() for lb in self.pizza_components],
            "otherStuff": [lb.to_dict() for lb in self.other_stuff],
            "sameNamedPizzas": [lb.to_dict() for lb in self.same_named_pizzas],
        }
