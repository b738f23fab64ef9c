"""Entry collection and best-of-visits reduction."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field

from pizza_standings.models.categories import PIZZA_ITEM
from pizza_standings.models.restaurant import Restaurant
from pizza_standings.models.standings import LeaderboardEntry
from pizza_standings.services.standings.dishes import DishKey, dish_category, dish_identity
from pizza_standings.services.standings.extractor import extract_categories
from pizza_standings.services.standings.normalizer import normalize_ratings


@dataclass
class CollectedEntries:
    """Representative entries grouped for ranking.

    Attributes:
        categories: Headline, component and other-stuff entries by category key.
        dishes: Per-pizza entries by dish identity.
    """

    categories: dict[str, list[LeaderboardEntry]] = field(default_factory=dict)
    dishes: dict[DishKey, list[LeaderboardEntry]] = field(default_factory=dict)


def _date_order(entry: LeaderboardEntry) -> tuple[bool, str]:
    # ISO dates sort lexicographically; undated visits go last
    return (not entry.visit_date, entry.visit_date or "")


def is_better(candidate: LeaderboardEntry, current: LeaderboardEntry) -> bool:
    """Highest single rating wins; an exact tie goes to the earlier visit."""
    if candidate.rating != current.rating:
        return candidate.rating > current.rating
    return _date_order(candidate) < _date_order(current)


def collect_best_entries(restaurants: Sequence[Restaurant]) -> CollectedEntries:
    """Reduce every restaurant's visits to one entry per category.

    Restaurants are walked in case-insensitive name order, which becomes the
    display order of tied entries. Per-pizza entries are grouped by dish
    identity, so one restaurant keeps one entry per distinct dish.

    Args:
        restaurants: Validated restaurants with their visits.

    Returns:
        CollectedEntries holding at most one entry per (restaurant, category)
        and per (restaurant, dish).
    """
    best: dict[tuple[str, str, DishKey], LeaderboardEntry] = {}

    for restaurant in sorted(restaurants, key=lambda r: r.sort_key):
        for visit in restaurant.visits:
            for datum in extract_categories(normalize_ratings(visit.ratings)):
                dish: DishKey = ()
                category = datum.category
                if category == PIZZA_ITEM:
                    dish = dish_identity(datum.item_name or "")
                    if not dish:
                        continue
                    category = dish_category(dish)

                candidate = LeaderboardEntry(
                    restaurant_id=restaurant.id,
                    restaurant_name=restaurant.name,
                    restaurant_slug=restaurant.slug,
                    rating=datum.value,
                    category=category,
                    item_name=datum.item_name,
                    visit_date=visit.date or None,
                )
                group = (restaurant.id, category, dish)
                current = best.get(group)
                if current is None or is_better(candidate, current):
                    best[group] = candidate

    categories: dict[str, list[LeaderboardEntry]] = defaultdict(list)
    dishes: dict[DishKey, list[LeaderboardEntry]] = defaultdict(list)
    for (_, category, dish), entry in best.items():
        if dish:
            dishes[dish].append(entry)
        else:
            categories[category].append(entry)

    return CollectedEntries(categories=dict(categories), dishes=dict(dishes))
