"""Standings engine: restaurant snapshot -> full leaderboard bundle.

A pure computation. Every call validates the snapshot, rebuilds all
entries from scratch and returns new objects; the input is never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from pizza_standings.core.config import DEFAULT_SAME_NAMED_MIN_RESTAURANTS
from pizza_standings.core.errors import UnknownCategoryError
from pizza_standings.models.categories import (
    HEADLINE_TITLES,
    OVERALL,
    PIZZA_ITEM,
    PIZZA_OVERALL,
    OtherStuff,
    ParentCategory,
    PizzaComponent,
    RatingCategory,
    lookup_category,
    vocabulary_for,
)
from pizza_standings.models.restaurant import load_restaurants
from pizza_standings.models.standings import Leaderboard, RankedEntry, StandingsData
from pizza_standings.ranking import rank_entries
from pizza_standings.services.standings.collector import CollectedEntries, collect_best_entries
from pizza_standings.services.standings.dishes import build_same_named_leaderboards
from pizza_standings.services.standings.normalizer import normalize_ratings

logger = structlog.get_logger()


def _headline(collected: CollectedEntries, category: str) -> Leaderboard:
    title, description = HEADLINE_TITLES[category]
    return Leaderboard(
        title=title,
        category=category,
        entries=rank_entries(collected.categories.get(category, [])),
        description=description,
    )


def _vocabulary_leaderboard(collected: CollectedEntries, member: RatingCategory) -> Leaderboard:
    return Leaderboard(
        title=member.label,
        category=member.value,
        entries=rank_entries(collected.categories.get(member.value, [])),
    )


def _vocabulary_family(
    collected: CollectedEntries, vocabulary: Iterable[RatingCategory]
) -> tuple[Leaderboard, ...]:
    leaderboards = (_vocabulary_leaderboard(collected, member) for member in vocabulary)
    return tuple(lb for lb in leaderboards if not lb.is_empty)


def build_standings(
    restaurants: Any,
    *,
    min_same_named_restaurants: int = DEFAULT_SAME_NAMED_MIN_RESTAURANTS,
) -> StandingsData:
    """Build every leaderboard from a complete restaurant snapshot.

    Args:
        restaurants: List of ``Restaurant`` models or raw restaurant mappings,
            each with embedded visits.
        min_same_named_restaurants: Fewest distinct restaurants a dish must
            appear at to get a same-named leaderboard.

    Returns:
        StandingsData with the overall and pizza-overall leaderboards (always
        present) and the non-empty component, other-stuff and same-named
        leaderboards.

    Raises:
        SnapshotError: If ``restaurants`` is not a list.
    """
    loaded = load_restaurants(restaurants)
    collected = collect_best_entries(loaded)

    standings = StandingsData(
        overall=_headline(collected, OVERALL),
        pizza_overall=_headline(collected, PIZZA_OVERALL),
        pizza_components=_vocabulary_family(collected, PizzaComponent),
        other_stuff=_vocabulary_family(collected, OtherStuff),
        same_named_pizzas=build_same_named_leaderboards(
            collected.dishes, min_same_named_restaurants
        ),
        restaurant_count=len(loaded),
    )
    logger.debug(
        "standings_built",
        restaurants=len(loaded),
        leaderboards=len(standings.all_leaderboards()),
        same_named=len(standings.same_named_pizzas),
    )
    return standings


def build_leaderboard(
    restaurants: Any,
    category: str,
    *,
    min_same_named_restaurants: int = DEFAULT_SAME_NAMED_MIN_RESTAURANTS,
) -> Leaderboard:
    """Build the single leaderboard for one category.

    Args:
        restaurants: Same snapshot ``build_standings`` accepts.
        category: ``overall``, ``pizzaOverall``, a component or other-stuff
            key (e.g. ``crust``, ``wait-staff``), or a same-named dish key
            (e.g. ``pizza:pepperoni+sausage``).
        min_same_named_restaurants: Threshold for dish leaderboards.

    Returns:
        The ranked leaderboard. Headline and vocabulary categories may come
        back empty.

    Raises:
        UnknownCategoryError: If the category is not a known key, or is a
            dish key with no same-named leaderboard.
        SnapshotError: If ``restaurants`` is not a list.
    """
    if category.startswith(f"{PIZZA_ITEM}:"):
        standings = build_standings(
            restaurants, min_same_named_restaurants=min_same_named_restaurants
        )
        leaderboard = standings.get(category)
        if leaderboard is None:
            raise UnknownCategoryError(category)
        return leaderboard

    resolved = lookup_category(category)
    if resolved is None:
        raise UnknownCategoryError(category)

    collected = collect_best_entries(load_restaurants(restaurants))
    if isinstance(resolved, RatingCategory):
        return _vocabulary_leaderboard(collected, resolved)
    return _headline(collected, resolved)


def entries_for_category(
    restaurants: Any,
    category: str,
    *,
    min_same_named_restaurants: int = DEFAULT_SAME_NAMED_MIN_RESTAURANTS,
) -> tuple[RankedEntry, ...]:
    """Ranked entries for one category; see ``build_leaderboard``."""
    return build_leaderboard(
        restaurants, category, min_same_named_restaurants=min_same_named_restaurants
    ).entries


def discover_available_categories(restaurants: Any) -> dict[str, list[str]]:
    """List the component and other-stuff categories rated anywhere in the data.

    Keys outside the vocabularies are ignored (and logged at debug level).

    Returns:
        ``{"pizza_components": [...], "other_stuff": [...]}`` in vocabulary order.
    """
    found: dict[ParentCategory, set[RatingCategory]] = {p: set() for p in ParentCategory}
    unknown: set[str] = set()

    for restaurant in load_restaurants(restaurants):
        for visit in restaurant.visits:
            nested = normalize_ratings(visit.ratings)
            for parent in ParentCategory:
                vocabulary = vocabulary_for(parent)
                for key in nested.section(parent):
                    member = vocabulary.parse(key)
                    if member is None:
                        unknown.add(key)
                    else:
                        found[parent].add(member)

    if unknown:
        logger.debug("ignored_rating_keys", keys=sorted(unknown))

    def in_order(parent: ParentCategory) -> list[str]:
        return [m.value for m in vocabulary_for(parent) if m in found[parent]]

    return {
        "pizza_components": in_order(ParentCategory.PIZZA_COMPONENTS),
        "other_stuff": in_order(ParentCategory.OTHER_STUFF),
    }
