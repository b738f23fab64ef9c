"""Category extractor: the leaderboard data carried by one rating record."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from pizza_standings.models.categories import (
    OVERALL,
    PIZZA_ITEM,
    PIZZA_OVERALL,
    ParentCategory,
    vocabulary_for,
)
from pizza_standings.models.ratings import NestedRatings


@dataclass(frozen=True)
class CategoryDatum:
    """A single usable score pulled out of a record.

    Attributes:
        category: Category key (``overall``, ``pizzaOverall``, a vocabulary
            value, or ``pizza`` for per-pizza scores).
        value: The score.
        item_name: Raw order text for per-pizza data.
    """

    category: str
    value: float
    item_name: str | None = None


def pizza_overall(ratings: NestedRatings) -> float | None:
    """Explicit pizza-overall score, else the mean of the rated pizzas.

    The computed mean is rounded to two decimals. No rated pizzas means no
    score, not zero. An explicit score of zero or below counts as unset, so
    the mean is used instead.
    """
    if ratings.pizza_overall is not None:
        return ratings.pizza_overall
    scores = [p.rating for p in ratings.pizzas if p.rating is not None]
    if not scores:
        return None
    return round(sum(scores) / len(scores), 2)


def extract_categories(ratings: NestedRatings) -> Iterator[CategoryDatum]:
    """Yield every leaderboard datum present in a normalized record.

    Args:
        ratings: Canonical nested view of one visit's ratings.

    Yields:
        CategoryDatum for the overall and pizza-overall scores, each
        vocabulary component and other-stuff item, and each rated pizza.
    """
    if ratings.overall is not None:
        yield CategoryDatum(OVERALL, ratings.overall)

    pizza_score = pizza_overall(ratings)
    if pizza_score is not None:
        yield CategoryDatum(PIZZA_OVERALL, pizza_score)

    for parent in ParentCategory:
        vocabulary = vocabulary_for(parent)
        scores = {}
        for key, value in ratings.section(parent).items():
            member = vocabulary.parse(key)
            if member is not None:
                scores.setdefault(member, value)
        for member in vocabulary:
            if member in scores:
                yield CategoryDatum(member.value, scores[member])

    for pizza in ratings.pizzas:
        if pizza.rating is not None:
            yield CategoryDatum(PIZZA_ITEM, pizza.rating, item_name=pizza.order)
