"""Rating record shapes.

Two historical shapes exist in the data: the legacy *flat* mapping of
category -> score, and the *nested* structure with pizzas, appetizers and
the two sub-category sections. A stored record carries no tag, so the shape
is derived once here, at the loading boundary, and everything downstream
matches on ``FlatRatings`` / ``NestedRatings``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from pizza_standings.models.categories import (
    APPETIZERS_KEY,
    OVERALL,
    PIZZA_OVERALL,
    PIZZAS_KEY,
    ParentCategory,
)


def coerce_rating(value: Any) -> float | None:
    """Coerce a stored score to a float, or None when it is not a usable rating.

    Booleans, None, non-numeric strings, NaN and infinities are all absent.
    Scores of zero or below mean "not rated" and are absent too.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, int | float):
        return None
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        return None
    return number


@dataclass(frozen=True)
class ItemRating:
    """A rated pizza or appetizer from one visit.

    Attributes:
        order: Free-text order description as typed by the rater.
        rating: Score, or None when the stored value was unusable.
    """

    order: str
    rating: float | None = None


@dataclass(frozen=True)
class FlatRatings:
    """Legacy flat record: category key -> score (unusable scores dropped)."""

    scores: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class NestedRatings:
    """Nested record with structured sub-categories.

    Section mappings keep every key that carried a usable score; filtering
    against the closed vocabularies happens during extraction.
    """

    overall: float | None = None
    pizza_overall: float | None = None
    pizzas: tuple[ItemRating, ...] = ()
    appetizers: tuple[ItemRating, ...] = ()
    pizza_components: dict[str, float] = field(default_factory=dict)
    other_stuff: dict[str, float] = field(default_factory=dict)

    def section(self, parent: ParentCategory) -> dict[str, float]:
        """Return the score mapping for a nested section."""
        if parent is ParentCategory.PIZZA_COMPONENTS:
            return self.pizza_components
        return self.other_stuff


RatingRecord: TypeAlias = FlatRatings | NestedRatings


def is_nested(raw: Mapping[str, Any]) -> bool:
    """A record is nested iff at least one value is an object or array."""
    return any(isinstance(value, Mapping | list | tuple) for value in raw.values())


def _parse_items(raw: Any) -> tuple[ItemRating, ...]:
    if not isinstance(raw, list | tuple):
        return ()
    items = []
    for element in raw:
        if not isinstance(element, Mapping):
            continue
        order = element.get("order")
        items.append(
            ItemRating(
                order="" if order is None else str(order),
                rating=coerce_rating(element.get("rating")),
            )
        )
    return tuple(items)


def _parse_section(raw: Any) -> dict[str, float]:
    if not isinstance(raw, Mapping):
        return {}
    section = {}
    for key, value in raw.items():
        rating = coerce_rating(value)
        if rating is not None:
            section[str(key)] = rating
    return section


def parse_rating_record(raw: Any) -> RatingRecord:
    """Tag a stored rating record as flat or nested.

    Already-tagged records pass through. Anything that is not a mapping
    becomes an empty flat record; this never raises.
    """
    if isinstance(raw, FlatRatings | NestedRatings):
        return raw
    if not isinstance(raw, Mapping):
        return FlatRatings()

    if not is_nested(raw):
        return FlatRatings(scores=_parse_section(raw))

    return NestedRatings(
        overall=coerce_rating(raw.get(OVERALL)),
        pizza_overall=coerce_rating(raw.get(PIZZA_OVERALL)),
        pizzas=_parse_items(raw.get(PIZZAS_KEY)),
        appetizers=_parse_items(raw.get(APPETIZERS_KEY)),
        pizza_components=_parse_section(raw.get(ParentCategory.PIZZA_COMPONENTS.value)),
        other_stuff=_parse_section(raw.get(ParentCategory.OTHER_STUFF.value)),
    )
