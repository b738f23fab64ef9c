"""Rating normalizer: any stored record -> canonical nested view."""

from __future__ import annotations

from typing import Any

from pizza_standings.models.categories import OtherStuff, PizzaComponent
from pizza_standings.models.ratings import FlatRatings, NestedRatings, parse_rating_record


def _nest_flat(record: FlatRatings) -> NestedRatings:
    # Flat records predate the sub-category schema: no overall, no pizzas.
    # Keys that happen to name a known category still count for it.
    components: dict[str, float] = {}
    other: dict[str, float] = {}
    for key, score in record.scores.items():
        if (component := PizzaComponent.parse(key)) is not None:
            components.setdefault(component.value, score)
        elif (item := OtherStuff.parse(key)) is not None:
            other.setdefault(item.value, score)
    return NestedRatings(pizza_components=components, other_stuff=other)


def normalize_ratings(record: Any) -> NestedRatings:
    """Return the canonical nested view of a rating record.

    Args:
        record: A tagged ``FlatRatings`` / ``NestedRatings`` or a raw stored
            mapping (tagged on the fly).

    Returns:
        The record itself when nested; a synthesized nested view when flat.
    """
    match parse_rating_record(record):
        case NestedRatings() as nested:
            return nested
        case FlatRatings() as flat:
            return _nest_flat(flat)
