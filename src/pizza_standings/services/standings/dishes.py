"""Same-named dish matching across restaurants.

Pizza orders are free text with no shared identifier, so two orders are the
same dish when their topping sets match after normalization. This is a
best-effort grouping: "garlic" and "roasted garlic" stay different dishes.
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Mapping, Sequence
from typing import TypeAlias

from pizza_standings.core.config import DEFAULT_SAME_NAMED_MIN_RESTAURANTS
from pizza_standings.core.slug import SlugGenerator
from pizza_standings.models.categories import PIZZA_ITEM
from pizza_standings.models.standings import Leaderboard, LeaderboardEntry
from pizza_standings.ranking import rank_entries

DishKey: TypeAlias = tuple[str, ...]

_TOPPINGS_SUFFIX = re.compile(r"\s*-\s*toppings:.*$")
_SIZE_PREFIX = re.compile(r"""^\d+\s*(?:"|''|'|″|”|inch(?:es)?\b|in\b\.?)\s*""")
_SIZE_WORD = re.compile(r"^(?:small|medium|large|x-?large|xl|personal|family)\b\s*")
_SEPARATORS = re.compile(r"\s*[,;&]\s*|\s+and\s+")
_WHITESPACE = re.compile(r"\s+")
_WORD_JOINERS = re.compile(r"[\s\-/_.]+")

_slugger = SlugGenerator(max_length=None)


def dish_identity(order: str) -> DishKey:
    """Normalize an order description to its dish identity key.

    Lower-cases the text, drops a trailing ``- toppings: ...`` note and a
    leading size (``14"``, ``12 inch``, ``large``), splits on commas,
    semicolons, ``&`` and ``and``, and returns the sorted set of toppings.
    Hyphens, slashes, dots and underscores inside a topping read as spaces,
    so ``bbq-chicken`` and ``bbq chicken`` are one topping.

    Args:
        order: Free-text order, e.g. ``'14" Sausage & Pepperoni'``.

    Returns:
        Sorted topping tuple; empty when nothing is left after stripping.

    Example:
        >>> dish_identity('14" pepperoni, sausage')
        ('pepperoni', 'sausage')
    """
    text = _WHITESPACE.sub(" ", order.lower()).strip()
    text = _TOPPINGS_SUFFIX.sub("", text)
    text = _SIZE_PREFIX.sub("", text)
    text = _SIZE_WORD.sub("", text)

    toppings = {_WORD_JOINERS.sub(" ", token).strip() for token in _SEPARATORS.split(text)}
    toppings.discard("")
    return tuple(sorted(toppings))


def _title(topping: str) -> str:
    return " ".join(
        "-".join(part.capitalize() for part in word.split("-")) for word in topping.split(" ")
    )


def dish_display_name(key: DishKey) -> str:
    """Human name for a dish: ``Pepperoni``, ``Pepperoni & Sausage``, ``Bacon Special``."""
    if not key:
        return "Unknown"
    if len(key) == 1:
        return _title(key[0])
    if len(key) == 2:
        return f"{_title(key[0])} & {_title(key[1])}"
    return f"{_title(key[0])} Special"


def dish_category(key: DishKey) -> str:
    """Leaderboard category key for a dish, e.g. ``pizza:pepperoni+sausage``.

    Distinct dish keys always get distinct category keys. When a topping
    does not survive slugging unchanged (``lou's special``, ``jalapeño``),
    a ``~<hash>`` of the raw key is appended.
    """
    slugs = [_slugger.slugify(topping) for topping in key]
    category = f"{PIZZA_ITEM}:" + "+".join(slugs)
    if all(slug.replace("-", " ") == topping for slug, topping in zip(slugs, key, strict=True)):
        return category
    digest = hashlib.sha256("|".join(key).encode()).hexdigest()[:8]
    return f"{category}~{digest}"


def build_same_named_leaderboards(
    dishes: Mapping[DishKey, Sequence[LeaderboardEntry]],
    min_restaurants: int = DEFAULT_SAME_NAMED_MIN_RESTAURANTS,
) -> tuple[Leaderboard, ...]:
    """Rank each dish served at enough distinct restaurants.

    Args:
        dishes: Representative entries per dish, at most one per restaurant.
        min_restaurants: Fewest distinct restaurants a dish needs to be
            compared at all.

    Returns:
        One leaderboard per qualifying dish, most widely served first, then
        by display name.
    """
    leaderboards = []
    for key, entries in dishes.items():
        restaurant_count = len({e.restaurant_id for e in entries})
        if restaurant_count < min_restaurants:
            continue
        name = dish_display_name(key)
        leaderboards.append(
            Leaderboard(
                title=name,
                category=dish_category(key),
                entries=rank_entries(entries),
                description=f"Best {name} across {restaurant_count} restaurants",
            )
        )

    leaderboards.sort(key=lambda lb: (-len(lb), lb.title, lb.category))
    return tuple(leaderboards)
