"""Rating category vocabularies.

The pizza-component and other-stuff vocabularies are closed: a key outside
them is never surfaced in a leaderboard. Member order is display order.
"""

from __future__ import annotations

from enum import Enum

OVERALL = "overall"
PIZZA_OVERALL = "pizzaOverall"
PIZZA_ITEM = "pizza"

PIZZAS_KEY = "pizzas"
APPETIZERS_KEY = "appetizers"


class ParentCategory(str, Enum):
    """Nested rating sections that hold a category→score mapping."""

    PIZZA_COMPONENTS = "pizza-components"
    OTHER_STUFF = "the-other-stuff"


class RatingCategory(str, Enum):
    """Base for closed rating vocabularies."""

    @property
    def label(self) -> str:
        """Human-readable label, e.g. ``wait-staff`` -> ``Wait Staff``."""
        return " ".join(part.capitalize() for part in self.value.split("-"))

    @classmethod
    def parse(cls, key: object):
        """Return the member for ``key`` or None when it is not in the vocabulary."""
        if not isinstance(key, str):
            return None
        try:
            return cls(key.strip().lower())
        except ValueError:
            return None


class PizzaComponent(RatingCategory):
    """Pizza quality components rated under ``pizza-components``."""

    CRUST = "crust"
    SAUCE = "sauce"
    BAKE = "bake"
    CONSISTENCY = "consistency"
    TOPPINGS = "toppings"
    CHEESE = "cheese"


class OtherStuff(RatingCategory):
    """Non-pizza experience items rated under ``the-other-stuff``."""

    APPETIZERS = "appetizers"
    WAIT_STAFF = "wait-staff"
    ATMOSPHERE = "atmosphere"
    SERVICE = "service"
    VALUE = "value"
    BEVERAGES = "beverages"


HEADLINE_TITLES: dict[str, tuple[str, str]] = {
    OVERALL: ("Overall Rating", "Best overall restaurant ratings"),
    PIZZA_OVERALL: ("Pizza Rating", "Best pizza ratings"),
}


def vocabulary_for(parent: ParentCategory) -> type[PizzaComponent] | type[OtherStuff]:
    """Return the enum holding the vocabulary of a nested section."""
    if parent is ParentCategory.PIZZA_COMPONENTS:
        return PizzaComponent
    return OtherStuff


def lookup_category(key: str) -> str | PizzaComponent | OtherStuff | None:
    """Resolve a leaderboard category key.

    Returns the headline key string, the vocabulary member, or None when the
    key is unknown. Dish keys (``pizza:...``) are resolved by the dish matcher.
    """
    if key in HEADLINE_TITLES:
        return key
    return PizzaComponent.parse(key) or OtherStuff.parse(key)
