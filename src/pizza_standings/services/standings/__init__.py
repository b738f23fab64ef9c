from .collector import CollectedEntries, collect_best_entries
from .dishes import (
    DishKey,
    build_same_named_leaderboards,
    dish_category,
    dish_display_name,
    dish_identity,
)
from .engine import (
    build_leaderboard,
    build_standings,
    discover_available_categories,
    entries_for_category,
)
from .extractor import CategoryDatum, extract_categories, pizza_overall
from .normalizer import normalize_ratings

__all__ = [
    "CategoryDatum",
    "CollectedEntries",
    "DishKey",
    "build_leaderboard",
    "build_same_named_leaderboards",
    "build_standings",
    "collect_best_entries",
    "discover_available_categories",
    "dish_category",
    "dish_display_name",
    "dish_identity",
    "entries_for_category",
    "extract_categories",
    "normalize_ratings",
    "pizza_overall",
]
