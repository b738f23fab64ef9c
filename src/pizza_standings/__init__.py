"""Pizza Standings.

Ranks pizza club restaurants from visit ratings: overall, pizza,
pizza-component and other-stuff leaderboards plus a same-dish showdown
across restaurants.
"""

__version__ = "0.3.0"

from pizza_standings.services.standings import (  # noqa: E402
    build_leaderboard,
    build_standings,
    discover_available_categories,
    entries_for_category,
)

__all__ = [
    "__version__",
    "build_leaderboard",
    "build_standings",
    "discover_available_categories",
    "entries_for_category",
]
