"""Core configuration and utilities for Pizza Standings."""

from pizza_standings.core.config import (
    API_TOKEN_ENV_VAR,
    API_URL_ENV_VAR,
    DEFAULT_SAME_NAMED_MIN_RESTAURANTS,
    DEFAULT_SLUG_MAX_LENGTH,
    SourceConfig,
    StandingsConfig,
    load_config,
)
from pizza_standings.core.errors import (
    ConfigurationError,
    MissingFieldError,
    SnapshotError,
    StandingsError,
    UnknownCategoryError,
    ValidationError,
)
from pizza_standings.core.slug import SlugGenerator

__all__ = [
    "API_TOKEN_ENV_VAR",
    "API_URL_ENV_VAR",
    "DEFAULT_SAME_NAMED_MIN_RESTAURANTS",
    "DEFAULT_SLUG_MAX_LENGTH",
    "SourceConfig",
    "StandingsConfig",
    "SlugGenerator",
    "load_config",
    "ConfigurationError",
    "MissingFieldError",
    "SnapshotError",
    "StandingsError",
    "UnknownCategoryError",
    "ValidationError",
]
