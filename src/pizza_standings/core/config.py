"""Configuration schemas and loading for Pizza Standings."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_SLUG_MAX_LENGTH = 60
DEFAULT_SAME_NAMED_MIN_RESTAURANTS = 2
API_TOKEN_ENV_VAR = "PIZZA_CLUB_API_TOKEN"
API_URL_ENV_VAR = "PIZZA_CLUB_API_URL"


class SourceConfig(BaseModel):
    """Where the restaurant snapshot comes from.

    Attributes:
        base_url: Club API root (e.g. ``https://club.example/api``). When unset,
            the ``PIZZA_CLUB_API_URL`` environment variable is consulted.
        api_token: Optional bearer token for the API.
        limit: Page size requested from the restaurants endpoint.
        timeout: HTTP timeout in seconds.
    """

    base_url: str | None = None
    api_token: str | None = None
    limit: int = Field(default=100, ge=1)
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            return None
        return v.rstrip("/")


class StandingsConfig(BaseModel):
    """Complete standings configuration."""

    source: SourceConfig = Field(default_factory=SourceConfig)
    snapshot_path: str | None = None
    output_dir: str = "./standings"
    min_same_named_restaurants: int = Field(default=DEFAULT_SAME_NAMED_MIN_RESTAURANTS, ge=2)
    slug_max_length: int = Field(default=DEFAULT_SLUG_MAX_LENGTH, ge=1, le=120)

    def get_base_url(self) -> str | None:
        """Get API base URL from config or environment."""
        url = self.source.base_url or os.environ.get(API_URL_ENV_VAR)
        return url.rstrip("/") if url else None

    def get_api_token(self) -> str | None:
        """Get API token from config or environment.

        The token is optional: the public restaurants endpoint serves reads
        without it.
        """
        return self.source.api_token or os.environ.get(API_TOKEN_ENV_VAR) or None


def load_config(path: str | Path) -> StandingsConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Validated StandingsConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open() as f:
        data = yaml.safe_load(f)

    # An empty file is a valid "all defaults" config
    return StandingsConfig.model_validate(data or {})
