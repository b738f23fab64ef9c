"""Tests for configuration loading, validation and errors."""

import tempfile
from pathlib import Path

import pydantic
import pytest
import yaml

from pizza_standings.core.config import (
    API_TOKEN_ENV_VAR,
    API_URL_ENV_VAR,
    SourceConfig,
    StandingsConfig,
    load_config,
)
from pizza_standings.core.errors import (
    MissingFieldError,
    SnapshotError,
    StandingsError,
    UnknownCategoryError,
    ValidationError,
)
from pizza_standings.core.slug import SlugGenerator


class TestSourceConfig:
    """Tests for SourceConfig."""

    def test_defaults(self):
        """Test default page size and timeout."""
        source = SourceConfig()
        assert source.base_url is None
        assert source.limit == 100
        assert source.timeout == 30.0

    def test_trailing_slash_stripped(self):
        """Test base URL is normalized."""
        assert SourceConfig(base_url="https://club.example/api/").base_url == (
            "https://club.example/api"
        )

    def test_blank_url_is_none(self):
        """Test a blank base URL counts as unset."""
        assert SourceConfig(base_url="   ").base_url is None

    def test_invalid_limit(self):
        """Test limit must be positive."""
        with pytest.raises(pydantic.ValidationError):
            SourceConfig(limit=0)


class TestStandingsConfig:
    """Tests for StandingsConfig."""

    def test_defaults(self):
        """Test default configuration."""
        config = StandingsConfig()
        assert config.snapshot_path is None
        assert config.output_dir == "./standings"
        assert config.min_same_named_restaurants == 2

    def test_threshold_below_two_rejected(self):
        """Test a showdown needs at least two restaurants."""
        with pytest.raises(pydantic.ValidationError):
            StandingsConfig(min_same_named_restaurants=1)

    def test_env_fallbacks(self, monkeypatch):
        """Test URL and token come from the environment when unset."""
        monkeypatch.setenv(API_URL_ENV_VAR, "https://env.example/api/")
        monkeypatch.setenv(API_TOKEN_ENV_VAR, "secret")

        config = StandingsConfig()
        assert config.get_base_url() == "https://env.example/api"
        assert config.get_api_token() == "secret"

    def test_config_wins_over_env(self, monkeypatch):
        """Test explicit values take precedence over the environment."""
        monkeypatch.setenv(API_URL_ENV_VAR, "https://env.example/api")
        monkeypatch.setenv(API_TOKEN_ENV_VAR, "env-token")

        config = StandingsConfig(
            source=SourceConfig(base_url="https://club.example/api", api_token="file-token")
        )
        assert config.get_base_url() == "https://club.example/api"
        assert config.get_api_token() == "file-token"

    def test_no_token(self, monkeypatch):
        """Test the token is optional."""
        monkeypatch.delenv(API_TOKEN_ENV_VAR, raising=False)
        assert StandingsConfig().get_api_token() is None


class TestLoadConfig:
    """Tests for loading YAML files."""

    def test_load_valid_config(self):
        """Test loading a valid YAML config."""
        data = {
            "source": {"base_url": "https://club.example/api", "limit": 250},
            "output_dir": "./out",
            "min_same_named_restaurants": 3,
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "standings.yaml"
            config_path.write_text(yaml.safe_dump(data))

            config = load_config(config_path)

        assert config.source.limit == 250
        assert config.output_dir == "./out"
        assert config.min_same_named_restaurants == 3

    def test_empty_file_gives_defaults(self):
        """Test an empty file is a valid default config."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "empty.yaml"
            config_path.write_text("")

            assert load_config(config_path) == StandingsConfig()

    def test_missing_file(self):
        """Test a missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/standings.yaml")

    def test_invalid_values(self):
        """Test invalid values raise a pydantic error."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "bad.yaml"
            config_path.write_text(yaml.safe_dump({"slug_max_length": 0}))

            with pytest.raises(pydantic.ValidationError):
                load_config(config_path)


class TestSlugGenerator:
    """Tests for slug generation."""

    def test_slugify(self):
        """Test free text becomes a URL-safe slug."""
        assert SlugGenerator().slugify("Green Pepper") == "green-pepper"

    def test_safe_slug_hash_suffix(self):
        """Test the hash suffix keeps truncated slugs distinct."""
        slugger = SlugGenerator(max_length=12)
        a = slugger.safe_slug("pizza:bacon+onion+sausage", hash_content="a")
        b = slugger.safe_slug("pizza:bacon+onion+sausage", hash_content="b")

        assert a != b
        assert len(a) <= 12
        assert a.startswith("pizza_")

    def test_safe_slug_fallback(self):
        """Test punctuation-only input gets a placeholder slug."""
        assert SlugGenerator().safe_slug("???") == "untitled"


class TestErrors:
    """Tests for exception formatting and hierarchy."""

    def test_message_with_suggestion(self):
        """Test errors render label, message and suggestion."""
        error = MissingFieldError("source.base_url", "standings.yaml")
        text = str(error)

        assert "[Configuration Error]" in text
        assert "source.base_url" in text
        assert "[Suggestion]" in text

    def test_validation_error_reason(self):
        """Test the validation reason becomes the suggestion."""
        error = ValidationError("limit", "must be positive")
        assert error.suggestion == "must be positive"

    def test_snapshot_error_hierarchy(self):
        """Test snapshot errors are standings errors and type errors."""
        error = SnapshotError("bad input")
        assert isinstance(error, StandingsError)
        assert isinstance(error, TypeError)

    def test_unknown_category_message(self):
        """Test the category name appears unquoted by KeyError."""
        error = UnknownCategoryError("vibes")
        assert isinstance(error, KeyError)
        assert str(error).startswith("[Unknown Category] No leaderboard category named 'vibes'")
