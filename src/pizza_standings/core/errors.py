"""Custom exceptions for configuration, snapshot and query errors."""

from __future__ import annotations


class StandingsError(Exception):
    """Base exception for standings errors with optional suggestions."""

    label = "Standings Error"

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[{self.label}] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class ConfigurationError(StandingsError):
    """Base exception for configuration errors."""

    label = "Configuration Error"


class MissingFieldError(ConfigurationError):
    """Error when a required configuration field is missing."""

    def __init__(self, field: str, config_path: str) -> None:
        super().__init__(
            f"Missing required field '{field}' in {config_path}",
            "Add the field to your configuration.",
        )


class ValidationError(ConfigurationError):
    """Error when configuration validation fails."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid value for '{field}'",
            f"{reason}",
        )


class SnapshotError(StandingsError, TypeError):
    """Error when a restaurant snapshot breaks the input contract.

    Raised for non-list input handed to the engine and for snapshot files
    that cannot be read as a restaurant list at all. Individual malformed
    records never raise.
    """

    label = "Snapshot Error"


class UnknownCategoryError(StandingsError, KeyError):
    """Error when a leaderboard is requested for a category outside every vocabulary."""

    label = "Unknown Category"

    def __init__(self, category: str) -> None:
        super().__init__(
            f"No leaderboard category named '{category}'",
            "Run `pizza-standings categories` to list valid keys.",
        )

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self._format_message()
