"""Slug generation utilities for category keys and report filenames."""

from __future__ import annotations

import hashlib
import re


class SlugGenerator:
    """Generate URL- and filesystem-safe slugs from arbitrary inputs.

    Used for dish leaderboard category keys (``pizza:<slug>``) and for the
    per-leaderboard CSV filenames written by the report store.
    """

    def __init__(self, max_length: int | None = 60) -> None:
        """Initialize slug generator.

        Args:
            max_length: Maximum length for generated slugs. Use None to disable truncation.
        """
        self.max_length = max_length

    def slugify(self, value: str) -> str:
        """Generate a URL-safe slug from free text."""
        return self.truncate(self._slugify(value))

    def safe_slug(self, value: str, *, hash_content: str | None = None) -> str:
        """Generate a filesystem-safe slug, optionally suffixed with a short hash.

        The hash keeps two long keys distinct after truncation.
        """
        slug = self._slugify(value) or "untitled"
        if hash_content is None:
            return self.truncate(slug)
        hash_suffix = hashlib.sha256(hash_content.encode()).hexdigest()[:6]
        if self.max_length is not None:
            slug = slug[: max(self.max_length - len(hash_suffix) - 1, 1)]
        return f"{slug}_{hash_suffix}"

    def truncate(self, value: str) -> str:
        """Truncate a value to the configured max length."""
        if self.max_length is None:
            return value
        return value[: self.max_length].rstrip("-")

    @staticmethod
    def _slugify(value: str) -> str:
        return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
