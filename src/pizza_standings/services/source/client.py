"""Restaurant snapshot sources: club API or exported JSON/YAML file."""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import httpx
import structlog
import yaml
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pizza_standings.core.errors import SnapshotError

logger = structlog.get_logger()


def unwrap_snapshot(data: Any, origin: str) -> list[Any]:
    """Accept a bare restaurant list or the API's ``{"data": [...]}`` envelope.

    Args:
        data: Decoded payload.
        origin: File path or URL, for the error message.

    Returns:
        The raw restaurant list (records are validated by the engine).

    Raises:
        SnapshotError: If no restaurant list can be found.
    """
    if isinstance(data, dict) and "data" in data:
        data = data["data"]
    if not isinstance(data, list):
        msg = f"No restaurant list in {origin} (got {type(data).__name__})"
        raise SnapshotError(msg, "Expected a JSON array or an object with a 'data' array.")
    return data


class SnapshotSource(ABC):
    """Abstract base class for async snapshot sources."""

    @abstractmethod
    async def fetch(self) -> list[Any]:
        """Fetch the complete raw restaurant collection with embedded visits."""

    async def close(self) -> None:  # noqa: B027
        """Close any resources. Override if needed."""


class FileSnapshotSource(SnapshotSource):
    """Reads a restaurant export (``.json``, ``.yaml`` or ``.yml``)."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def fetch(self) -> list[Any]:
        """Read and decode the snapshot file.

        Raises:
            FileNotFoundError: If the file does not exist.
            SnapshotError: If the file cannot be decoded to a restaurant list.
        """
        if not self.path.exists():
            msg = f"Snapshot file not found: {self.path}"
            raise FileNotFoundError(msg)

        def _read() -> Any:
            text = self.path.read_text(encoding="utf-8")
            if self.path.suffix.lower() in {".yaml", ".yml"}:
                return yaml.safe_load(text)
            return json.loads(text)

        try:
            data = await asyncio.to_thread(_read)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            msg = f"Could not decode snapshot file {self.path}: {e}"
            raise SnapshotError(msg) from e

        restaurants = unwrap_snapshot(data, str(self.path))
        logger.info("snapshot_loaded", path=str(self.path), restaurants=len(restaurants))
        return restaurants


class ApiSnapshotSource(SnapshotSource):
    """Fetches restaurants from the club API with retries."""

    ENDPOINT = "restaurants"

    def __init__(
        self,
        base_url: str,
        api_token: str | None = None,
        limit: int = 100,
        timeout: float = 30.0,
    ) -> None:
        """Initialize API source.

        Args:
            base_url: API root, without trailing slash.
            api_token: Optional bearer token.
            limit: Page size; the full collection must fit in one page.
            timeout: HTTP timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.limit = limit
        self.client = httpx.AsyncClient(timeout=timeout)

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.ENDPOINT}"

    async def fetch(self) -> list[Any]:
        """Fetch the restaurant collection.

        Raises:
            httpx.HTTPStatusError: On API error after retries.
            httpx.TransportError: On network failure after retries.
            SnapshotError: If the response holds no restaurant list.
        """
        data = await self._call_api()
        restaurants = unwrap_snapshot(data, self.url)

        total = data.get("total") if isinstance(data, dict) else None
        if isinstance(total, int) and total > len(restaurants):
            # Standings need the whole collection; a partial page would skew ranks
            logger.warning(
                "snapshot_truncated", total=total, received=len(restaurants), limit=self.limit
            )

        logger.info("snapshot_fetched", url=self.url, restaurants=len(restaurants))
        return restaurants

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.TransportError)),
        reraise=True,
    )
    async def _call_api(self) -> Any:
        """Make API call with retries.

        Returns:
            Decoded JSON payload.
        """
        logger.debug("api_call", url=self.url, limit=self.limit)

        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        response = await self.client.get(self.url, params={"limit": self.limit}, headers=headers)
        response.raise_for_status()

        try:
            return response.json()
        except json.JSONDecodeError as e:
            msg = f"API returned invalid JSON from {self.url}"
            raise SnapshotError(msg) from e

    async def close(self) -> None:
        """Close HTTP client."""
        await self.client.aclose()


def create_source(
    snapshot_path: str | Path | None = None,
    base_url: str | None = None,
    api_token: str | None = None,
    limit: int = 100,
    timeout: float = 30.0,
) -> SnapshotSource:
    """Create the appropriate snapshot source.

    A snapshot file wins over the API when both are given.

    Args:
        snapshot_path: Path to an exported restaurant file.
        base_url: Club API root.
        api_token: Optional bearer token.
        limit: API page size.
        timeout: HTTP timeout in seconds.

    Returns:
        SnapshotSource instance.
    """
    if snapshot_path is not None:
        logger.debug("using_file_source", path=str(snapshot_path))
        return FileSnapshotSource(snapshot_path)

    if not base_url:
        msg = "Either a snapshot path or an API base URL is required"
        raise ValueError(msg)

    return ApiSnapshotSource(base_url, api_token=api_token, limit=limit, timeout=timeout)
