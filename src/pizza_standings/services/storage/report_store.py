"""Report export: markdown, JSON and per-leaderboard CSV files."""

from __future__ import annotations

import asyncio
import csv
import json
from datetime import UTC, datetime
from pathlib import Path

import structlog

from pizza_standings import __version__
from pizza_standings.core.config import StandingsConfig
from pizza_standings.core.slug import SlugGenerator
from pizza_standings.models.standings import Leaderboard, StandingsData
from pizza_standings.services.reporting import generate_standings_report

logger = structlog.get_logger()

CSV_COLUMNS = (
    "rank",
    "is_tied",
    "restaurant_id",
    "restaurant_name",
    "restaurant_slug",
    "rating",
    "item_name",
    "visit_date",
)


class ReportStore:
    """Writes standings artifacts under ``<output_dir>/<run_id>/``."""

    def __init__(self, config: StandingsConfig, run_id: str | None = None) -> None:
        """Initialize report store.

        Args:
            config: Standings configuration (output directory, slug length).
            run_id: Optional run identifier (defaults to timestamp).
        """
        self.config = config
        self.run_id = run_id or datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
        self.base_dir = Path(config.output_dir) / self.run_id
        self._slugger = SlugGenerator(max_length=config.slug_max_length)

    def leaderboards_dir(self) -> Path:
        """Get or create the per-leaderboard CSV directory."""
        path = self.base_dir / "leaderboards"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def csv_filename(self, leaderboard: Leaderboard) -> str:
        """Filesystem-safe CSV name; the hash keeps truncated dish keys apart."""
        slug = self._slugger.safe_slug(leaderboard.category, hash_content=leaderboard.category)
        return f"{slug}.csv"

    async def save_report(self, filename: str, content: str) -> Path:
        """Save a markdown/text report file."""

        def _save() -> Path:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            path = self.base_dir / filename
            path.write_text(content, encoding="utf-8")
            logger.debug("saved_report", path=str(path))
            return path

        return await asyncio.to_thread(_save)

    async def export_to_json(self, standings: StandingsData) -> Path:
        """Export the full bundle to JSON for the site's standings page."""

        def _save() -> Path:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            path = self.base_dir / "standings.json"
            data = {
                "generatedAt": datetime.now(UTC).isoformat(),
                "version": __version__,
                "restaurantCount": standings.restaurant_count,
                **standings.to_dict(),
            }
            with path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            logger.debug("saved_json", path=str(path))
            return path

        return await asyncio.to_thread(_save)

    async def save_leaderboard_csv(self, leaderboard: Leaderboard) -> Path:
        """Save one leaderboard as CSV for spreadsheet use."""

        def _save() -> Path:
            path = self.leaderboards_dir() / self.csv_filename(leaderboard)
            with path.open("w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f)
                writer.writerow(CSV_COLUMNS)
                for e in leaderboard.entries:
                    writer.writerow(
                        [
                            e.rank,
                            e.is_tied,
                            e.restaurant_id,
                            e.restaurant_name,
                            e.restaurant_slug or "",
                            f"{e.rating:.2f}",
                            e.item_name or "",
                            e.visit_date or "",
                        ]
                    )
            return path

        return await asyncio.to_thread(_save)

    async def save_standings(self, standings: StandingsData) -> list[Path]:
        """Write every artifact for a standings run.

        Returns:
            Paths written: ``standings.md``, ``standings.json`` and one CSV
            per non-empty leaderboard.
        """
        paths = [
            await self.save_report("standings.md", generate_standings_report(standings)),
            await self.export_to_json(standings),
        ]
        for leaderboard in standings.all_leaderboards():
            if leaderboard.is_empty:
                continue
            paths.append(await self.save_leaderboard_csv(leaderboard))

        logger.info("saved_standings", base_dir=str(self.base_dir), files=len(paths))
        return paths
