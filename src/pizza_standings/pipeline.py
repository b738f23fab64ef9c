"""Pipeline orchestration for Pizza Standings."""

from __future__ import annotations

import structlog

from pizza_standings.core.config import StandingsConfig
from pizza_standings.models.standings import StandingsData
from pizza_standings.services.source import SnapshotSource
from pizza_standings.services.standings import build_standings
from pizza_standings.services.storage import ReportStore

logger = structlog.get_logger()


class StandingsPipeline:
    """Fetches a snapshot, builds the standings and optionally saves reports."""

    def __init__(
        self,
        config: StandingsConfig,
        source: SnapshotSource,
        store: ReportStore | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Standings configuration.
            source: Snapshot source (file or API).
            store: Report store; when None nothing is written.
        """
        self.config = config
        self.source = source
        self.store = store

    async def run(self) -> StandingsData:
        """Execute the complete standings pipeline."""
        logger.info("pipeline_start", source=type(self.source).__name__)

        # The engine needs one consistent read of the whole collection
        restaurants = await self.source.fetch()

        standings = build_standings(
            restaurants,
            min_same_named_restaurants=self.config.min_same_named_restaurants,
        )
        logger.info(
            "standings_built",
            restaurants=standings.restaurant_count,
            overall=len(standings.overall),
            pizza_components=len(standings.pizza_components),
            other_stuff=len(standings.other_stuff),
            same_named=len(standings.same_named_pizzas),
        )

        if self.store is not None:
            await self.store.save_standings(standings)

        logger.info("pipeline_complete")
        return standings


async def run_standings(
    config: StandingsConfig,
    source: SnapshotSource,
    run_id: str | None = None,
    save: bool = True,
) -> tuple[StandingsData, ReportStore | None]:
    """Convenience function to run the standings pipeline and close the source.

    Args:
        config: Standings configuration.
        source: Snapshot source.
        run_id: Optional run ID for the report directory.
        save: Whether to write report artifacts.

    Returns:
        Tuple of (standings, store). ``store`` is None when ``save`` is False.
    """
    store = ReportStore(config, run_id) if save else None
    pipeline = StandingsPipeline(config, source, store)
    try:
        standings = await pipeline.run()
    finally:
        await source.close()
    return standings, store
