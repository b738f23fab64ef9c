#!/usr/bin/env python
"""Rebuild the club standings from the live API and publish the report bundle.

Reads PIZZA_CLUB_API_URL and PIZZA_CLUB_API_TOKEN from the environment
(or a .env file) and writes markdown, JSON and CSV files under ./standings.
"""

import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from pizza_standings.core.config import (
    API_TOKEN_ENV_VAR,
    API_URL_ENV_VAR,
    SourceConfig,
    StandingsConfig,
)
from pizza_standings.pipeline import run_standings
from pizza_standings.services.reporting import render_leaderboard
from pizza_standings.services.source import create_source

load_dotenv()


async def main() -> None:
    base_url = os.environ.get(API_URL_ENV_VAR)
    if not base_url:
        print(f"Error: {API_URL_ENV_VAR} not set")
        sys.exit(1)

    config = StandingsConfig(
        source=SourceConfig(
            base_url=base_url,
            api_token=os.environ.get(API_TOKEN_ENV_VAR),
            limit=500,  # the whole collection has to come back in one page
        ),
        output_dir=str(Path("./standings")),
        min_same_named_restaurants=2,
    )

    source = create_source(
        base_url=config.get_base_url(),
        api_token=config.get_api_token(),
        limit=config.source.limit,
        timeout=config.source.timeout,
    )

    standings, store = await run_standings(config, source)
    print(render_leaderboard(standings.overall))
    print()
    count = len(standings.all_leaderboards())
    print(f"{count} leaderboards from {standings.restaurant_count} restaurants")
    if store is not None:
        print(f"Standings saved to: {store.base_dir}")


if __name__ == "__main__":
    asyncio.run(main())
