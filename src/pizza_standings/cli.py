"""CLI for Pizza Standings."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Any

import pydantic
import structlog
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from pizza_standings import __version__
from pizza_standings.core.config import StandingsConfig, load_config
from pizza_standings.core.errors import (
    MissingFieldError,
    StandingsError,
    ValidationError,
)
from pizza_standings.models.categories import HEADLINE_TITLES, OtherStuff, PizzaComponent
from pizza_standings.pipeline import run_standings
from pizza_standings.services.reporting import format_rating, render_leaderboard
from pizza_standings.services.source import SnapshotSource, create_source
from pizza_standings.services.standings import (
    build_leaderboard,
    build_standings,
    discover_available_categories,
)

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="pizza-standings",
    help="Pizza Standings - rank club restaurants from visit ratings",
    add_completion=False,
)
console = Console()

ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="Path to config YAML file")
]
SnapshotOption = Annotated[
    Path | None,
    typer.Option("--snapshot", "-s", help="Restaurant export (JSON/YAML) instead of the API"),
]
ApiUrlOption = Annotated[
    str | None, typer.Option("--api-url", help="Club API root, overrides config")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"pizza-standings v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """Pizza Standings CLI."""
    load_dotenv()


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_config(config_path: Path | None) -> StandingsConfig:
    if config_path is None:
        return StandingsConfig()
    try:
        return load_config(config_path)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "config"
        raise ValidationError(field, first["msg"]) from e


def _resolve_source(
    config: StandingsConfig,
    config_path: Path | None,
    snapshot: Path | None,
    api_url: str | None,
) -> SnapshotSource:
    snapshot_path = snapshot or config.snapshot_path
    base_url = api_url or config.get_base_url()
    if snapshot_path is None and not base_url:
        raise MissingFieldError(
            "snapshot_path or source.base_url",
            str(config_path) if config_path else "the default configuration",
        )
    return create_source(
        snapshot_path=snapshot_path,
        base_url=base_url,
        api_token=config.get_api_token(),
        limit=config.source.limit,
        timeout=config.source.timeout,
    )


def _fetch(source: SnapshotSource) -> list[Any]:
    async def _run() -> list[Any]:
        try:
            return await source.fetch()
        finally:
            await source.close()

    return asyncio.run(_run())


def _fail(e: Exception, verbose: bool = False) -> typer.Exit:
    if isinstance(e, FileNotFoundError):
        console.print(f"[red]Error:[/red] {e}")
    elif isinstance(e, StandingsError):
        console.print(f"[red]{e}")
    else:
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
    return typer.Exit(1)


@app.command()
def build(
    config_path: ConfigOption = None,
    snapshot: SnapshotOption = None,
    api_url: ApiUrlOption = None,
    save: Annotated[
        bool, typer.Option("--save/--no-save", help="Write markdown/JSON/CSV reports")
    ] = True,
    output_dir: Annotated[
        Path | None, typer.Option("--output-dir", "-o", help="Report directory, overrides config")
    ] = None,
    run_id: Annotated[str | None, typer.Option("--run-id", help="Custom run ID")] = None,
    verbose: VerboseOption = False,
) -> None:
    """Build every leaderboard from the current restaurant data.

    Args:
        config_path: Path to YAML configuration file.
        snapshot: Restaurant export to read instead of the API.
        api_url: Override the API root.
        save: Whether to write report files.
        output_dir: Override the report directory.
        run_id: Custom run ID (default: timestamp).
        verbose: Enable verbose logging.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_path)
        if output_dir is not None:
            config.output_dir = str(output_dir)
        source = _resolve_source(config, config_path, snapshot, api_url)

        console.print("[bold green]Building standings...[/bold green]")
        standings, store = asyncio.run(run_standings(config, source, run_id=run_id, save=save))

        console.print(render_leaderboard(standings.overall), markup=False)
        console.print()
        console.print(render_leaderboard(standings.pizza_overall), markup=False)
        console.print()
        console.print(f"  Restaurants: {standings.restaurant_count}")
        console.print(f"  Pizza quality leaderboards: {len(standings.pizza_components)}")
        console.print(f"  Other stuff leaderboards: {len(standings.other_stuff)}")
        console.print(f"  Pizza showdowns: {len(standings.same_named_pizzas)}")

        if store is not None:
            console.print(f"Reports saved to: {store.base_dir}")

    except Exception as e:
        raise _fail(e, verbose) from e


@app.command()
def show(
    category: Annotated[
        str, typer.Argument(help="Category key, e.g. overall, crust, pizza:pepperoni+sausage")
    ],
    config_path: ConfigOption = None,
    snapshot: SnapshotOption = None,
    api_url: ApiUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show a single leaderboard.

    Args:
        category: Leaderboard category key.
        config_path: Path to YAML configuration file.
        snapshot: Restaurant export to read instead of the API.
        api_url: Override the API root.
        verbose: Enable verbose logging.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_path)
        restaurants = _fetch(_resolve_source(config, config_path, snapshot, api_url))
        leaderboard = build_leaderboard(
            restaurants,
            category,
            min_same_named_restaurants=config.min_same_named_restaurants,
        )
        console.print(render_leaderboard(leaderboard), markup=False)
        if not leaderboard.is_empty:
            top = leaderboard.entries[0]
            console.print(
                f"\n[bold]Leader:[/bold] {top.restaurant_name} ({format_rating(top.rating)})"
            )

    except Exception as e:
        raise _fail(e, verbose) from e


@app.command()
def categories(
    config_path: ConfigOption = None,
    snapshot: SnapshotOption = None,
    api_url: ApiUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List leaderboard category keys and which ones have ratings.

    Args:
        config_path: Path to YAML configuration file.
        snapshot: Restaurant export to read instead of the API.
        api_url: Override the API root.
        verbose: Enable verbose logging.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_path)
        restaurants = _fetch(_resolve_source(config, config_path, snapshot, api_url))
        available = discover_available_categories(restaurants)
        standings = build_standings(
            restaurants, min_same_named_restaurants=config.min_same_named_restaurants
        )

        console.print("[bold]Headline:[/bold]")
        for key, (title, _) in HEADLINE_TITLES.items():
            console.print(f"  {key:<14} {title}")

        for heading, vocabulary, found in (
            ("Pizza quality", PizzaComponent, available["pizza_components"]),
            ("Other stuff", OtherStuff, available["other_stuff"]),
        ):
            console.print(f"\n[bold]{heading}:[/bold]")
            for member in vocabulary:
                marker = "[green]rated[/green]" if member.value in found else "[dim]no data[/dim]"
                console.print(f"  {member.value:<14} {marker}")

        console.print("\n[bold]Pizza showdowns:[/bold]")
        if not standings.same_named_pizzas:
            console.print("  [dim]none yet[/dim]")
        for leaderboard in standings.same_named_pizzas:
            console.print(f"  {leaderboard.category}  ({leaderboard.title}, {len(leaderboard)})")

    except Exception as e:
        raise _fail(e, verbose) from e


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
) -> None:
    """Validate a configuration file without running.

    Args:
        config_path: Path to YAML configuration file.
    """
    try:
        config = _load_config(config_path)
        console.print("[green]Configuration is valid![/green]")
        console.print(f"  Snapshot: {config.snapshot_path or '-'}")
        console.print(f"  API: {config.get_base_url() or '-'}")
        console.print(f"  API token: {'set' if config.get_api_token() else 'not set'}")
        console.print(f"  Output dir: {config.output_dir}")
        console.print(f"  Showdown threshold: {config.min_same_named_restaurants} restaurants")

    except (FileNotFoundError, StandingsError) as e:
        raise _fail(e) from e
    except Exception as e:
        console.print(f"[red]Validation error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command()
def info() -> None:
    """Show tool information and example commands."""
    console.print("[bold]Pizza Standings[/bold]")
    console.print(f"Version: {__version__}\n")

    console.print("[bold]Example Commands:[/bold]")
    console.print("  # Build from an exported restaurants file")
    console.print("  pizza-standings build --snapshot restaurants.json\n")

    console.print("  # Build from the club API (PIZZA_CLUB_API_URL / PIZZA_CLUB_API_TOKEN)")
    console.print("  pizza-standings build --config standings.yaml\n")

    console.print("  # Print only, no report files")
    console.print("  pizza-standings build --snapshot restaurants.json --no-save\n")

    console.print("  # One leaderboard")
    console.print("  pizza-standings show crust --snapshot restaurants.json\n")

    console.print("  # List category keys")
    console.print("  pizza-standings categories --snapshot restaurants.json\n")

    console.print("  # Validate config")
    console.print("  pizza-standings validate standings.yaml")


if __name__ == "__main__":
    app()
