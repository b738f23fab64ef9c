"""Report rendering for standings."""

from __future__ import annotations

from tabulate import tabulate

from pizza_standings.models.standings import Leaderboard, RankedEntry, StandingsData

LEADERBOARD_HEADERS = ("Rank", "Restaurant", "Rating", "Pizza", "Visit")
EMPTY_LEADERBOARD_TEXT = "_No ratings yet._"


def format_rating(rating: float) -> str:
    """Two decimals, trailing zeros dropped: 4.5, 4.25, 4."""
    return f"{rating:.2f}".rstrip("0").rstrip(".")


def leaderboard_rows(entries: tuple[RankedEntry, ...]) -> list[tuple[str, str, str, str, str]]:
    """Table rows for a leaderboard, tied ranks shown as ``T-<rank>``."""
    return [
        (
            e.rank_label,
            e.restaurant_name,
            format_rating(e.rating),
            e.item_name or "",
            e.visit_date or "",
        )
        for e in entries
    ]


def render_leaderboard(leaderboard: Leaderboard, heading_level: int = 2) -> str:
    """Render one leaderboard as a markdown section.

    Args:
        leaderboard: Leaderboard to render.
        heading_level: Markdown heading depth for the title.

    Returns:
        Markdown with heading, optional description and a table (or an
        explicit empty-state line).
    """
    lines = [f"{'#' * heading_level} {leaderboard.title}", ""]
    if leaderboard.description:
        lines.extend([leaderboard.description, ""])

    if leaderboard.is_empty:
        lines.append(EMPTY_LEADERBOARD_TEXT)
        return "\n".join(lines)

    rows = leaderboard_rows(leaderboard.entries)
    headers = list(LEADERBOARD_HEADERS)
    # Drop the pizza column unless some entry names a pizza
    if not any(row[3] for row in rows):
        rows = [(r[0], r[1], r[2], r[4]) for r in rows]
        headers.remove("Pizza")
    lines.append(tabulate(rows, headers=headers, tablefmt="github", disable_numparse=True))
    return "\n".join(lines)


def _section(title: str, leaderboards: tuple[Leaderboard, ...]) -> list[str]:
    lines = [f"## {title}", ""]
    if not leaderboards:
        lines.extend([EMPTY_LEADERBOARD_TEXT, ""])
        return lines
    for leaderboard in leaderboards:
        lines.extend([render_leaderboard(leaderboard, heading_level=3), ""])
    return lines


def generate_standings_report(standings: StandingsData, title: str = "Standings") -> str:
    """Render the whole bundle as one markdown document.

    Args:
        standings: Engine output.
        title: Document title.

    Returns:
        Markdown report content.
    """
    lines = [f"# {title}", ""]
    lines.append(f"Ranked from {standings.restaurant_count} restaurants.")
    lines.append("Each restaurant counts with its best single visit; T- marks a shared rank.")
    lines.append("")

    lines.extend([render_leaderboard(standings.overall), ""])
    lines.extend([render_leaderboard(standings.pizza_overall), ""])
    lines.extend(_section("Pizza Quality", standings.pizza_components))
    lines.extend(_section("Other Stuff", standings.other_stuff))
    lines.extend(_section("Pizza Showdown", standings.same_named_pizzas))

    return "\n".join(lines).rstrip() + "\n"
