"""Streak commands for Gratitude CLI.

Shows the running streak, milestones, a heat map of recent days and
random memories from past entries.
"""

import click
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gratitude.cli.common import console, fail, get_journal_service
from gratitude.cli.journal import render_entry
from gratitude.errors import GratitudeError
from gratitude.streaks import (
    MILESTONES,
    current_streak,
    entries_this_week,
    heatmap as build_heatmap,
    longest_streak,
    next_milestone,
    random_memory,
    weekly_progress,
)

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def streak_style(streak: int) -> str:
    """Cell color for a heat map day."""
    if streak == 0:
        return "grey35"
    if streak == 1:
        return "green3"
    if streak == 2:
        return "green4"
    return "dark_green"


def progress_bar(fraction: float, width: int = 14) -> str:
    filled = round(fraction * width)
    return "█" * filled + "░" * (width - filled)


@click.command()
@click.pass_context
def streak(ctx: click.Context) -> None:
    """Show your current streak and milestones."""
    try:
        service = get_journal_service(ctx)
        entries = service.list_entries()
        day = service.today()
        written_today = service.entry_for_day(day) is not None
    except GratitudeError as e:
        fail(str(e))

    current = current_streak(entries, day)
    longest = longest_streak(entries)
    week_count = entries_this_week(entries, day)
    upcoming = next_milestone(current)
    reached = [m for m in MILESTONES if m <= longest]

    lines = [
        f"🔥 Current streak: [bold]{current}[/bold] day{'s' if current != 1 else ''}",
        f"🏆 Longest streak: [bold]{longest}[/bold]",
        f"📝 Total entries:  [bold]{len(entries)}[/bold]",
        "",
        f"This week: {progress_bar(weekly_progress(entries, day))} {week_count}/7",
    ]
    if upcoming is not None:
        lines.append(f"\n🎯 Next milestone: {upcoming} days ({upcoming - current} to go)")
    if reached:
        lines.append(f"[dim]Reached: {', '.join(str(m) for m in reached)}[/dim]")
    if current and not written_today:
        lines.append("\n[yellow]Write today's entry to keep your streak going.[/yellow]")

    console.print(Panel(
        "\n".join(lines),
        title="[bold]🎯 Milestones[/bold]",
        border_style="green",
    ))


@click.command()
@click.option("--days", type=click.IntRange(min=1, max=366), default=30, help="Days to show.")
@click.pass_context
def heatmap(ctx: click.Context, days: int) -> None:
    """Show a heat map of recent days, colored by streak."""
    try:
        service = get_journal_service(ctx)
        cells = build_heatmap(service.list_entries(), service.today(), days=days)
    except GratitudeError as e:
        fail(str(e))

    table = Table(
        title=f"🔥 Streak Heatmap ({days} days)",
        show_header=True,
        header_style="bold cyan",
        box=None,
        padding=(0, 1),
    )
    for name in WEEKDAYS:
        table.add_column(name, justify="center")

    # Pad the first row so columns line up with weekdays.
    row: list = [""] * cells[0][0].weekday()
    for day, value in cells:
        row.append(Text("■", style=streak_style(value)))
        if len(row) == 7:
            table.add_row(*row)
            row = []
    if row:
        table.add_row(*row, *[""] * (7 - len(row)))

    console.print(table)
    written = sum(1 for _, value in cells if value)
    console.print(f"\n[dim]{written} of {days} days written[/dim]")


@click.command()
@click.pass_context
def memory(ctx: click.Context) -> None:
    """Show a random entry from the past."""
    try:
        entry = random_memory(get_journal_service(ctx).list_entries())
    except GratitudeError as e:
        fail(str(e))

    if entry is None:
        console.print(Panel(
            "[dim]No memories yet. Write your first entry with [cyan]gratitude add[/cyan][/dim]",
            title="[bold]Memory[/bold]",
            border_style="dim",
        ))
        return

    console.print(f"[dim]On {entry.date.strftime('%B %d, %Y')}, you wrote:[/dim]")
    console.print(render_entry(entry))
