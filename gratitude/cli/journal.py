"""Journal entry commands for Gratitude CLI.

Handles writing, editing, deleting and browsing daily entries.
"""

from datetime import datetime
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from gratitude.cli.common import (
    DATE_FORMATS,
    console,
    fail,
    get_journal_service,
    get_prompt_book,
    short_id,
)
from gratitude.errors import GratitudeError
from gratitude.models import JournalEntry


def render_entry(entry: JournalEntry) -> Panel:
    """Panel showing one entry."""
    body = "\n".join(f"[bold]{i}.[/bold] {text}" for i, text in enumerate(entry.things, 1))
    if entry.notes:
        body += f"\n\n[dim]{entry.notes}[/dim]"
    body += f"\n\n🔥 Streak: [bold]{entry.streak}[/bold]   [dim]id {short_id(entry.id)}[/dim]"
    return Panel(
        body,
        title=f"[bold]{entry.date.strftime('%A, %B %d, %Y')}[/bold]",
        border_style="green",
    )


@click.command()
@click.argument("things", nargs=-1)
@click.option("--notes", "-n", default="", help="Optional notes for the day.")
@click.option(
    "--day", "-d",
    type=click.DateTime(formats=DATE_FORMATS),
    default=None,
    help="Day of the entry (YYYY-MM-DD). Defaults to today.",
)
@click.pass_context
def add(ctx: click.Context, things: tuple[str, ...], notes: str, day: Optional[datetime]) -> None:
    """Write the entry for a day.

    THINGS are up to three things you are grateful for. Any that are
    missing are asked for interactively.

    \b
    Examples:
      gratitude add "Coffee" "Sunshine" "A call with mum"
      gratitude add --day 2024-01-31 "Rest" "Books" "Friends"
      gratitude add                    # Asks for all three
    """
    if len(things) > 3:
        fail("Give at most three things.")

    try:
        if len(things) < 3:
            prompt = get_prompt_book(ctx).prompt_for_day(
                day.date() if day else get_journal_service(ctx).today()
            )
            if prompt:
                console.print(f"[cyan]{prompt}[/cyan]")
        values = list(things)
        while len(values) < 3:
            values.append(click.prompt(f"{len(values) + 1}"))

        service = get_journal_service(ctx)
        entry = service.create_entry(*values, notes=notes, day=day.date() if day else None)
    except GratitudeError as e:
        fail(str(e))

    console.print(
        f"[green]✓ Saved entry for {entry.date.isoformat()}[/green] "
        f"🔥 streak {entry.streak}"
    )


@click.command()
@click.argument("ref")
@click.option("--first", "entry1", default=None, help="Replace the first thing.")
@click.option("--second", "entry2", default=None, help="Replace the second thing.")
@click.option("--third", "entry3", default=None, help="Replace the third thing.")
@click.option("--notes", "-n", default=None, help="Replace the notes.")
@click.option(
    "--day", "-d",
    type=click.DateTime(formats=DATE_FORMATS),
    default=None,
    help="Move the entry to another day (YYYY-MM-DD).",
)
@click.pass_context
def edit(
    ctx: click.Context,
    ref: str,
    entry1: Optional[str],
    entry2: Optional[str],
    entry3: Optional[str],
    notes: Optional[str],
    day: Optional[datetime],
) -> None:
    """Edit an entry.

    REF is a day (YYYY-MM-DD, today, yesterday) or an entry id prefix.

    \b
    Examples:
      gratitude edit today --notes "Long walk after dinner"
      gratitude edit 2024-01-31 --second "Warm soup"
      gratitude edit 3f2a9c1b --day 2024-02-01
    """
    if all(v is None for v in (entry1, entry2, entry3, notes, day)):
        fail("Nothing to change. Pass --first, --second, --third, --notes or --day.")

    try:
        service = get_journal_service(ctx)
        entry = service.resolve(ref)
        updated = service.update_entry(
            entry.id,
            entry1=entry1,
            entry2=entry2,
            entry3=entry3,
            notes=notes,
            day=day.date() if day else None,
        )
    except GratitudeError as e:
        fail(str(e))

    console.print(render_entry(updated))


@click.command()
@click.argument("ref")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def delete(ctx: click.Context, ref: str, yes: bool) -> None:
    """Delete an entry.

    REF is a day (YYYY-MM-DD, today, yesterday) or an entry id prefix.
    Streaks of later entries are recalculated.
    """
    try:
        service = get_journal_service(ctx)
        entry = service.resolve(ref)
        if not yes and not click.confirm(
            f"Delete the entry for {entry.date.isoformat()}? This cannot be undone"
        ):
            console.print("[dim]Cancelled[/dim]")
            return
        service.delete_entry(entry.id)
    except GratitudeError as e:
        fail(str(e))

    console.print(f"[green]✓ Deleted entry for {entry.date.isoformat()}[/green]")


@click.command("list")
@click.option("--limit", "-l", type=int, default=None, help="Show at most this many entries.")
@click.option("--oldest-first", is_flag=True, help="Show oldest entries first.")
@click.pass_context
def list_entries(ctx: click.Context, limit: Optional[int], oldest_first: bool) -> None:
    """List journal entries.

    \b
    Examples:
      gratitude list              # All entries, newest first
      gratitude list --limit 7    # Last seven entries
    """
    try:
        entries = get_journal_service(ctx).list_entries(
            newest_first=not oldest_first, limit=limit
        )
    except GratitudeError as e:
        fail(str(e))

    if not entries:
        console.print(Panel(
            "[dim]No entries yet. Write one with [cyan]gratitude add[/cyan][/dim]",
            title="[bold]Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Journal",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("🔥", justify="right")
    table.add_column("Grateful for")
    table.add_column("Notes", max_width=30)
    table.add_column("ID", style="dim")

    for entry in entries:
        notes = entry.notes or "-"
        table.add_row(
            entry.date.isoformat(),
            str(entry.streak),
            "\n".join(entry.things),
            (notes[:27] + "...") if len(notes) > 30 else notes,
            short_id(entry.id),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(entries)} entries[/dim]")


@click.command()
@click.argument("ref")
@click.pass_context
def show(ctx: click.Context, ref: str) -> None:
    """Show a single entry.

    REF is a day (YYYY-MM-DD, today, yesterday) or an entry id prefix.
    """
    try:
        entry = get_journal_service(ctx).resolve(ref)
    except GratitudeError as e:
        fail(str(e))

    console.print(render_entry(entry))


@click.command()
@click.pass_context
def today(ctx: click.Context) -> None:
    """Show today's entry, or today's prompt if none is written yet."""
    try:
        service = get_journal_service(ctx)
        day = service.today()
        entry = service.entry_for_day(day)
        if entry is None:
            prompt = get_prompt_book(ctx).prompt_for_day(day)
    except GratitudeError as e:
        fail(str(e))

    if entry is not None:
        console.print(render_entry(entry))
        return

    console.print(Panel(
        f"[cyan]{prompt or 'What are you grateful for today?'}[/cyan]\n\n"
        "[dim]Write today's entry with [bold]gratitude add[/bold][/dim]",
        title=f"[bold]{day.strftime('%A, %B %d, %Y')}[/bold]",
        border_style="cyan",
    ))


@click.command()
@click.pass_context
def recompute(ctx: click.Context) -> None:
    """Recalculate every streak from scratch."""
    try:
        entries = get_journal_service(ctx).recompute_all()
    except GratitudeError as e:
        fail(str(e))

    console.print(f"[green]✓ Recomputed streaks for {len(entries)} entries[/green]")
