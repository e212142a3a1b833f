"""Data commands for Gratitude CLI.

Handles exporting and importing the journal as JSON or CSV, and deleting
all entries.
"""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel

from gratitude.cli.common import console, fail, get_journal_service
from gratitude.errors import GratitudeError
from gratitude.transfer import (
    entries_from_csv,
    entries_from_json,
    entries_to_csv,
    entries_to_json,
)

FORMATS = ["json", "csv"]


def _format_for(path: Path, explicit: Optional[str]) -> str:
    if explicit:
        return explicit
    suffix = path.suffix.lower().lstrip(".")
    if suffix in FORMATS:
        return suffix
    fail(f"Cannot tell the format of '{path.name}'. Pass --format json or --format csv.")


@click.command()
@click.option(
    "--format", "fmt",
    type=click.Choice(FORMATS),
    default=None,
    help="Output format. Defaults to the output file's extension, or json.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="File to write. Prints to stdout if omitted.",
)
@click.pass_context
def export(ctx: click.Context, fmt: Optional[str], output: Optional[Path]) -> None:
    """Export all entries as JSON or CSV.

    \b
    Examples:
      gratitude export -o gratitude.json
      gratitude export --format csv > gratitude.csv
    """
    if output is not None:
        fmt = _format_for(output, fmt)
    fmt = fmt or "json"

    try:
        entries = get_journal_service(ctx).list_entries(newest_first=False)
    except GratitudeError as e:
        fail(str(e))

    text = entries_to_json(entries) if fmt == "json" else entries_to_csv(entries)

    if output is None:
        click.echo(text, nl=not text.endswith("\n"))
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    console.print(f"[green]✓ Exported {len(entries)} entries to {output}[/green]")


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format", "fmt",
    type=click.Choice(FORMATS),
    default=None,
    help="Input format. Defaults to the file's extension.",
)
@click.pass_context
def import_entries(ctx: click.Context, path: Path, fmt: Optional[str]) -> None:
    """Import entries from a JSON or CSV export.

    Days that already have an entry are skipped.

    \b
    Examples:
      gratitude import gratitude.json
      gratitude import backup.txt --format csv
    """
    fmt = _format_for(path, fmt)

    try:
        service = get_journal_service(ctx)
        text = path.read_text(encoding="utf-8")
        if fmt == "json":
            entries = entries_from_json(text, tz=service.tz)
        else:
            entries = entries_from_csv(text, tz=service.tz)
        result = service.import_entries(entries)
    except (GratitudeError, OSError, UnicodeDecodeError) as e:
        fail(f"Import failed:\n\n{e}")

    console.print(Panel(
        f"Imported: [green]{result.imported}[/green]\n"
        f"Skipped (day already written): [yellow]{result.skipped}[/yellow]",
        title="[bold]Import[/bold]",
        border_style="green",
    ))


@click.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def wipe(ctx: click.Context, yes: bool) -> None:
    """Delete every journal entry."""
    if not yes and not click.confirm(
        "Delete ALL journal entries? This cannot be undone"
    ):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        count = get_journal_service(ctx).delete_all()
    except GratitudeError as e:
        fail(str(e))

    console.print(f"[green]✓ Deleted {count} entries[/green]")
