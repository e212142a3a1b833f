"""Space commands for Gratitude CLI.

Spaces group text notes, documents and images under named, colored
categories.
"""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gratitude.cli.common import console, fail, get_space_service, short_id
from gratitude.errors import GratitudeError
from gratitude.models import CategoryColor, ItemType

COLOR_STYLES = {
    CategoryColor.RED: "red",
    CategoryColor.BLUE: "blue",
    CategoryColor.GREEN: "green",
    CategoryColor.YELLOW: "yellow",
    CategoryColor.PURPLE: "purple",
    CategoryColor.GRAY: "grey50",
}

ITEM_ICONS = {
    ItemType.TEXT: "📝",
    ItemType.DOCUMENT: "📄",
    ItemType.IMAGE: "🖼",
}


@click.group()
def space() -> None:
    """Manage spaces.

    \b
    Examples:
      gratitude space add Recipes --color green
      gratitude space item-add Recipes --file ~/pancakes.pdf
      gratitude space item-add Recipes --name "Soup" --text "Leeks, potatoes"
      gratitude space item-list Recipes
    """
    pass


@space.command("add")
@click.argument("name")
@click.option("--icon", default="folder", help="Icon name.")
@click.option(
    "--color",
    type=click.Choice([c.value for c in CategoryColor]),
    default=CategoryColor.BLUE.value,
    help="Space color.",
)
@click.pass_context
def add_space(ctx: click.Context, name: str, icon: str, color: str) -> None:
    """Create a space called NAME."""
    try:
        created = get_space_service(ctx).create_space(name, icon=icon, color=color)
    except (GratitudeError, ValueError) as e:
        fail(f"Failed to create space:\n\n{e}")
    console.print(f"[green]✓ Created space '{created.name}'[/green]")


@space.command("list")
@click.pass_context
def list_spaces(ctx: click.Context) -> None:
    """List spaces."""
    service = get_space_service(ctx)
    spaces = service.list_spaces()

    if not spaces:
        console.print(Panel(
            "[dim]No spaces yet. Create one with [cyan]gratitude space add NAME[/cyan][/dim]",
            title="[bold]Spaces[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Spaces", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Icon")
    table.add_column("Items", justify="right")
    table.add_column("ID", style="dim")

    for category in spaces:
        table.add_row(
            Text(category.name, style=COLOR_STYLES[category.color]),
            category.icon,
            str(len(service.list_items(category.id))),
            short_id(category.id),
        )

    console.print(table)


@space.command("rename")
@click.argument("ref")
@click.argument("name")
@click.pass_context
def rename_space(ctx: click.Context, ref: str, name: str) -> None:
    """Rename space REF to NAME."""
    try:
        service = get_space_service(ctx)
        renamed = service.rename_space(service.resolve_space(ref).id, name)
    except (GratitudeError, ValueError) as e:
        fail(str(e))
    console.print(f"[green]✓ Renamed space to '{renamed.name}'[/green]")


@space.command("delete")
@click.argument("ref")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def delete_space(ctx: click.Context, ref: str, yes: bool) -> None:
    """Delete space REF and everything in it."""
    try:
        service = get_space_service(ctx)
        target = service.resolve_space(ref)
        if not yes and not click.confirm(
            f"Delete space '{target.name}' and all its items? This cannot be undone"
        ):
            console.print("[dim]Cancelled[/dim]")
            return
        service.delete_space(target.id)
    except GratitudeError as e:
        fail(str(e))
    console.print(f"[green]✓ Deleted space '{target.name}'[/green]")


@space.command("item-add")
@click.argument("ref")
@click.option(
    "--file", "source",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Document or image to store.",
)
@click.option("--text", default=None, help="Text note to store.")
@click.option("--name", default=None, help="Item name. Defaults to the file name.")
@click.pass_context
def add_item(
    ctx: click.Context,
    ref: str,
    source: Optional[Path],
    text: Optional[str],
    name: Optional[str],
) -> None:
    """Add a file or text note to space REF."""
    if (source is None) == (text is None):
        fail("Pass exactly one of --file or --text.")
    if text is not None and not name:
        fail("Text notes need a --name.")

    try:
        service = get_space_service(ctx)
        target = service.resolve_space(ref)
        if source is not None:
            item = service.add_file_item(target.id, source, name=name)
        else:
            item = service.add_text_item(target.id, name, text)
    except (GratitudeError, OSError, ValueError) as e:
        fail(f"Failed to add item:\n\n{e}")

    console.print(
        f"[green]✓ Added {item.type.value} '{item.name}' to '{target.name}'[/green]"
    )


@space.command("item-list")
@click.argument("ref")
@click.pass_context
def list_items(ctx: click.Context, ref: str) -> None:
    """List the items in space REF."""
    try:
        service = get_space_service(ctx)
        target = service.resolve_space(ref)
        items = service.list_items(target.id)
    except GratitudeError as e:
        fail(str(e))

    if not items:
        console.print(f"[dim]Space '{target.name}' is empty[/dim]")
        return

    table = Table(title=f"Space: {target.name}", show_header=True, header_style="bold cyan")
    table.add_column("", width=2)
    table.add_column("Name", style="bold")
    table.add_column("Content", max_width=50)
    table.add_column("ID", style="dim")

    for item in items:
        content = item.text if item.type == ItemType.TEXT else str(item.data_path)
        table.add_row(ITEM_ICONS[item.type], item.name, content or "-", short_id(item.id))

    console.print(table)


@space.command("item-delete")
@click.argument("ref")
@click.pass_context
def delete_item(ctx: click.Context, ref: str) -> None:
    """Delete item REF (an id prefix) and its stored file."""
    try:
        service = get_space_service(ctx)
        removed = service.delete_item(service.resolve_item(ref).id)
    except GratitudeError as e:
        fail(str(e))
    console.print(f"[green]✓ Deleted '{removed.name}'[/green]")
