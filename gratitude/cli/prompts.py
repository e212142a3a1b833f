"""Prompt commands for Gratitude CLI."""

import click
from rich.table import Table

from gratitude.cli.common import console, fail, get_journal_service, get_prompt_book
from gratitude.errors import GratitudeError


@click.group()
def prompt() -> None:
    """Journaling prompts.

    \b
    Examples:
      gratitude prompt show              # Today's prompt
      gratitude prompt show --random     # Any prompt
      gratitude prompt add "Who helped you today?"
    """
    pass


@prompt.command("show")
@click.option("--random", "pick_random", is_flag=True, help="Pick a random prompt.")
@click.pass_context
def show_prompt(ctx: click.Context, pick_random: bool) -> None:
    """Show today's prompt."""
    try:
        book = get_prompt_book(ctx)
        if pick_random:
            text = book.random_prompt()
        else:
            text = book.prompt_for_day(get_journal_service(ctx).today())
    except GratitudeError as e:
        fail(str(e))

    if text is None:
        console.print("[dim]No prompts. Restore the defaults with [cyan]gratitude prompt reset[/cyan][/dim]")
        return
    console.print(f"[cyan]{text}[/cyan]")


@prompt.command("list")
@click.pass_context
def list_prompts(ctx: click.Context) -> None:
    """List all prompts."""
    prompts = get_prompt_book(ctx).prompts()

    table = Table(title="Prompts", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Prompt")
    for i, text in enumerate(prompts, 1):
        table.add_row(str(i), text)

    console.print(table)


@prompt.command("add")
@click.argument("text")
@click.pass_context
def add_prompt(ctx: click.Context, text: str) -> None:
    """Add a prompt."""
    try:
        get_prompt_book(ctx).add(text)
    except ValueError as e:
        fail(str(e))
    console.print("[green]✓ Added prompt[/green]")


@prompt.command("remove")
@click.argument("number", type=click.IntRange(min=1))
@click.pass_context
def remove_prompt(ctx: click.Context, number: int) -> None:
    """Remove prompt NUMBER, as shown by 'gratitude prompt list'."""
    try:
        removed = get_prompt_book(ctx).remove(number - 1)
    except IndexError as e:
        fail(str(e))
    console.print(f"[green]✓ Removed:[/green] {removed}")


@prompt.command("reset")
@click.pass_context
def reset_prompts(ctx: click.Context) -> None:
    """Restore the default prompts."""
    get_prompt_book(ctx).reset()
    console.print("[green]✓ Restored default prompts[/green]")
