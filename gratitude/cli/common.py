"""Helpers shared by the CLI command modules."""

from typing import NoReturn

import click
from rich.console import Console
from rich.panel import Panel

from gratitude.config import get_db_path, get_files_dir, get_timezone
from gratitude.db.store import DataStore
from gratitude.services import JournalService, PromptBook, SpaceService

console = Console()

DATE_FORMATS = ["%Y-%m-%d"]


def fail(message: str, title: str = "Error") -> NoReturn:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def get_config(ctx: click.Context) -> dict:
    """Configuration loaded by the root command."""
    return ctx.find_object(dict).get("config", {})


def get_data_store(ctx: click.Context) -> DataStore:
    """Get the data store instance, opened once per invocation."""
    obj = ctx.find_object(dict)
    if "store" not in obj:
        obj["store"] = DataStore(get_db_path(get_config(ctx)))
    return obj["store"]


def get_journal_service(ctx: click.Context) -> JournalService:
    """Journal service using the configured timezone."""
    return JournalService(get_data_store(ctx), tz=get_timezone(get_config(ctx)))


def get_space_service(ctx: click.Context) -> SpaceService:
    return SpaceService(get_data_store(ctx), get_files_dir(get_config(ctx)))


def get_prompt_book(ctx: click.Context) -> PromptBook:
    return PromptBook(get_data_store(ctx))


def short_id(value) -> str:
    """First eight characters of an id, enough to address it."""
    return str(value)[:8]
