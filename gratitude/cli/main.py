"""Main CLI entry point for Gratitude.

This module provides the main click group and lazy loading
for command modules to keep startup fast.
"""

from pathlib import Path
from typing import Optional

import click

from gratitude.cli.common import console, fail
from gratitude.config import create_template_config, get_config_path, get_log_level, load_config
from gratitude.errors import ConfigError
from gratitude.logging_setup import configure_logging


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when one of their commands is
    actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        # Commands are registered under their click name, which may differ
        # from the function name (e.g. "list" -> list_entries).
        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    # Journal
    "add": "gratitude.cli.journal",
    "edit": "gratitude.cli.journal",
    "delete": "gratitude.cli.journal",
    "list": "gratitude.cli.journal",
    "show": "gratitude.cli.journal",
    "today": "gratitude.cli.journal",
    "recompute": "gratitude.cli.journal",
    # Streaks
    "streak": "gratitude.cli.streaks",
    "heatmap": "gratitude.cli.streaks",
    "memory": "gratitude.cli.streaks",
    # Data
    "export": "gratitude.cli.data",
    "import": "gratitude.cli.data",
    "wipe": "gratitude.cli.data",
    # Prompts and spaces
    "prompt": "gratitude.cli.prompts",
    "space": "gratitude.cli.spaces",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="gratitude")
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the config file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """Gratitude - write down three good things every day.

    Keep a daily gratitude journal, build streaks of consecutive days,
    and collect notes and files in Spaces.

    \b
    Quick Start:
      gratitude add            # Write today's entry
      gratitude streak         # See your current streak
      gratitude list           # Browse past entries
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    try:
        config = load_config(config_path)
    except ConfigError as e:
        fail(str(e), title="Configuration Error")

    ctx.obj["config"] = config
    configure_logging(get_log_level(config), verbose=verbose)


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Create a template configuration file."""
    path = ctx.obj.get("config_path") or get_config_path()
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        return

    written = create_template_config(path)
    console.print(f"[green]✓ Wrote config template to {written}[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
