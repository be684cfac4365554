"""Settings commands.

Provides commands to show the effective settings and to write a
default settings file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from treescrub.core.paths import get_settings_path
from treescrub.core.settings import Settings, SettingsError, require_settings, save_settings
from treescrub.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the settings file.",
    no_args_is_help=True,
)


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file (default: ~/.config/treescrub/config.toml).",
        ),
    ] = None,
) -> None:
    """Show the effective run flags and deletion patterns."""
    settings = require_settings(config_path)
    source = config_path or get_settings_path()
    if source.exists():
        print_info(f"Settings from {source}")
    else:
        print_info("Using built-in defaults")

    console.print(_flags_table(settings))
    console.print(_patterns_table(settings))


@app.command()
def init(
    path: Annotated[
        Path | None,
        typer.Argument(help="Where to write the file (default: ~/.config/treescrub/config.toml)."),
    ] = None,
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Replace an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file containing the built-in defaults."""
    target = path or get_settings_path()
    if target.exists() and not overwrite:
        print_error(f"Settings file already exists: {target}")
        print_info("Use --overwrite to replace it.")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(Settings(), target)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")


# === Private helper functions ===


def _flags_table(settings: Settings) -> Table:
    table = Table(title="Run Flags", header_style="bold_header", border_style="border")
    table.add_column("Flag", style="bold")
    table.add_column("Value")
    for name, value in settings.clean.model_dump().items():
        table.add_row(name, "[success]yes[/]" if value else "[muted]no[/]")
    return table


def _patterns_table(settings: Settings) -> Table:
    table = Table(title="Deletion Patterns", header_style="bold_header", border_style="border")
    table.add_column("Table", style="bold")
    table.add_column("Patterns")
    for name, values in settings.patterns.model_dump().items():
        table.add_row(name, ", ".join(values) or "[muted]-[/]")
    return table
