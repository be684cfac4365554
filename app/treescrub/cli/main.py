"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from treescrub import __version__
from treescrub.cli.commands import clean, config

# Create main Typer app
app = typer.Typer(
    name="treescrub",
    help="Remove build output and legacy source control bindings from project trees.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"treescrub version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every action taken.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only report failures and totals.",
        ),
    ] = False,
) -> None:
    """treescrub - sanitize project trees for archival or migration.

    Deletes bin/obj and IDE scratch output, per-user settings files and
    SourceSafe/Team Foundation binding files, and strips source control
    bindings from solution and project files.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="clean")(clean.clean)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
