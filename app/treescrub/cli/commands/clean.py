"""Clean command implementation.

Removes build output, IDE scratch files and source-control bindings
from a project tree and reports what was done.
"""

from pathlib import Path
from typing import Annotated

import typer

from treescrub.cleaner.errors import RootNotFoundError
from treescrub.cleaner.models import OutcomeStatus, RunSummary
from treescrub.cleaner.orchestrator import run
from treescrub.cli.display import create_outcomes_table, print_run_summary
from treescrub.core.settings import require_settings
from treescrub.utils.formatting import console, print_error, print_info


def clean(
    ctx: typer.Context,
    root: Annotated[
        Path,
        typer.Argument(help="Project directory to clean."),
    ],
    recursive: Annotated[
        bool | None,
        typer.Option(
            "--recursive/--no-recursive",
            "-r/-R",
            help="Clean every level below ROOT, or only ROOT itself.",
            show_default=False,
        ),
    ] = None,
    force: Annotated[
        bool | None,
        typer.Option(
            "--force/--no-force",
            help="Clear read-only attributes before deleting.",
            show_default=False,
        ),
    ] = None,
    strip_project_bindings: Annotated[
        bool | None,
        typer.Option(
            "--strip-project-bindings/--keep-project-bindings",
            "-p/-P",
            help="Also remove source control bindings from project files.",
            show_default=False,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be cleaned."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file (default: ~/.config/treescrub/config.toml).",
        ),
    ] = None,
) -> None:
    """Delete build output and strip source control bindings from ROOT."""
    settings = require_settings(config_path)
    config = settings.to_configuration(
        recursive=recursive,
        force=force,
        strip_project_bindings=strip_project_bindings,
        dry_run=dry_run,
    )

    try:
        summary = run(root, config, settings.to_pattern_set())
    except RootNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=2) from e

    quiet = bool((ctx.obj or {}).get("quiet", False))
    _print_summary(summary, quiet=quiet)

    if summary.entry_errors:
        raise typer.Exit(code=1)


def _print_summary(summary: RunSummary, quiet: bool) -> None:
    """Display the results table (unless quiet) and the counters."""
    label = "Dry run for" if summary.dry_run else "Cleaned directory"
    if not quiet:
        print_info(f"{label} {summary.root}")

    shown = summary.outcomes
    if quiet:
        shown = tuple(o for o in summary.outcomes if o.status == OutcomeStatus.ERROR)
    if shown:
        console.print(create_outcomes_table(shown))

    print_run_summary(summary)
