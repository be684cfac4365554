"""Rich display functions for cleanup results.

Provides the results table and summary printer used by the clean
command. The cleanup engine returns structured data only; all console
output lives here.
"""

from rich.table import Table

from treescrub.cleaner.models import ActionKind, EntryOutcome, OutcomeStatus, RunStatus, RunSummary
from treescrub.utils.formatting import console, print_error, print_info, print_success, print_warning

_ACTION_LABELS: dict[ActionKind, str] = {
    ActionKind.DELETE_DIRECTORY: "directory",
    ActionKind.DELETE_FILE: "file",
    ActionKind.CLEAN_SOLUTION: "solution",
    ActionKind.CLEAN_PROJECT: "project",
    ActionKind.SCAN: "scan",
}


def format_status(outcome: EntryOutcome) -> str:
    """Format an outcome status with color markup.

    Args:
        outcome: The outcome to format.

    Returns:
        Rich markup string for the status column.
    """
    if outcome.status == OutcomeStatus.DRY_RUN:
        return "[info]dry-run[/]"
    if outcome.status == OutcomeStatus.SKIPPED:
        return "[skipped]skipped[/]"
    if outcome.status == OutcomeStatus.ERROR:
        return "[error]failed[/]"
    if outcome.action in (ActionKind.CLEAN_SOLUTION, ActionKind.CLEAN_PROJECT):
        return "[cleaned]cleaned[/]"
    return "[deleted]deleted[/]"


def create_outcomes_table(outcomes: tuple[EntryOutcome, ...] | list[EntryOutcome]) -> Table:
    """Create a Rich table listing per-entry outcomes.

    Args:
        outcomes: Outcomes to display, in run order.

    Returns:
        Rich Table with Path, Type, Status and Details columns.
    """
    table = Table(
        title="Cleanup Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("Type", width=10)
    table.add_column("Status", width=10)
    table.add_column("Details", style="dim")

    for outcome in outcomes:
        table.add_row(
            outcome.path,
            _ACTION_LABELS[outcome.action],
            format_status(outcome),
            outcome.message or "",
        )

    return table


def print_run_summary(summary: RunSummary) -> None:
    """Print the final counters of a run.

    A run that touched nothing is reported as a warning, so it stands
    apart from a run that changed the tree.

    Args:
        summary: Summary returned by the cleanup engine.
    """
    errors = summary.entry_errors

    if summary.status == RunStatus.NOTHING_TO_CLEAN:
        print_warning("Nothing to clean")
    else:
        counters = (
            ("Deleted directories", "Directories to delete", summary.directories_deleted),
            ("Deleted files", "Files to delete", summary.files_deleted),
            ("Cleaned solution files", "Solution files to clean", summary.solution_files_cleaned),
            ("Cleaned project files", "Project files to clean", summary.project_files_cleaned),
        )
        console.print()
        for label, dry_label, count in counters:
            if count:
                console.print(f"{dry_label if summary.dry_run else label}: [bold]{count}[/]")

    if errors:
        print_error(f"{len(errors)} entr{'y' if len(errors) == 1 else 'ies'} could not be processed")
    elif summary.dry_run:
        print_info("Dry-run: nothing was changed.")
    elif summary.status == RunStatus.CLEANED:
        print_success("Cleanup complete.")
