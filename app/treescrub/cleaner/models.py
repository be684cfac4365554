"""Cleanup domain models.

This module defines the data structures passed between the scanner,
the deleter, the binding stripper and the orchestrator: run
configuration, pattern tables, candidate entries, per-entry outcomes
and the aggregated run summary.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from treescrub.cleaner.patterns import (
    DEFAULT_DIRECTORY_PATTERNS,
    DEFAULT_EXTRA_DIRECTORY_PATTERNS,
    DEFAULT_FILE_PATTERNS,
    PROJECT_FILE_EXTENSIONS,
)


class EntryKind(str, Enum):
    """Kind of filesystem entry found by the scanner.

    Attributes:
        DIRECTORY: Directory, deleted recursively.
        FILE: Regular file or symlink.
    """

    DIRECTORY = "directory"
    FILE = "file"


class ActionKind(str, Enum):
    """Action the engine attempted on an entry.

    Attributes:
        DELETE_DIRECTORY: Recursive directory removal.
        DELETE_FILE: Single file removal.
        CLEAN_SOLUTION: Source-control section removed from a solution file.
        CLEAN_PROJECT: Source-control elements removed from a project file.
        SCAN: Directory could not be scanned.
    """

    DELETE_DIRECTORY = "delete_directory"
    DELETE_FILE = "delete_file"
    CLEAN_SOLUTION = "clean_solution"
    CLEAN_PROJECT = "clean_project"
    SCAN = "scan"


class OutcomeStatus(str, Enum):
    """Result of a single action.

    Attributes:
        SUCCESS: The action changed the tree.
        SKIPPED: The entry matched but was deliberately left alone.
        ERROR: The action failed; the run continued.
        DRY_RUN: The action would have been performed.
    """

    SUCCESS = "success"
    SKIPPED = "skipped"
    ERROR = "error"
    DRY_RUN = "dry_run"


class RunStatus(str, Enum):
    """Overall status of a run.

    Attributes:
        CLEANED: At least one entry was deleted or cleaned.
        NOTHING_TO_CLEAN: The tree had nothing to remove.
    """

    CLEANED = "cleaned"
    NOTHING_TO_CLEAN = "nothing_to_clean"


@dataclass(frozen=True, slots=True)
class Configuration:
    """Flags controlling a cleanup run.

    Attributes:
        recursive: Scan every level below the root, not just the root itself.
        force: Clear read-only attributes before deleting.
        strip_project_bindings: Also rewrite project files, not only solutions.
        dry_run: Report what would happen without modifying the tree.
    """

    recursive: bool = True
    force: bool = True
    strip_project_bindings: bool = False
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class DeletionPatternSet:
    """Glob patterns selecting what a run deletes.

    Directory patterns come in two ordered batches: build output first,
    then IDE and VCS scratch directories. All patterns match the entry
    name only, case-insensitively.

    Attributes:
        directories: Build output directory patterns (first batch).
        extra_directories: Scratch directory patterns (second batch).
        files: File patterns.
        project_extensions: Extensions recognised as project descriptors.
    """

    directories: tuple[str, ...] = DEFAULT_DIRECTORY_PATTERNS
    extra_directories: tuple[str, ...] = DEFAULT_EXTRA_DIRECTORY_PATTERNS
    files: tuple[str, ...] = DEFAULT_FILE_PATTERNS
    project_extensions: tuple[str, ...] = PROJECT_FILE_EXTENSIONS

    @property
    def directory_batches(self) -> tuple[tuple[str, ...], ...]:
        """Directory pattern batches in deletion order."""
        return (self.directories, self.extra_directories)


@dataclass(frozen=True, slots=True)
class CandidateEntry:
    """A filesystem entry matched by a deletion pattern.

    Attributes:
        path: Absolute path of the entry.
        kind: Whether the entry is a directory or a file.
        pattern: The pattern that matched it.
    """

    path: Path
    kind: EntryKind
    pattern: str = ""


@dataclass(frozen=True, slots=True)
class EntryOutcome:
    """Outcome of one action on one entry.

    Attributes:
        path: Absolute path that was operated on.
        action: What was attempted.
        status: How it went.
        message: Error text for failures, a short note otherwise.
    """

    path: str
    action: ActionKind
    status: OutcomeStatus
    message: str | None = None

    @property
    def success(self) -> bool:
        """True if the action changed (or in dry-run, would change) the tree."""
        return self.status in (OutcomeStatus.SUCCESS, OutcomeStatus.DRY_RUN)

    @property
    def failed(self) -> bool:
        """True if the action raised an error."""
        return self.status == OutcomeStatus.ERROR


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Aggregated result of one cleanup run.

    Attributes:
        root: Directory that was cleaned.
        directories_deleted: Number of directories removed.
        files_deleted: Number of files removed.
        solution_files_cleaned: Number of solution files rewritten.
        project_files_cleaned: Number of project files rewritten.
        outcomes: Every per-entry outcome, in the order it happened.
        dry_run: Whether the counts describe a dry run.
    """

    root: str
    directories_deleted: int = 0
    files_deleted: int = 0
    solution_files_cleaned: int = 0
    project_files_cleaned: int = 0
    outcomes: tuple[EntryOutcome, ...] = field(default_factory=tuple)
    dry_run: bool = False

    @property
    def total_actions(self) -> int:
        """Sum of all counters."""
        return (
            self.directories_deleted
            + self.files_deleted
            + self.solution_files_cleaned
            + self.project_files_cleaned
        )

    @property
    def status(self) -> RunStatus:
        """CLEANED if anything was touched, NOTHING_TO_CLEAN otherwise."""
        if self.total_actions == 0:
            return RunStatus.NOTHING_TO_CLEAN
        return RunStatus.CLEANED

    @property
    def entry_errors(self) -> tuple[tuple[str, str], ...]:
        """(path, message) for every failed entry, in order."""
        return tuple(
            (outcome.path, outcome.message or "Unknown error")
            for outcome in self.outcomes
            if outcome.failed
        )

    @property
    def skipped(self) -> tuple[EntryOutcome, ...]:
        """Outcomes for entries deliberately left alone."""
        return tuple(o for o in self.outcomes if o.status == OutcomeStatus.SKIPPED)
