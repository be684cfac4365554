"""Cleanup orchestration.

Composes the scanner, the deleter and the binding stripper into a
single run over one root directory. The phases run in a fixed order:

1. delete directories (build output, then IDE/VCS scratch)
2. delete files
3. strip bindings from solution files
4. strip bindings from project files (opt-in)
5. aggregate counters into a RunSummary

A failure on one entry is recorded and the run moves on; only a
missing root stops it.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from treescrub.cleaner.attributes import FileAttributes, OsFileAttributes
from treescrub.cleaner.bindings import BindingStripper
from treescrub.cleaner.deleter import Deleter
from treescrub.cleaner.errors import EntryError, RootNotFoundError
from treescrub.cleaner.models import (
    ActionKind,
    Configuration,
    DeletionPatternSet,
    EntryKind,
    EntryOutcome,
    OutcomeStatus,
    RunSummary,
)
from treescrub.cleaner.patterns import SOLUTION_FILE_PATTERN, XML_PROJECT_EXTENSIONS
from treescrub.cleaner.safety import is_safe_to_delete
from treescrub.cleaner.scanner import TreeScanner

logger = logging.getLogger(__name__)


@dataclass
class _RunState:
    """Mutable counters for the run in progress."""

    directories_deleted: int = 0
    files_deleted: int = 0
    solution_files_cleaned: int = 0
    project_files_cleaned: int = 0
    outcomes: list[EntryOutcome] = field(default_factory=list)
    seen: set[Path] = field(default_factory=set)
    removed_directories: list[Path] = field(default_factory=list)

    def is_under_removed(self, path: Path) -> bool:
        return any(path.is_relative_to(d) for d in self.removed_directories)


class CleanupOrchestrator:
    """Runs all cleanup phases over one root directory.

    The orchestrator holds no state between runs; each ``clean_all()``
    call scans the tree afresh and returns a new RunSummary.

    Args:
        root: Directory to clean.
        config: Run flags. Defaults to Configuration().
        patterns: Deletion pattern tables. Defaults to DeletionPatternSet().
        attributes: Read-only attribute implementation.

    Raises:
        RootNotFoundError: If root does not exist or is not a directory.
    """

    def __init__(
        self,
        root: Path | str,
        config: Configuration | None = None,
        patterns: DeletionPatternSet | None = None,
        attributes: FileAttributes | None = None,
    ) -> None:
        root_path = Path(root).expanduser()
        if not root_path.is_dir():
            raise RootNotFoundError(root)

        self._root = root_path.resolve()
        self._config = config or Configuration()
        self._patterns = patterns or DeletionPatternSet()
        self._attributes = attributes or OsFileAttributes()

    @property
    def root(self) -> Path:
        """Resolved directory being cleaned."""
        return self._root

    @property
    def config(self) -> Configuration:
        """Run flags."""
        return self._config

    def clean_all(self) -> RunSummary:
        """Run every phase and return the aggregated summary.

        Returns:
            RunSummary with counters and per-entry outcomes.
        """
        logger.info("Cleaning directory %s", self._root)

        state = _RunState()
        scanner = TreeScanner(self._root, recursive=self._config.recursive)
        deleter = Deleter(
            force=self._config.force,
            dry_run=self._config.dry_run,
            attributes=self._attributes,
        )
        stripper = BindingStripper(dry_run=self._config.dry_run, attributes=self._attributes)

        for batch in self._patterns.directory_batches:
            self._delete_directories(scanner, deleter, batch, state)
        self._delete_files(scanner, deleter, state)
        self._strip_solutions(scanner, stripper, state)
        if self._config.strip_project_bindings:
            self._strip_projects(scanner, stripper, state)

        for path, message in scanner.errors:
            state.outcomes.append(
                EntryOutcome(
                    path=path,
                    action=ActionKind.SCAN,
                    status=OutcomeStatus.ERROR,
                    message=message,
                )
            )

        summary = RunSummary(
            root=str(self._root),
            directories_deleted=state.directories_deleted,
            files_deleted=state.files_deleted,
            solution_files_cleaned=state.solution_files_cleaned,
            project_files_cleaned=state.project_files_cleaned,
            outcomes=tuple(state.outcomes),
            dry_run=self._config.dry_run,
        )

        if summary.total_actions == 0:
            logger.info("Nothing to clean in %s", self._root)
        return summary

    # === Phases ===

    def _delete_directories(
        self,
        scanner: TreeScanner,
        deleter: Deleter,
        patterns: tuple[str, ...],
        state: _RunState,
    ) -> None:
        for candidate in scanner.find_candidates(patterns, EntryKind.DIRECTORY):
            directory = candidate.path
            if not self._claim(directory, state):
                continue

            if not is_safe_to_delete(directory, self._patterns.project_extensions):
                logger.info("Skipping %s because it doesn't seem to be a build directory", directory)
                state.outcomes.append(
                    EntryOutcome(
                        path=str(directory),
                        action=ActionKind.DELETE_DIRECTORY,
                        status=OutcomeStatus.SKIPPED,
                        message="No project file next to it",
                    )
                )
                continue

            logger.debug("%s matched %s", directory, candidate.pattern)
            outcome = deleter.delete(candidate)
            state.outcomes.append(outcome)
            if outcome.success:
                state.directories_deleted += 1
                state.removed_directories.append(directory)

    def _delete_files(self, scanner: TreeScanner, deleter: Deleter, state: _RunState) -> None:
        for candidate in scanner.find_candidates(self._patterns.files, EntryKind.FILE):
            if not self._claim(candidate.path, state):
                continue

            logger.debug("%s matched %s", candidate.path, candidate.pattern)
            outcome = deleter.delete(candidate)
            state.outcomes.append(outcome)
            if outcome.success:
                state.files_deleted += 1

    def _strip_solutions(
        self,
        scanner: TreeScanner,
        stripper: BindingStripper,
        state: _RunState,
    ) -> None:
        for solution in scanner.find_files((SOLUTION_FILE_PATTERN,)):
            if not self._claim(solution, state):
                continue

            try:
                cleaned = stripper.strip_solution_file(solution)
            except EntryError as e:
                self._record_error(state, solution, ActionKind.CLEAN_SOLUTION, e)
                continue

            if cleaned:
                state.solution_files_cleaned += 1
                state.outcomes.append(
                    EntryOutcome(
                        path=str(solution),
                        action=ActionKind.CLEAN_SOLUTION,
                        status=self._done_status(),
                    )
                )

    def _strip_projects(
        self,
        scanner: TreeScanner,
        stripper: BindingStripper,
        state: _RunState,
    ) -> None:
        patterns = tuple(f"*{ext}" for ext in XML_PROJECT_EXTENSIONS)
        for project in scanner.find_files(patterns):
            if not self._claim(project, state):
                continue

            try:
                removed = stripper.strip_project_file(project)
            except EntryError as e:
                self._record_error(state, project, ActionKind.CLEAN_PROJECT, e)
                continue

            if removed:
                state.project_files_cleaned += 1
                state.outcomes.append(
                    EntryOutcome(
                        path=str(project),
                        action=ActionKind.CLEAN_PROJECT,
                        status=self._done_status(),
                        message=f"{removed} binding element(s)",
                    )
                )

    # === Helpers ===

    def _claim(self, path: Path, state: _RunState) -> bool:
        """Mark a path as handled; False if it was seen or removed with a parent.

        Dry-run applies the same rule to directories that would have been
        removed, so its counts match a real run.
        """
        if path in state.seen:
            return False
        state.seen.add(path)

        if state.is_under_removed(path):
            logger.debug("Already removed with its parent: %s", path)
            return False
        return True

    def _done_status(self) -> OutcomeStatus:
        return OutcomeStatus.DRY_RUN if self._config.dry_run else OutcomeStatus.SUCCESS

    @staticmethod
    def _record_error(state: _RunState, path: Path, action: ActionKind, error: EntryError) -> None:
        logger.warning("Failed to clean %s: %s", path, error.reason)
        state.outcomes.append(
            EntryOutcome(
                path=str(path),
                action=action,
                status=OutcomeStatus.ERROR,
                message=error.reason,
            )
        )


def run(
    root: Path | str,
    config: Configuration | None = None,
    patterns: DeletionPatternSet | None = None,
    attributes: FileAttributes | None = None,
) -> RunSummary:
    """Clean a project tree.

    Args:
        root: Directory to clean.
        config: Run flags. Defaults to Configuration().
        patterns: Deletion pattern tables. Defaults to DeletionPatternSet().
        attributes: Read-only attribute implementation.

    Returns:
        RunSummary describing everything that was done.

    Raises:
        RootNotFoundError: If root does not exist or is not a directory.
    """
    return CleanupOrchestrator(root, config, patterns, attributes).clean_all()
