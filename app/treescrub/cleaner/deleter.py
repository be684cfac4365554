"""Deletion of matched directories and files.

Handles removal of single entries with read-only clearing (force
mode) and dry-run support. Failures are isolated per entry and
reported as outcomes; nothing raises past ``delete_directory`` or
``delete_file``.
"""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import Any

from treescrub.cleaner.attributes import FileAttributes, OsFileAttributes, clear_tree_read_only
from treescrub.cleaner.errors import EntryAccessError
from treescrub.cleaner.models import ActionKind, CandidateEntry, EntryKind, EntryOutcome, OutcomeStatus

logger = logging.getLogger(__name__)


class Deleter:
    """Deletes directories and files one at a time.

    Attributes:
        _force: Clear read-only attributes before deleting.
        _dry_run: Report what would be deleted without deleting.
        _attributes: Read-only attribute implementation.
    """

    def __init__(
        self,
        *,
        force: bool = True,
        dry_run: bool = False,
        attributes: FileAttributes | None = None,
    ) -> None:
        """Initialize the Deleter.

        Args:
            force: If True, clear read-only attributes before deleting.
            dry_run: If True, report what would be deleted without deleting.
            attributes: Attribute implementation; defaults to OsFileAttributes.
        """
        self._force = force
        self._dry_run = dry_run
        self._attributes = attributes or OsFileAttributes()

    def delete(self, entry: CandidateEntry) -> EntryOutcome:
        """Delete a scanned candidate according to its kind."""
        if entry.kind == EntryKind.DIRECTORY:
            return self.delete_directory(entry.path)
        return self.delete_file(entry.path)

    def delete_directory(self, path: Path) -> EntryOutcome:
        """Delete a directory and all of its contents.

        A symlink to a directory is removed as a link; its target is kept.

        Args:
            path: Directory to delete.

        Returns:
            EntryOutcome with SUCCESS, DRY_RUN or ERROR status.
        """
        return self._delete(path, ActionKind.DELETE_DIRECTORY, self._remove_directory)

    def delete_file(self, path: Path) -> EntryOutcome:
        """Delete a single file or symlink.

        Args:
            path: File to delete.

        Returns:
            EntryOutcome with SUCCESS, DRY_RUN or ERROR status.
        """
        return self._delete(path, ActionKind.DELETE_FILE, self._remove_file)

    def _delete(
        self,
        path: Path,
        action: ActionKind,
        remove: Callable[[Path], None],
    ) -> EntryOutcome:
        try:
            self._check_exists(path)
            if self._dry_run:
                logger.info("Dry-run: would delete %s", path)
                return EntryOutcome(path=str(path), action=action, status=OutcomeStatus.DRY_RUN)
            remove(path)
        except EntryAccessError as e:
            logger.warning("Failed to delete %s: %s", path, e.reason)
            return EntryOutcome(
                path=str(path),
                action=action,
                status=OutcomeStatus.ERROR,
                message=e.reason,
            )

        logger.info("Deleted %s", path)
        return EntryOutcome(path=str(path), action=action, status=OutcomeStatus.SUCCESS)

    @staticmethod
    def _check_exists(path: Path) -> None:
        """Raise EntryAccessError if the entry is gone or cannot be inspected.

        A dangling symlink still exists as an entry.
        """
        try:
            path.lstat()
        except FileNotFoundError as e:
            raise EntryAccessError(path, f"Path does not exist: {path}") from e
        except OSError as e:
            raise EntryAccessError(path, str(e)) from e

    def _remove_directory(self, path: Path) -> None:
        try:
            if path.is_symlink():
                path.unlink()
                return

            if self._force:
                clear_tree_read_only(path, self._attributes)
                shutil.rmtree(path, onexc=self._retry_writable)
            else:
                shutil.rmtree(path)
        except OSError as e:
            raise EntryAccessError(path, str(e)) from e

    def _remove_file(self, path: Path) -> None:
        try:
            if self._force:
                self._attributes.clear_read_only(path)
            path.unlink()
        except OSError as e:
            raise EntryAccessError(path, str(e)) from e

    def _retry_writable(self, func: Callable[..., Any], path: str, exc: BaseException) -> None:
        """rmtree error hook: make the entry and its parent writable, then retry once."""
        if not isinstance(exc, PermissionError):
            raise exc

        target = Path(path)
        self._attributes.clear_read_only(target.parent)
        if target.exists() or target.is_symlink():
            self._attributes.clear_read_only(target)
        func(path)
