"""Tree scanner for deletion candidates.

Walks a project tree and yields the directories and files whose names
match deletion patterns. Scanning never modifies the tree; the
iterators are lazy, so a consumer may delete what it receives while
the walk continues.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from treescrub.cleaner.models import CandidateEntry, EntryKind
from treescrub.cleaner.patterns import matches

logger = logging.getLogger(__name__)


class TreeScanner:
    """Finds entries under a root directory that match glob patterns.

    Patterns are processed in the order given; for each pattern the tree
    is walked once and matches are yielded in filesystem order. An entry
    matching two patterns is yielded twice, once per pattern. Symlinked
    directories are not followed.

    Directories that cannot be listed are skipped and recorded in
    ``errors``.

    Args:
        root: Directory to scan.
        recursive: If False, only direct children of the root are examined.
    """

    def __init__(self, root: Path, *, recursive: bool = True) -> None:
        self._root = Path(root)
        self._recursive = recursive
        self._errors: dict[str, str] = {}

    @property
    def root(self) -> Path:
        """Directory being scanned."""
        return self._root

    @property
    def errors(self) -> list[tuple[str, str]]:
        """(path, message) for each directory that could not be listed."""
        return list(self._errors.items())

    def find_directories(self, patterns: Iterable[str]) -> Iterator[Path]:
        """Yield directories whose name matches any of the patterns.

        Args:
            patterns: Glob patterns, processed in order.

        Yields:
            Absolute paths of matching directories.
        """
        for pattern in patterns:
            yield from self._find(pattern, EntryKind.DIRECTORY)

    def find_files(self, patterns: Iterable[str]) -> Iterator[Path]:
        """Yield files whose name matches any of the patterns.

        Args:
            patterns: Glob patterns, processed in order.

        Yields:
            Absolute paths of matching files.
        """
        for pattern in patterns:
            yield from self._find(pattern, EntryKind.FILE)

    def find_candidates(self, patterns: Iterable[str], kind: EntryKind) -> Iterator[CandidateEntry]:
        """Yield matches wrapped as CandidateEntry, tagged with their pattern.

        Args:
            patterns: Glob patterns, processed in order.
            kind: Whether to look for directories or files.

        Yields:
            CandidateEntry for each match.
        """
        for pattern in patterns:
            for path in self._find(pattern, kind):
                yield CandidateEntry(path=path, kind=kind, pattern=pattern)

    def _find(self, pattern: str, kind: EntryKind) -> Iterator[Path]:
        if self._recursive:
            yield from self._find_recursive(pattern, kind)
        else:
            yield from self._find_top_level(pattern, kind)

    def _find_recursive(self, pattern: str, kind: EntryKind) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(self._root, onerror=self._on_walk_error):
            names = dirnames if kind == EntryKind.DIRECTORY else filenames
            for name in names:
                if matches(name, pattern):
                    yield Path(dirpath) / name

    def _find_top_level(self, pattern: str, kind: EntryKind) -> Iterator[Path]:
        try:
            with os.scandir(self._root) as entries:
                matched = [
                    Path(entry.path)
                    for entry in entries
                    if matches(entry.name, pattern) and self._is_kind(entry, kind)
                ]
        except OSError as e:
            self._on_walk_error(e)
            return

        yield from matched

    @staticmethod
    def _is_kind(entry: os.DirEntry[str], kind: EntryKind) -> bool:
        try:
            is_dir = entry.is_dir()
        except OSError:
            return False
        return is_dir if kind == EntryKind.DIRECTORY else not is_dir

    def _on_walk_error(self, error: OSError) -> None:
        """Record a directory that could not be listed.

        Directories that disappear mid-walk (removed by the consumer) are
        not errors.
        """
        path = error.filename or str(self._root)
        if isinstance(error, FileNotFoundError) and path != str(self._root):
            logger.debug("Directory vanished during scan: %s", path)
            return

        message = error.strerror or str(error)
        if path not in self._errors:
            logger.warning("Cannot scan directory %s: %s", path, message)
            self._errors[path] = message
