"""Read-only attribute handling.

Deletion and rewrite code talks to a ``FileAttributes`` object instead
of calling ``os.chmod`` directly, so tests can substitute an in-memory
implementation.
"""

import ctypes
import logging
import os
import stat
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

_BLOCKING_ATTRIBUTES = (
    stat.FILE_ATTRIBUTE_READONLY
    | stat.FILE_ATTRIBUTE_HIDDEN
    | stat.FILE_ATTRIBUTE_SYSTEM
)


class FileAttributes(Protocol):
    """Capability to inspect and clear the read-only attribute of a path."""

    def is_read_only(self, path: Path) -> bool:
        """Return True if the path cannot be written."""
        ...

    def clear_read_only(self, path: Path) -> None:
        """Make the path writable. Raises OSError on failure."""
        ...


class OsFileAttributes:
    """FileAttributes backed by ``os.chmod``.

    On POSIX clearing adds the owner write bit (and owner read/execute for
    directories, so their contents can be listed and removed). On Windows
    it also drops the hidden and system attributes, which block deletion
    of some IDE files just like read-only does. Symlinks are never
    followed.
    """

    def is_read_only(self, path: Path) -> bool:
        mode = os.lstat(path).st_mode
        if stat.S_ISLNK(mode):
            return False
        return not mode & stat.S_IWRITE

    def clear_read_only(self, path: Path) -> None:
        st = os.lstat(path)
        if stat.S_ISLNK(st.st_mode):
            return

        # Only present on Windows.
        flags = getattr(st, "st_file_attributes", 0)
        if flags & _BLOCKING_ATTRIBUTES:
            self._set_windows_attributes(path, flags & ~_BLOCKING_ATTRIBUTES)
            logger.debug("Cleared blocking attributes on %s", path)
            return

        wanted = stat.S_IWRITE
        if stat.S_ISDIR(st.st_mode):
            wanted |= stat.S_IREAD | stat.S_IEXEC

        if st.st_mode & wanted != wanted:
            os.chmod(path, stat.S_IMODE(st.st_mode) | wanted)
            logger.debug("Cleared read-only attribute on %s", path)

    @staticmethod
    def _set_windows_attributes(path: Path, flags: int) -> None:
        set_attributes = ctypes.windll.kernel32.SetFileAttributesW  # type: ignore[attr-defined]
        if not set_attributes(str(path), flags or stat.FILE_ATTRIBUTE_NORMAL):
            raise ctypes.WinError()  # type: ignore[attr-defined]


def clear_tree_read_only(root: Path, attributes: FileAttributes) -> None:
    """Clear the read-only attribute on a directory and everything below it.

    The walk is top-down and each child is made writable before the walk
    descends into it, so locked-down subdirectories become listable.

    Args:
        root: Directory to process.
        attributes: Attribute implementation to use.

    Raises:
        OSError: If an attribute cannot be changed.
    """
    attributes.clear_read_only(root)
    for dirpath, dirnames, filenames in os.walk(root):
        for name in (*dirnames, *filenames):
            attributes.clear_read_only(Path(dirpath) / name)
