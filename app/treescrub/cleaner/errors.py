"""Exceptions raised by the cleanup engine.

Only ``RootNotFoundError`` escapes a run. The per-entry errors are
raised inside the engine and converted into outcomes by the caller.
"""

from pathlib import Path


class CleanerError(Exception):
    """Base exception for cleanup errors."""


class RootNotFoundError(CleanerError):
    """Raised when the directory to clean does not exist."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)
        super().__init__(f"Directory not found: {root}")


class EntryError(CleanerError):
    """Base for errors tied to a single file or directory."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(reason)


class EntryAccessError(EntryError):
    """Raised when an entry cannot be read, changed or removed."""


class DescriptorParseError(EntryError):
    """Raised when a project descriptor is not well-formed XML."""


class DescriptorWriteError(EntryError):
    """Raised when a cleaned descriptor cannot be written back."""
