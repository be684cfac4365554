"""Project tree cleanup engine.

This module provides pattern matching, tree scanning, deletion and
source-control binding removal for project trees, composed by
CleanupOrchestrator and the ``run()`` entry point.
"""

from treescrub.cleaner.attributes import FileAttributes, OsFileAttributes
from treescrub.cleaner.bindings import BINDING_ELEMENT_NAMES, BindingStripper
from treescrub.cleaner.deleter import Deleter
from treescrub.cleaner.errors import (
    CleanerError,
    DescriptorParseError,
    DescriptorWriteError,
    EntryAccessError,
    EntryError,
    RootNotFoundError,
)
from treescrub.cleaner.models import (
    ActionKind,
    CandidateEntry,
    Configuration,
    DeletionPatternSet,
    EntryKind,
    EntryOutcome,
    OutcomeStatus,
    RunStatus,
    RunSummary,
)
from treescrub.cleaner.orchestrator import CleanupOrchestrator, run
from treescrub.cleaner.patterns import matches, matches_any
from treescrub.cleaner.safety import is_safe_to_delete
from treescrub.cleaner.scanner import TreeScanner

__all__ = [
    "BINDING_ELEMENT_NAMES",
    "ActionKind",
    "BindingStripper",
    "CandidateEntry",
    "CleanerError",
    "CleanupOrchestrator",
    "Configuration",
    "Deleter",
    "DeletionPatternSet",
    "DescriptorParseError",
    "DescriptorWriteError",
    "EntryAccessError",
    "EntryError",
    "EntryKind",
    "EntryOutcome",
    "FileAttributes",
    "OsFileAttributes",
    "OutcomeStatus",
    "RootNotFoundError",
    "RunStatus",
    "RunSummary",
    "TreeScanner",
    "is_safe_to_delete",
    "matches",
    "matches_any",
    "run",
]
