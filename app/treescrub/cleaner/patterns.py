"""Glob patterns for build output, IDE scratch and VCS metadata.

This module defines the default deletion tables and the name matcher
used to apply them. Patterns are shell-style globs matched against an
entry name (never a full path): ``*`` matches any run of characters,
``?`` matches exactly one, and everything else, brackets included,
matches literally. Matching is case-insensitive, like the Windows
filesystems these project trees come from.
"""

import re
from collections.abc import Iterable
from functools import lru_cache

# Build output directories. "bin" is additionally guarded by the
# sibling project file check in treescrub.cleaner.safety.
DEFAULT_DIRECTORY_PATTERNS: tuple[str, ...] = (
    "bin",
    "obj",
)

# IDE, upgrade wizard and VCS scratch directories, removed after build output.
DEFAULT_EXTRA_DIRECTORY_PATTERNS: tuple[str, ...] = (
    # ReSharper caches
    "_ReSharper*",
    # Visual Studio conversion wizard
    "_UpgradeLog",
    # Subversion / Mercurial working copy metadata
    ".svn",
    "_svn",
    ".hg",
    # Packaging output
    "pkg",
    "pkgobj",
)

DEFAULT_FILE_PATTERNS: tuple[str, ...] = (
    # SourceSafe / Team Foundation binding markers
    "*.scc",
    "*.vssscc",
    "*.vspscc",
    # Per-user IDE settings
    "*.csproj.user",
    "*.suo",
    # Conversion wizard report
    "UpgradeLog.xml",
    # macOS Finder metadata
    ".DS_Store",
)

# Extensions that mark a directory as a project directory.
PROJECT_FILE_EXTENSIONS: tuple[str, ...] = (
    ".csproj",
    ".vbproj",
    ".modelproj",
    ".fsproj",
)

# Project files that carry MSBuild source-control elements.
XML_PROJECT_EXTENSIONS: tuple[str, ...] = (
    ".csproj",
    ".vbproj",
    ".fsproj",
)

SOLUTION_FILE_PATTERN = "*.sln"


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    """Translate a glob pattern into an anchored, case-insensitive regex."""
    parts: list[str] = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def matches(name: str, pattern: str) -> bool:
    """Check whether a file or directory name matches a glob pattern.

    Args:
        name: Entry name (basename, not a path).
        pattern: Glob pattern using ``*`` and ``?`` wildcards.

    Returns:
        True if the whole name matches the pattern.
    """
    return _compile(pattern).fullmatch(name) is not None


def matches_any(name: str, patterns: Iterable[str]) -> bool:
    """Check whether a name matches at least one of the patterns.

    Args:
        name: Entry name (basename, not a path).
        patterns: Glob patterns, tried in order.

    Returns:
        True if any pattern matches.
    """
    return any(matches(name, pattern) for pattern in patterns)


def has_extension(name: str, extensions: Iterable[str]) -> bool:
    """Check whether a file name ends with one of the given extensions.

    Comparison is case-insensitive, so ``App.CSPROJ`` counts as a
    ``.csproj`` file.

    Args:
        name: File name.
        extensions: Extensions including the leading dot.

    Returns:
        True if the name ends with any of the extensions.
    """
    lowered = name.lower()
    return any(lowered.endswith(ext.lower()) for ext in extensions)
