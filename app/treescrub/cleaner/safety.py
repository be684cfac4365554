"""Safety checks for directories matched by a deletion pattern.

A directory called ``bin`` is only build output when it sits next to a
project file. Elsewhere (``~/bin``, a ``bin`` folder of scripts checked
into the tree) it is user content and must be left alone.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from treescrub.cleaner.patterns import PROJECT_FILE_EXTENSIONS, has_extension

logger = logging.getLogger(__name__)

GUARDED_DIRECTORY_NAME = "bin"


def has_project_file(directory: Path, extensions: Iterable[str] = PROJECT_FILE_EXTENSIONS) -> bool:
    """Check whether a directory directly contains a project file.

    Args:
        directory: Directory to inspect (not recursive).
        extensions: Project descriptor extensions to look for.

    Returns:
        True if at least one regular file with a project extension exists.
        False if none exists or the directory cannot be listed.
    """
    extensions = tuple(extensions)
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    if entry.is_file() and has_extension(entry.name, extensions):
                        return True
                except OSError:
                    continue
    except OSError as e:
        logger.warning("Cannot list %s: %s", directory, e)
        return False

    return False


def is_safe_to_delete(
    directory: Path,
    project_extensions: Iterable[str] = PROJECT_FILE_EXTENSIONS,
) -> bool:
    """Decide whether a pattern-matched directory may be deleted.

    Every matched directory is considered safe, except one named
    ``bin``: it is deleted only if its parent directory holds a
    project file.

    Args:
        directory: Directory that matched a deletion pattern.
        project_extensions: Extensions recognised as project descriptors.

    Returns:
        True if the directory can be removed.
    """
    if directory.name.lower() != GUARDED_DIRECTORY_NAME:
        return True

    return has_project_file(directory.parent, project_extensions)
