"""Filesystem domain models.

Defines path type classification and the identity key that lets one
physical entry be reported once, however many specs reach it.
"""

import os
from enum import Enum
from pathlib import Path


class PathType(str, Enum):
    """Type of filesystem entry.

    Attributes:
        DIRECTORY: Regular directory (including .app bundles).
        FILE: Regular file.
        SYMLINK: Symbolic link with a valid target.
        DEAD_SYMLINK: Symbolic link whose target does not exist.
        MISSING: Nothing exists at the path.
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    DEAD_SYMLINK = "dead_symlink"
    MISSING = "missing"


def path_type_of(path: Path) -> PathType:
    """Determine the type of a filesystem path.

    Checks for symlinks first (before is_dir/is_file which follow
    symlinks), distinguishing between live and dead symlinks.

    Args:
        path: Path to classify.

    Returns:
        PathType classification.
    """
    if path.is_symlink():
        if not path.exists():
            return PathType.DEAD_SYMLINK
        return PathType.SYMLINK

    if path.is_dir():
        return PathType.DIRECTORY

    if path.exists():
        return PathType.FILE

    return PathType.MISSING


def path_key(path: Path) -> str:
    """Identity key for a filesystem entry.

    The parent directory is resolved (``/tmp`` and ``/private/tmp`` are
    the same directory on macOS) but the entry itself is not, so a
    symlink and its target stay distinct.
    """
    parent = os.path.realpath(path.parent)
    return os.path.join(parent, path.name)
