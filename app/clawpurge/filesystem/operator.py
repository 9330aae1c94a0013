"""Filesystem deletion operator.

Handles idempotent deletion of matched paths with dry-run support and
protected path checking. Every deletion is announced in the run log
with a ``Removing:`` line before it happens.
"""

import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from clawpurge.core.context import RunContext
from clawpurge.filesystem.locations import PathSpec
from clawpurge.filesystem.models import PathType, path_key, path_type_of
from clawpurge.filesystem.protected import is_protected_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FilesystemActionResult:
    """Result of a single filesystem deletion operation.

    Attributes:
        path: Absolute path that was operated on.
        success: Whether the operation completed successfully.
        removed: Whether something was actually deleted.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    path: str
    success: bool
    removed: bool = False
    error: str | None = None
    dry_run: bool = False


class FilesystemOperator:
    """Deletes files, directories and symlinks found by the locations tables.

    A path that does not exist is a successful no-op. Protected paths
    are refused with a warning. A path reached twice through different
    specs (an exact entry and a glob, or ``/tmp`` and ``/private/tmp``)
    is handled once.

    Args:
        context: Run context supplying the log, root, homes and dry-run flag.
    """

    def __init__(self, context: RunContext) -> None:
        self._context = context
        self._seen: set[str] = set()

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._context.dry_run

    def remove(self, path: Path) -> FilesystemActionResult:
        """Remove one path if it exists.

        Args:
            path: Absolute path to delete.

        Returns:
            FilesystemActionResult; ``removed`` is False when nothing was there.
        """
        key = path_key(path)
        path_type = path_type_of(path)

        if path_type == PathType.MISSING or key in self._seen:
            return FilesystemActionResult(path=str(path), success=True)
        self._seen.add(key)

        run_log = self._context.run_log
        if is_protected_path(str(path), root=self._context.root, homes=self._context.homes):
            error = f"Refusing to remove protected path: {path}"
            run_log.warning(error)
            return FilesystemActionResult(path=str(path), success=False, error=error)

        if self.dry_run:
            run_log.log(f"Dry-run: would remove {path}")
            return FilesystemActionResult(path=str(path), success=True, dry_run=True)

        run_log.removing(str(path))
        try:
            if path_type == PathType.DIRECTORY:
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            run_log.warning(f"Could not remove {path}: {e}")
            return FilesystemActionResult(path=str(path), success=False, error=str(e))

        logger.debug("Removed %s (%s)", path, path_type.value)
        return FilesystemActionResult(path=str(path), success=True, removed=True)

    def remove_specs(self, specs: Iterable[PathSpec]) -> list[FilesystemActionResult]:
        """Remove every existing path the given specs expand to.

        Args:
            specs: Exact paths and glob patterns, processed in order.

        Returns:
            One result per existing path that was visited.
        """
        results: list[FilesystemActionResult] = []
        for spec in specs:
            for path in spec.expand():
                results.append(self.remove(path))
        return results
