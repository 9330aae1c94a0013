"""Filesystem path scanner.

Expands a list of PathSpec entries and reports every entry that exists,
including dangling symlinks. Globs that match nothing contribute
nothing.
"""

from collections.abc import Iterable, Iterator

from clawpurge.core.context import RunContext
from clawpurge.filesystem.locations import PathSpec
from clawpurge.models.finding import Finding, FindingCategory
from clawpurge.scanners.base import Scanner


class PathScanner(Scanner):
    """Scanner for files and directories at known locations.

    Args:
        context: Run context.
        category: Category assigned to the findings.
        specs: Exact paths and glob patterns to test, in order.
        user: Local user the locations belong to, None for system scope.
    """

    def __init__(
        self,
        context: RunContext,
        category: FindingCategory,
        specs: Iterable[PathSpec],
        user: str | None = None,
    ) -> None:
        super().__init__(context)
        self._category = category
        self._specs = list(specs)
        self._user = user

    @property
    def category(self) -> FindingCategory:
        """Return the category given at construction."""
        return self._category

    def scan(self) -> Iterator[Finding]:
        """Yield a finding for every existing path."""
        for spec in self._specs:
            for path in spec.expand():
                yield Finding.for_path(self._category, path, user=self._user)
