"""Abstract base class for trace scanners.

This module defines the Scanner interface that every detection source
implements. Scanners are read-only: they query the system and yield
findings, and never change anything.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from clawpurge.core.context import RunContext
from clawpurge.models.finding import Finding, FindingCategory


class Scanner(ABC):
    """Abstract base class for all scanners.

    Scanners may write progress lines (which tool was found, where) to
    the run log but never ``FOUND:`` lines; recording findings is left
    to the caller so that duplicates can be suppressed across scanners.

    Example:
        >>> scanner = ProcessScanner(context)
        >>> if scanner.is_available():
        ...     for finding in scanner.scan():
        ...         print(finding.description)
    """

    def __init__(self, context: RunContext) -> None:
        """Initialize the scanner.

        Args:
            context: Run context supplying catalog, users and log.
        """
        self._context = context

    @property
    @abstractmethod
    def category(self) -> FindingCategory:
        """Return the kind of finding this scanner produces."""

    @abstractmethod
    def scan(self) -> Iterator[Finding]:
        """Scan and yield every trace found.

        Yields:
            Finding instances, possibly with duplicate keys.
        """

    def is_available(self) -> bool:
        """Check if the tools this scanner relies on are present.

        Returns:
            True if the scanner can run, False otherwise.
        """
        return True
