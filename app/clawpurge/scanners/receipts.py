"""Installer receipt scanner (``pkgutil --pkgs``)."""

import logging
from collections.abc import Iterator

from clawpurge.core.catalog import Catalog
from clawpurge.models.finding import Finding, FindingCategory
from clawpurge.scanners.base import Scanner
from clawpurge.utils.shell import run_best_effort

logger = logging.getLogger(__name__)


def matching_receipts(catalog: Catalog) -> list[str]:
    """Return registered package ids containing any name pattern.

    Matching is case-insensitive. Each id is returned once, in the
    order of the first pattern that matches it.
    """
    result = run_best_effort(["pkgutil", "--pkgs"])
    if not result.success:
        logger.debug("pkgutil --pkgs failed: %s", result.stderr.strip())
        return []

    package_ids = [line.strip() for line in result.stdout.splitlines() if line.strip()]
    matches: list[str] = []
    for pattern in catalog.name_patterns:
        needle = pattern.lower()
        for package_id in package_ids:
            if needle in package_id.lower() and package_id not in matches:
                matches.append(package_id)
    return matches


class ReceiptScanner(Scanner):
    """Scanner for installer receipts registered with pkgutil."""

    @property
    def category(self) -> FindingCategory:
        """Return RECEIPT."""
        return FindingCategory.RECEIPT

    def scan(self) -> Iterator[Finding]:
        """Yield one finding per matching receipt id."""
        self._context.run_log.log("Checking package receipts via pkgutil...")
        for package_id in matching_receipts(self._context.catalog):
            yield Finding(
                category=self.category,
                description=f"Package receipt: {package_id}",
                key=f"receipt:{package_id}",
            )
