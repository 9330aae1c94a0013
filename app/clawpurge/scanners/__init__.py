"""Read-only scanners that look for traces of the product.

This module exports all available scanner implementations.
"""

from clawpurge.scanners.base import Scanner
from clawpurge.scanners.homebrew import HomebrewScanner
from clawpurge.scanners.launchd import LaunchdScanner
from clawpurge.scanners.node import NodePackageScanner
from clawpurge.scanners.paths import PathScanner
from clawpurge.scanners.processes import ProcessScanner
from clawpurge.scanners.receipts import ReceiptScanner

__all__ = [
    "HomebrewScanner",
    "LaunchdScanner",
    "NodePackageScanner",
    "PathScanner",
    "ProcessScanner",
    "ReceiptScanner",
    "Scanner",
]
