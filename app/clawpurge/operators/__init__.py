"""Removal operators that issue mutating commands.

This module exports all available operator implementations.
"""

from clawpurge.operators.base import Operator
from clawpurge.operators.homebrew import HomebrewOperator
from clawpurge.operators.launchd import LaunchdOperator
from clawpurge.operators.native import NativeUninstallOperator
from clawpurge.operators.node import NodePackageOperator
from clawpurge.operators.processes import ProcessOperator
from clawpurge.operators.receipts import ReceiptOperator

__all__ = [
    "HomebrewOperator",
    "LaunchdOperator",
    "NativeUninstallOperator",
    "NodePackageOperator",
    "Operator",
    "ProcessOperator",
    "ReceiptOperator",
]
