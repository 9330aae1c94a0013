"""Installer receipt removal (``pkgutil --forget``)."""

import logging

from clawpurge.models.action import Action, ActionResult, ActionType
from clawpurge.operators.base import Operator
from clawpurge.scanners.receipts import matching_receipts

logger = logging.getLogger(__name__)


class ReceiptOperator(Operator):
    """Forgets installer receipts whose id contains a name pattern."""

    timeout = 30.0

    def forget_all(self) -> list[ActionResult]:
        """Forget every matching receipt."""
        run_log = self._context.run_log
        run_log.log("Removing package receipts via pkgutil...")

        results: list[ActionResult] = []
        for package_id in matching_receipts(self._context.catalog):
            run_log.log(f"Forgetting package receipt: {package_id}")
            action = Action(
                action_type=ActionType.FORGET,
                target=package_id,
                command=("pkgutil", "--forget", package_id),
            )
            result = self.execute(action)
            if result.failed:
                run_log.warning(f"Could not forget package receipt {package_id}")
            results.append(result)
        return results
