"""Process termination.

Processes are killed by exact name first, then by command-line pattern.
GUI applications are asked to quit through AppleScript before being
force-killed.
"""

import logging
import time
from collections.abc import Callable, Iterable

from clawpurge.core.context import RunContext
from clawpurge.models.action import Action, ActionResult, ActionType
from clawpurge.operators.base import Operator
from clawpurge.scanners.processes import find_pids, format_pids, own_process_ids

logger = logging.getLogger(__name__)

QUIT_GRACE_SECONDS = 1.0
SETTLE_SECONDS = 2.0


class ProcessOperator(Operator):
    """Kills running processes of the product.

    Args:
        context: Run context.
        sleep: Sleep function, replaceable in tests.
        own_pids: PIDs never signalled by the pattern pass. Defaults to
            ours and our parent's.
    """

    timeout = 30.0

    def __init__(
        self,
        context: RunContext,
        *,
        sleep: Callable[[float], None] = time.sleep,
        own_pids: Iterable[int] | None = None,
    ) -> None:
        super().__init__(context)
        self._sleep = sleep
        self._own_pids = set(own_pids if own_pids is not None else own_process_ids())

    def kill_by_name(self, name: str) -> ActionResult | None:
        """SIGKILL every process with this exact name.

        Returns:
            The kill result, or None if nothing was running.
        """
        pids = find_pids(name)
        if not pids:
            return None
        self._context.run_log.log(f"Killing process: {name} (PIDs: {format_pids(pids)})")
        action = Action(
            action_type=ActionType.KILL,
            target=name,
            command=("pkill", "-9", "-x", name),
        )
        return self.execute(action)

    def kill_by_pattern(self, pattern: str) -> ActionResult | None:
        """SIGKILL every process whose command line contains ``pattern``.

        The matching PIDs are signalled individually so that our own
        process and its parent are never hit.

        Returns:
            The kill result, or None if nothing matched.
        """
        pids = [pid for pid in find_pids(pattern, full=True) if pid not in self._own_pids]
        if not pids:
            return None
        self._context.run_log.log(
            f"Killing processes matching: {pattern} (PIDs: {format_pids(pids)})"
        )
        action = Action(
            action_type=ActionType.KILL,
            target=pattern,
            command=("kill", "-9", *(str(pid) for pid in pids)),
        )
        return self.execute(action)

    def quit_application(self, app: str) -> list[ActionResult]:
        """Ask a running application to quit, then force-kill it."""
        if not find_pids(app):
            return []

        action = Action(
            action_type=ActionType.QUIT,
            target=app,
            command=("osascript", "-e", f'tell application "{app}" to quit'),
        )
        results = [self.execute(action)]
        if not self.dry_run:
            self._sleep(QUIT_GRACE_SECONDS)
        killed = self.kill_by_name(app)
        if killed is not None:
            results.append(killed)
        return results

    def kill_all(self) -> list[ActionResult]:
        """Kill by exact name, then by every kill pattern."""
        catalog = self._context.catalog
        results: list[ActionResult] = []

        for name in catalog.process_names:
            result = self.kill_by_name(name)
            if result is not None:
                results.append(result)

        for pattern in catalog.kill_patterns:
            result = self.kill_by_pattern(pattern)
            if result is not None:
                results.append(result)

        return results

    def terminate_all(self) -> list[ActionResult]:
        """Full termination pass: kill, quit applications, let things settle."""
        run_log = self._context.run_log

        run_log.log("Killing all related processes...")
        results = self.kill_all()

        run_log.log("Quitting applications...")
        for app in self._context.catalog.app_names:
            results.extend(self.quit_application(app))

        if not self.dry_run:
            self._sleep(SETTLE_SECONDS)
        return results
