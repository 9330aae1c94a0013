"""Native uninstall through the product's own CLI.

The vendor CLI knows about state that no path table covers, so it runs
first: stop the gateway, unregister it from launchd, then uninstall
everything non-interactively. Failure is non-fatal; the manual cleanup
that follows catches what the CLI leaves behind.
"""

import logging
from pathlib import Path

from clawpurge.core.discovery import cli_candidates, find_executable
from clawpurge.core.users import LocalUser
from clawpurge.models.action import Action, ActionResult, ActionType
from clawpurge.operators.base import Operator
from clawpurge.utils.shell import as_user

logger = logging.getLogger(__name__)

NATIVE_STEPS: tuple[tuple[str, ...], ...] = (
    ("gateway", "stop"),
    ("gateway", "uninstall"),
    ("uninstall", "--all", "--yes", "--non-interactive"),
)


class NativeUninstallOperator(Operator):
    """Runs the product CLI's own uninstall steps for each local user."""

    def locate(self, user: LocalUser) -> Path | None:
        """Find the product CLI for a user, falling back to their PATH."""
        cli_name = self._context.catalog.cli_name
        return find_executable(
            cli_candidates(cli_name),
            home=user.home,
            user=user.username,
            name=cli_name,
            root=self._context.root,
        )

    def uninstall(self, user: LocalUser) -> list[ActionResult]:
        """Run every native uninstall step for one user.

        Returns:
            One result per step, or an empty list if no CLI was found.
        """
        cli = self.locate(user)
        if cli is None:
            return []

        run_log = self._context.run_log
        cli_name = self._context.catalog.cli_name
        run_log.log(f"Found {cli_name} CLI at {cli} for user {user.username}")

        results: list[ActionResult] = []
        for step in NATIVE_STEPS:
            run_log.log(f"Running: {cli_name} {' '.join(step)}")
            action = Action(
                action_type=ActionType.NATIVE,
                target=f"{cli_name} {' '.join(step)}",
                command=tuple(as_user(user.username, [str(cli), *step])),
                user=user.username,
            )
            results.append(self.execute(action, record_output=True))

        if self.dry_run:
            return results
        if results[-1].success:
            run_log.log(f"Native uninstall completed for user {user.username}")
        else:
            run_log.log(
                f"Native uninstall failed or partially completed for user {user.username}, "
                "continuing with manual cleanup"
            )
        return results

    def uninstall_all(self) -> list[ActionResult]:
        """Run the native uninstall for every local user."""
        results: list[ActionResult] = []
        for user in self._context.users:
            results.extend(self.uninstall(user))
        return results
