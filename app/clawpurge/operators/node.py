"""npm, pnpm and bun global package uninstall.

Uninstall output is appended to the run log: the false-positive
classifier looks for package-manager fingerprints in it.
"""

import logging
from pathlib import Path

from clawpurge.core.discovery import find_node_manager
from clawpurge.core.users import LocalUser
from clawpurge.models.action import Action, ActionResult, ActionType
from clawpurge.operators.base import Operator
from clawpurge.scanners.node import bun_global_listing
from clawpurge.utils.shell import as_user, run_best_effort

logger = logging.getLogger(__name__)

# Manager -> uninstall subcommand
REMOVE_COMMANDS: dict[str, tuple[str, ...]] = {
    "npm": ("rm", "-g"),
    "pnpm": ("remove", "-g"),
    "bun": ("remove", "-g"),
}


def is_listed_globally(manager: Path, user: str, package: str) -> bool:
    """Check ``<manager> list -g <package>`` exit status."""
    return run_best_effort(as_user(user, [str(manager), "list", "-g", package])).success


class NodePackageOperator(Operator):
    """Uninstalls global node packages through each user's package managers."""

    timeout = 300.0

    def uninstall_for_user(self, user: LocalUser) -> list[ActionResult]:
        """Uninstall catalog packages with every manager found for a user.

        npm and pnpm only uninstall packages their ``list -g`` reports;
        bun only those present in ``bun pm ls -g``.
        """
        results: list[ActionResult] = []
        for manager_name in REMOVE_COMMANDS:
            manager = find_node_manager(
                manager_name, user.home, user.username, self._context.root
            )
            if manager is None:
                continue
            self._context.run_log.log(f"Found {manager_name} at {manager} for user {user.username}")
            for package in self._installed(manager_name, manager, user):
                results.append(self.uninstall(manager_name, manager, user, package))
        return results

    def uninstall(
        self,
        manager_name: str,
        manager: Path,
        user: LocalUser,
        package: str,
    ) -> ActionResult:
        """Uninstall one package with one manager."""
        self._context.run_log.uninstalling(f"{package} via {manager_name} for {user.username}")
        command = [str(manager), *REMOVE_COMMANDS[manager_name], package]
        action = Action(
            action_type=ActionType.UNINSTALL,
            target=package,
            command=tuple(as_user(user.username, command)),
            user=user.username,
        )
        result = self.execute(action, record_output=True)
        if result.failed:
            self._context.run_log.warning(
                f"{manager_name} could not uninstall {package} for {user.username}"
            )
        return result

    def _installed(self, manager_name: str, manager: Path, user: LocalUser) -> list[str]:
        packages = self._context.catalog.node_packages
        if manager_name == "bun":
            listing = bun_global_listing(manager, user.username)
            return [package for package in packages if package in listing]
        return [
            package
            for package in packages
            if is_listed_globally(manager, user.username, package)
        ]
