"""Homebrew formula and cask uninstall.

Uninstall runs as the owner of the brew executable first, then as each
other local user, since a shared prefix may have been written to by
several accounts.
"""

import logging
from pathlib import Path

from clawpurge.core.context import RunContext
from clawpurge.core.discovery import find_brew, path_owner
from clawpurge.models.action import Action, ActionResult, ActionType
from clawpurge.operators.base import Operator
from clawpurge.scanners.homebrew import BREW_KINDS, brew_command, brew_lists

logger = logging.getLogger(__name__)

# brew list flag -> extra uninstall flags
UNINSTALL_FLAGS: dict[str, tuple[str, ...]] = {
    "--formula": ("--force",),
    "--cask": ("--cask", "--force"),
}


class HomebrewOperator(Operator):
    """Uninstalls Homebrew formulas and casks of the product."""

    timeout = 300.0

    def __init__(self, context: RunContext) -> None:
        super().__init__(context)
        self._brew: Path | None = None
        self._located = False

    @property
    def brew(self) -> Path | None:
        """Path to brew, located on first access."""
        if not self._located:
            self._brew = find_brew(self._context.root)
            self._located = True
        return self._brew

    def is_available(self) -> bool:
        """Check if Homebrew is installed."""
        return self.brew is not None

    def uninstall_as(self, user: str, *, suffix: str = "") -> list[ActionResult]:
        """Uninstall every catalog formula and cask ``user`` can see.

        Args:
            user: Account brew runs as.
            suffix: Appended to the log line of each uninstall.
        """
        brew = self.brew
        if brew is None:
            return []

        results: list[ActionResult] = []
        for formula in self._context.catalog.brew_formulas:
            for kind, label in BREW_KINDS.items():
                if not brew_lists(brew, user, kind, formula):
                    continue
                self._context.run_log.uninstalling(f"Homebrew {label}: {formula}{suffix}")
                args = ["uninstall", *UNINSTALL_FLAGS[kind], formula]
                action = Action(
                    action_type=ActionType.UNINSTALL,
                    target=formula,
                    command=tuple(brew_command(brew, user, args)),
                    user=user,
                )
                result = self.execute(action, record_output=True)
                if result.failed:
                    self._context.run_log.warning(f"brew could not uninstall {label} {formula}")
                results.append(result)
        return results

    def uninstall_all(self) -> list[ActionResult]:
        """Uninstall as brew's owner, then as every other local user."""
        run_log = self._context.run_log
        brew = self.brew
        if brew is None:
            return []

        run_log.log(f"Found Homebrew at: {brew}")
        owner = path_owner(brew)
        if owner is None:
            run_log.warning(f"Cannot determine the owner of {brew}")
        else:
            run_log.log(f"Homebrew owned by: {owner}")

        run_log.log("Attempting native Homebrew uninstall...")
        results: list[ActionResult] = []
        if owner is not None:
            results.extend(self.uninstall_as(owner))
        for user in self._context.users:
            if user.username == owner:
                continue
            results.extend(self.uninstall_as(user.username, suffix=f" (user: {user.username})"))
        return results
