"""Homebrew formula and cask scanner.

brew refuses to run as root, so every query runs as the account that
owns the brew executable, with auto-update disabled.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from clawpurge.core.context import RunContext
from clawpurge.core.discovery import find_brew, path_owner
from clawpurge.models.finding import Finding, FindingCategory
from clawpurge.scanners.base import Scanner
from clawpurge.utils.shell import as_user, run_best_effort

logger = logging.getLogger(__name__)

BREW_ENV: dict[str, str] = {"HOMEBREW_NO_AUTO_UPDATE": "1"}

# brew list flag -> label used in log lines
BREW_KINDS: dict[str, str] = {"--formula": "formula", "--cask": "cask"}


def brew_command(brew: Path, user: str, args: list[str]) -> list[str]:
    """Build a brew invocation run as ``user`` without auto-update."""
    return as_user(user, [str(brew), *args], env=BREW_ENV)


def brew_lists(brew: Path, user: str, kind: str, name: str) -> bool:
    """Check whether ``brew list <kind> <name>`` succeeds for ``user``."""
    return run_best_effort(brew_command(brew, user, ["list", kind, name])).success


class HomebrewScanner(Scanner):
    """Scanner for installed Homebrew formulas and casks."""

    def __init__(self, context: RunContext) -> None:
        super().__init__(context)
        self._brew: Path | None = None
        self._located = False

    @property
    def category(self) -> FindingCategory:
        """Return HOMEBREW."""
        return FindingCategory.HOMEBREW

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

    def scan(self) -> Iterator[Finding]:
        """Yield installed formulas and casks, as seen by brew's owner."""
        brew = self.brew
        if brew is None:
            return

        run_log = self._context.run_log
        run_log.log(f"Found Homebrew at: {brew}")
        owner = path_owner(brew)
        if owner is None:
            run_log.warning(f"Cannot determine the owner of {brew}")
            return
        run_log.log(f"Homebrew owned by: {owner}")

        for formula in self._context.catalog.brew_formulas:
            for kind, label in BREW_KINDS.items():
                if brew_lists(brew, owner, kind, formula):
                    yield Finding(
                        category=self.category,
                        description=f"Homebrew {label}: {formula}",
                        key=f"brew:{label}:{formula}",
                    )
