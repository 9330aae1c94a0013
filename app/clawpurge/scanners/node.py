"""npm, pnpm and bun global package scanner.

``npm list -g <pkg>`` and ``pnpm list -g <pkg>`` may exit 0 even when the
package is not installed, so presence is decided by looking for
``<root>/<pkg>`` under the manager's global root. Only when no root is
printed does the scanner fall back to parsing ``list`` output for a
``<pkg>@<version>`` token.
"""

import logging
import re
from collections.abc import Iterator
from pathlib import Path

from clawpurge.core.context import RunContext
from clawpurge.core.discovery import find_node_manager
from clawpurge.core.users import LocalUser
from clawpurge.filesystem.models import path_key
from clawpurge.models.finding import Finding, FindingCategory
from clawpurge.scanners.base import Scanner
from clawpurge.utils.shell import as_user, run_best_effort

logger = logging.getLogger(__name__)

# Managers whose global list output is verified through the global root
ROOTED_MANAGERS: tuple[str, ...] = ("npm", "pnpm")


def global_root(manager: Path, user: str) -> Path | None:
    """Return the global node_modules root printed by ``<manager> root -g``."""
    result = run_best_effort(as_user(user, [str(manager), "root", "-g"]))
    value = result.stdout.replace("\r", "").strip() if result.success else ""
    return Path(value) if value else None


def listed_in_output(output: str, package: str) -> bool:
    """Check ``list`` output for a ``<package>@<version>`` token."""
    pattern = re.compile(rf"(^|\s){re.escape(package)}@", re.IGNORECASE | re.MULTILINE)
    return pattern.search(output) is not None


def is_listed(manager: Path, user: str, package: str) -> bool:
    """Fallback presence check through ``<manager> list -g --depth 0``."""
    args = as_user(user, [str(manager), "list", "-g", "--depth", "0", package])
    return listed_in_output(run_best_effort(args).stdout, package)


def bun_global_listing(bun: Path, user: str) -> str:
    """Return the output of ``bun pm ls -g``."""
    return run_best_effort(as_user(user, [str(bun), "pm", "ls", "-g"])).stdout


class NodePackageScanner(Scanner):
    """Scanner for global node packages of one local user.

    Args:
        context: Run context.
        user: Local user whose package managers are queried.
    """

    def __init__(self, context: RunContext, user: LocalUser) -> None:
        super().__init__(context)
        self._user = user

    @property
    def category(self) -> FindingCategory:
        """Return NODE_PACKAGE."""
        return FindingCategory.NODE_PACKAGE

    def scan(self) -> Iterator[Finding]:
        """Yield packages reported by npm, pnpm and bun, in that order."""
        for manager_name in ROOTED_MANAGERS:
            manager = self._locate(manager_name)
            if manager is not None:
                yield from self._scan_rooted(manager_name, manager)

        bun = self._locate("bun")
        if bun is not None:
            listing = bun_global_listing(bun, self._user.username)
            for package in self._context.catalog.node_packages:
                if package in listing:
                    yield self._finding("bun", package)

    def _locate(self, manager_name: str) -> Path | None:
        user = self._user
        path = find_node_manager(manager_name, user.home, user.username, self._context.root)
        if path is not None:
            self._context.run_log.log(f"Found {manager_name} at {path} for user {user.username}")
        return path

    def _scan_rooted(self, manager_name: str, manager: Path) -> Iterator[Finding]:
        username = self._user.username
        packages = self._context.catalog.node_packages

        root = global_root(manager, username)
        if root is not None:
            self._context.run_log.log(f"{manager_name} global root for user {username}: {root}")
            for package in packages:
                target = root / package
                if target.exists() or target.is_symlink():
                    # One package directory is one finding, whoever reaches it first
                    yield self._finding(manager_name, package, key=path_key(target))
            return

        for package in packages:
            if is_listed(manager, username, package):
                yield self._finding(manager_name, package)

    def _finding(self, manager_name: str, package: str, key: str | None = None) -> Finding:
        username = self._user.username
        return Finding(
            category=self.category,
            description=f"{manager_name} global package: {package} (user: {username})",
            key=key or f"node:{manager_name}:{username}:{package}",
            user=username,
        )
