"""launchd job unloading.

Each job is unloaded with ``launchctl bootout`` first; when that fails
the legacy ``launchctl unload -w`` is tried. Neither failure aborts the
run.
"""

import glob
import logging
from pathlib import Path

from clawpurge.core.users import LocalUser
from clawpurge.filesystem.locations import rooted
from clawpurge.models.action import Action, ActionResult, ActionType
from clawpurge.operators.base import Operator
from clawpurge.scanners.launchd import is_daemon_loaded
from clawpurge.utils.shell import as_user

logger = logging.getLogger(__name__)


class LaunchdOperator(Operator):
    """Unloads per-user LaunchAgents and system LaunchDaemons."""

    timeout = 30.0

    def agent_plists(self, user: LocalUser) -> list[Path]:
        """Known and pattern-matched plists in a user's LaunchAgents folder.

        Only regular files are returned, each once.
        """
        catalog = self._context.catalog
        agents = user.home / "Library" / "LaunchAgents"

        candidates = [agents / plist for plist in catalog.launchagent_plists]
        for pattern in catalog.launchd_patterns:
            matches = glob.glob(f"{glob.escape(str(agents))}/*{glob.escape(pattern)}*.plist")
            candidates.extend(Path(p) for p in sorted(matches))

        plists: list[Path] = []
        for path in candidates:
            if path.is_file() and path not in plists:
                plists.append(path)
        return plists

    def unload_agent(self, user: LocalUser, plist: Path) -> list[ActionResult]:
        """Unload one LaunchAgent for a user.

        Args:
            user: Owner of the agent.
            plist: Path of the agent's descriptor; its stem is the label.

        Returns:
            Results of the commands that were tried.
        """
        run_log = self._context.run_log
        label = plist.stem
        target = f"gui/{user.uid}/{label}"
        run_log.log(f"Unloading LaunchAgent: {plist} for user {user.username}")

        bootout = self.execute(
            Action(
                action_type=ActionType.UNLOAD,
                target=target,
                command=("launchctl", "bootout", target),
                user=user.username,
            )
        )
        if bootout.success:
            if not bootout.dry_run:
                run_log.log(f"Successfully unloaded via bootout: {target}")
            return [bootout]

        unload = self.execute(
            Action(
                action_type=ActionType.UNLOAD,
                target=str(plist),
                command=tuple(as_user(user.username, ["launchctl", "unload", "-w", str(plist)])),
                user=user.username,
            )
        )
        if unload.success:
            run_log.log(f"Successfully unloaded via legacy unload: {plist}")
        else:
            run_log.warning(f"Could not unload {plist} (may not be loaded)")
        return [bootout, unload]

    def unload_daemon(self, label: str) -> list[ActionResult]:
        """Unload a system LaunchDaemon if launchd knows about it."""
        if not is_daemon_loaded(label):
            return []

        run_log = self._context.run_log
        run_log.log(f"Unloading daemon: {label}")
        target = f"system/{label}"

        bootout = self.execute(
            Action(
                action_type=ActionType.UNLOAD,
                target=target,
                command=("launchctl", "bootout", target),
            )
        )
        if bootout.success:
            if not bootout.dry_run:
                run_log.log(f"Successfully unloaded via bootout: {target}")
            return [bootout]

        plist = rooted(self._context.root, "/Library/LaunchDaemons") / f"{label}.plist"
        unload = self.execute(
            Action(
                action_type=ActionType.UNLOAD,
                target=str(plist),
                command=("launchctl", "unload", "-w", str(plist)),
            )
        )
        if unload.success:
            run_log.log(f"Successfully unloaded via legacy unload: {label}")
        else:
            run_log.warning(f"Could not unload daemon {label}")
        return [bootout, unload]

    def unload_all(self) -> list[ActionResult]:
        """Unload every user's agents, then the system daemons."""
        run_log = self._context.run_log
        results: list[ActionResult] = []

        run_log.log("Stopping LaunchAgents for all users...")
        for user in self._context.users:
            run_log.log(f"Processing user: {user.username} ({user.home})")
            for plist in self.agent_plists(user):
                results.extend(self.unload_agent(user, plist))

        run_log.log("Stopping system LaunchDaemons...")
        for label in self._context.catalog.launchd_labels:
            results.extend(self.unload_daemon(label))

        return results
