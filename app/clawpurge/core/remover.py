"""Removal executor: write-enabled counterpart of the inventory walker.

Phase order matters. The vendor uninstaller runs first, then processes
are killed and launchd jobs unloaded so that nothing recreates files
while they are deleted. A final verification pass tallies whatever is
left. No single failure aborts the run.
"""

import logging
import time
from collections.abc import Callable, Iterable

from clawpurge.core.context import RunContext
from clawpurge.filesystem import locations
from clawpurge.filesystem.locations import PathSpec
from clawpurge.filesystem.operator import FilesystemActionResult, FilesystemOperator
from clawpurge.models.action import ActionResult
from clawpurge.models.report import RemovalReport, RemovalStatus
from clawpurge.operators import (
    HomebrewOperator,
    LaunchdOperator,
    NativeUninstallOperator,
    NodePackageOperator,
    ProcessOperator,
    ReceiptOperator,
)
from clawpurge.scanners.processes import find_pids

logger = logging.getLogger(__name__)


class RemovalExecutor:
    """Runs the full removal and verification sequence.

    Args:
        context: Run context; ``dry_run`` turns every mutation into a log line.
        sleep: Sleep function used between kill steps, replaceable in tests.
        own_pids: PIDs never signalled by the pattern kill. Defaults to
            ours and our parent's.
    """

    def __init__(
        self,
        context: RunContext,
        *,
        sleep: Callable[[float], None] = time.sleep,
        own_pids: Iterable[int] | None = None,
    ) -> None:
        self._context = context
        self._report = RemovalReport(log_path=context.run_log.path, dry_run=context.dry_run)
        self._files = FilesystemOperator(context)
        self._processes = ProcessOperator(context, sleep=sleep, own_pids=own_pids)

    @property
    def report(self) -> RemovalReport:
        """Outcome recorded so far."""
        return self._report

    def run(self) -> RemovalReport:
        """Run every removal phase, verify, and write the summary."""
        context = self._context
        run_log = context.run_log

        run_log.section(f"Starting {context.catalog.product_label} Uninstall")
        if context.dry_run:
            run_log.log("Dry-run: no changes will be made")
        context.log_users()

        self._native_uninstall()
        self._terminate_processes()
        self._unload_services()
        self._remove_applications()
        self._remove_launchd_plists()
        self._remove_node_packages()
        self._remove_homebrew()
        self._remove_user_data()
        self._remove_system_files()
        self._verify()

        self._report.warnings = run_log.warning_count
        self._summarize()
        return self._report

    # =========================================================================
    # Helpers
    # =========================================================================

    def _track(self, results: list[ActionResult]) -> None:
        self._report.actions.extend(results)

    def _delete(self, specs: Iterable[PathSpec]) -> list[FilesystemActionResult]:
        results = self._files.remove_specs(specs)
        self._report.removed.extend(r.path for r in results if r.removed)
        return results

    # =========================================================================
    # Phases
    # =========================================================================

    def _native_uninstall(self) -> None:
        context = self._context
        context.run_log.section(f"Phase 1: Attempting native {context.catalog.cli_name} uninstall")
        self._track(NativeUninstallOperator(context).uninstall_all())
        context.run_log.log("Proceeding with manual cleanup to ensure complete removal...")

    def _terminate_processes(self) -> None:
        self._context.run_log.section("Phase 2: Stopping all processes")
        self._track(self._processes.terminate_all())

    def _unload_services(self) -> None:
        run_log = self._context.run_log
        run_log.section("Phase 3: Unloading services")
        self._track(LaunchdOperator(self._context).unload_all())

        # A KeepAlive job may have relaunched its process before it was unloaded
        run_log.log("Killing processes restarted before their services were unloaded...")
        self._track(self._processes.kill_all())

    def _remove_applications(self) -> None:
        context = self._context
        context.run_log.section("Phase 4: Removing applications")
        self._delete(locations.application_specs(context.catalog, context.users, context.root))

    def _remove_launchd_plists(self) -> None:
        context = self._context
        context.run_log.section("Phase 5: Removing LaunchAgent/LaunchDaemon plists")
        self._delete(locations.launchd_plist_specs(context.catalog, context.users, context.root))

    def _remove_node_packages(self) -> None:
        context = self._context
        context.run_log.section("Phase 6: Removing npm/pnpm/bun global packages")
        operator = NodePackageOperator(context)
        for user in context.users:
            context.run_log.log(f"Processing npm/pnpm/bun packages for user: {user.username}")
            self._track(operator.uninstall_for_user(user))
            self._delete(locations.node_module_specs(context.catalog, user, context.root))
            self._delete(locations.node_binary_specs(context.catalog, user, context.root))

    def _remove_homebrew(self) -> None:
        context = self._context
        context.run_log.section("Phase 7: Removing Homebrew packages")
        operator = HomebrewOperator(context)
        if operator.is_available():
            self._track(operator.uninstall_all())
        else:
            context.run_log.log("Homebrew not found, skipping native Homebrew uninstall")
        context.run_log.log("Cleaning up any remaining Homebrew remnants...")
        self._delete(locations.homebrew_remnant_specs(context.catalog, context.root))

    def _remove_user_data(self) -> None:
        context = self._context
        context.run_log.section("Phase 8: Removing configuration and data directories")
        for user in context.users:
            context.run_log.log(f"Removing config directories for user: {user.username}")
            self._delete(locations.user_data_specs(context.catalog, user))

    def _remove_system_files(self) -> None:
        context = self._context
        context.run_log.section("Phase 9: Removing system-level files and receipts")
        self._track(ReceiptOperator(context).forget_all())
        context.run_log.log("Cleaning up any remaining receipt files...")
        self._delete(locations.receipt_file_specs(context.catalog, context.root))
        self._delete(locations.temporary_specs(context.catalog, context.root))

    def _verify(self) -> None:
        context = self._context
        run_log = context.run_log
        catalog = context.catalog
        run_log.section("Phase 10: Final verification")

        for name in catalog.process_names:
            if find_pids(name):
                run_log.log(f"WARNING: Process still running: {name}")
                self._report.remaining_processes.append(name)

        for user in context.users:
            for config_dir in catalog.config_dirs:
                path = user.home / config_dir
                if path.is_dir():
                    run_log.log(f"WARNING: Config directory still exists: {path}")
                    self._report.remaining_files.append(str(path))

        for app in catalog.app_names:
            path = locations.rooted(context.root, "/Applications") / f"{app}.app"
            if path.is_dir():
                run_log.log(f"WARNING: Application still exists: {path}")
                self._report.remaining_files.append(str(path))

    def _summarize(self) -> None:
        run_log = self._context.run_log
        report = self._report

        run_log.section("Uninstall Complete")
        if report.status == RemovalStatus.COMPLETE:
            label = self._context.catalog.product_label
            run_log.log(f"SUCCESS: All {label} components have been removed.")
            return

        run_log.log("PARTIAL: Uninstall completed with warnings.")
        run_log.log(f"  - Remaining processes: {len(report.remaining_processes)}")
        run_log.log(f"  - Remaining files/directories: {len(report.remaining_files)}")
        run_log.log(f"Please review the log at {run_log.path} for details.")
