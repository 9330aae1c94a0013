"""Inventory walker: read-only detection run.

Walks every location and query in seven phases and records each unique
finding as one ``FOUND:`` line in the detection log. Nothing on the
system is changed.
"""

import logging
from collections.abc import Iterable

from clawpurge.core.context import RunContext
from clawpurge.filesystem import locations
from clawpurge.models.finding import FindingCategory
from clawpurge.models.report import DetectionReport
from clawpurge.scanners import (
    HomebrewScanner,
    LaunchdScanner,
    NodePackageScanner,
    PathScanner,
    ProcessScanner,
    ReceiptScanner,
    Scanner,
)

logger = logging.getLogger(__name__)


class InventoryWalker:
    """Runs every scanner in phase order and deduplicates their findings.

    Args:
        context: Run context. ``dry_run`` is ignored; detection never writes.
        own_pids: PIDs the process scanner must ignore. Defaults to ours
            and our parent's.
    """

    def __init__(self, context: RunContext, *, own_pids: Iterable[int] | None = None) -> None:
        self._context = context
        self._own_pids = own_pids
        self._report = DetectionReport(log_path=context.run_log.path)

    @property
    def report(self) -> DetectionReport:
        """Findings recorded so far."""
        return self._report

    def run(self) -> DetectionReport:
        """Run the full detection and write the summary.

        Returns:
            DetectionReport with every unique finding.
        """
        context = self._context
        run_log = context.run_log
        label = context.catalog.product_label

        run_log.section(f"Starting {label} Detection (Read-Only)")
        context.log_users()

        self._detect_processes()
        self._detect_applications()
        self._detect_launchd_plists()
        self._detect_node_packages()
        self._detect_homebrew()
        self._detect_user_data()
        self._detect_system_files()

        self._summarize()
        return self._report

    def record(self, scanner: Scanner) -> int:
        """Drain a scanner, logging every finding not seen before.

        Returns:
            Number of new findings.
        """
        added = 0
        for finding in scanner.scan():
            if self._report.add(finding):
                self._context.run_log.found(finding.description)
                added += 1
            else:
                logger.debug("Duplicate finding %s", finding.key)
        return added

    # =========================================================================
    # Phases
    # =========================================================================

    def _detect_processes(self) -> None:
        self._context.run_log.section("Phase 1: Detecting running processes and services")
        self.record(ProcessScanner(self._context, own_pids=self._own_pids))
        self.record(LaunchdScanner(self._context))

    def _detect_applications(self) -> None:
        context = self._context
        context.run_log.section("Phase 2: Detecting applications")
        specs = locations.application_specs(context.catalog, context.users, context.root)
        self.record(PathScanner(context, FindingCategory.APPLICATION, specs))

    def _detect_launchd_plists(self) -> None:
        context = self._context
        context.run_log.section("Phase 3: Detecting LaunchAgent/LaunchDaemon plists")
        for user in context.users:
            specs = locations.user_launchagent_specs(context.catalog, user)
            self.record(
                PathScanner(context, FindingCategory.LAUNCHD_PLIST, specs, user=user.username)
            )
        specs = locations.system_launchd_specs(context.catalog, context.root)
        self.record(PathScanner(context, FindingCategory.LAUNCHD_PLIST, specs))

    def _detect_node_packages(self) -> None:
        context = self._context
        context.run_log.section("Phase 4: Detecting npm/pnpm/bun global packages")
        for user in context.users:
            context.run_log.log(f"Checking npm/pnpm/bun packages for user: {user.username}")
            self.record(NodePackageScanner(context, user))
            specs = locations.node_module_specs(
                context.catalog, user, context.root
            ) + locations.node_binary_specs(context.catalog, user, context.root)
            self.record(
                PathScanner(context, FindingCategory.NODE_PACKAGE, specs, user=user.username)
            )

    def _detect_homebrew(self) -> None:
        context = self._context
        context.run_log.section("Phase 5: Detecting Homebrew packages")
        scanner = HomebrewScanner(context)
        if scanner.is_available():
            self.record(scanner)
        else:
            context.run_log.log("Homebrew not found")
        specs = locations.homebrew_remnant_specs(context.catalog, context.root)
        self.record(PathScanner(context, FindingCategory.HOMEBREW, specs))

    def _detect_user_data(self) -> None:
        context = self._context
        context.run_log.section("Phase 6: Detecting configuration and data directories")
        for user in context.users:
            context.run_log.log(f"Checking config directories for user: {user.username}")
            specs = locations.user_data_specs(context.catalog, user)
            self.record(PathScanner(context, FindingCategory.CONFIG, specs, user=user.username))

    def _detect_system_files(self) -> None:
        context = self._context
        context.run_log.section("Phase 7: Detecting system-level files and receipts")
        self.record(ReceiptScanner(context))
        specs = locations.receipt_file_specs(context.catalog, context.root)
        self.record(PathScanner(context, FindingCategory.RECEIPT, specs))
        specs = locations.temporary_specs(context.catalog, context.root)
        self.record(PathScanner(context, FindingCategory.SYSTEM_FILE, specs))

    def _summarize(self) -> None:
        run_log = self._context.run_log
        label = self._context.catalog.product_label
        total = self._report.total

        run_log.section("Detection Complete")
        if total == 0:
            run_log.log(f"RESULT: No {label} components detected.")
            run_log.log("The system appears clean.")
            return

        run_log.log(f"RESULT: Detected {total} {label} component(s).")
        run_log.log(f"Review the log at {run_log.path} for details.")
        run_log.log("")
        run_log.log("To remove these components, run: clawpurge remove")
