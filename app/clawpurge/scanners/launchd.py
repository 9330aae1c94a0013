"""Loaded launchd job scanner.

Per-user LaunchAgents are queried in each user's GUI domain
(``gui/<uid>``); system LaunchDaemons with ``launchctl list``.
"""

import logging
from collections.abc import Iterator

from clawpurge.core.users import LocalUser
from clawpurge.models.finding import Finding, FindingCategory
from clawpurge.scanners.base import Scanner
from clawpurge.utils.shell import run_best_effort

logger = logging.getLogger(__name__)


def is_agent_loaded(uid: int, label: str) -> bool:
    """Check whether a LaunchAgent is loaded in a user's GUI domain."""
    return run_best_effort(["launchctl", "print", f"gui/{uid}/{label}"], timeout=15.0).success


def is_daemon_loaded(label: str) -> bool:
    """Check whether a job with this label is known to launchd."""
    return run_best_effort(["launchctl", "list", label], timeout=15.0).success


def service_labels(domain_dump: str) -> list[str]:
    """Extract job labels from the ``services`` block of a domain dump.

    Entries have the shape ``<pid> <last exit status> <label>``. Other
    blocks, such as ``disabled services`` (``"<label>" => disabled``),
    list jobs that are not loaded and are skipped.
    """
    labels: list[str] = []
    in_services = False
    for line in domain_dump.splitlines():
        stripped = line.strip()
        if stripped == "services = {":
            in_services = True
            continue
        if not in_services:
            continue
        if stripped == "}":
            break
        fields = stripped.split()
        if len(fields) == 3 and fields[2] not in labels:
            labels.append(fields[2])
    return labels


def loaded_labels_matching(uid: int, pattern: str) -> list[str]:
    """Return loaded jobs in a user's GUI domain whose label contains ``pattern``.

    Matching is case-insensitive.
    """
    result = run_best_effort(["launchctl", "print", f"gui/{uid}"], timeout=15.0)
    if not result.success:
        return []

    needle = pattern.lower()
    return [label for label in service_labels(result.stdout) if needle in label.lower()]


def agent_key(uid: int, label: str) -> str:
    """Dedup key of a per-user LaunchAgent."""
    return f"launchd:gui/{uid}:{label}"


class LaunchdScanner(Scanner):
    """Scanner for loaded LaunchAgents and LaunchDaemons."""

    @property
    def category(self) -> FindingCategory:
        """Return LAUNCHD."""
        return FindingCategory.LAUNCHD

    def scan(self) -> Iterator[Finding]:
        """Yield loaded agents per user, then loaded system daemons."""
        run_log = self._context.run_log

        run_log.log("Checking loaded LaunchAgents for all users...")
        for user in self._context.users:
            yield from self._scan_user(user)

        run_log.log("Checking loaded system LaunchDaemons...")
        for label in self._context.catalog.launchd_labels:
            if is_daemon_loaded(label):
                yield Finding(
                    category=self.category,
                    description=f"Loaded LaunchDaemon: {label}",
                    key=f"launchd:system:{label}",
                )

    def _scan_user(self, user: LocalUser) -> Iterator[Finding]:
        catalog = self._context.catalog
        for label in catalog.launchd_labels:
            if is_agent_loaded(user.uid, label):
                yield Finding(
                    category=self.category,
                    description=f"Loaded LaunchAgent: {label} for user {user.username}",
                    key=agent_key(user.uid, label),
                    user=user.username,
                )

        for pattern in catalog.launchd_patterns:
            for label in loaded_labels_matching(user.uid, pattern):
                yield Finding(
                    category=self.category,
                    description=(
                        f"Loaded LaunchAgent matching '{pattern}': {label} "
                        f"for user {user.username}"
                    ),
                    key=agent_key(user.uid, label),
                    user=user.username,
                )
