"""Running process scanner.

Looks processes up by exact name (``pgrep -x``) and by substring of the
full command line (``pgrep -f``), which catches node processes running
the gateway under a generic executable name.
"""

import logging
import os
from collections.abc import Iterable, Iterator

from clawpurge.core.context import RunContext
from clawpurge.models.finding import Finding, FindingCategory
from clawpurge.scanners.base import Scanner
from clawpurge.utils.shell import run_best_effort

logger = logging.getLogger(__name__)


def find_pids(pattern: str, *, full: bool = False) -> list[int]:
    """Return PIDs of processes matching a name or command-line pattern.

    Args:
        pattern: Exact process name, or command-line substring if ``full``.
        full: Match against the full command line (``pgrep -f``).

    Returns:
        Matching PIDs; empty when nothing matches or pgrep is unavailable.
    """
    result = run_best_effort(["pgrep", "-f" if full else "-x", pattern], timeout=15.0)
    if not result.success:
        return []

    pids: list[int] = []
    for line in result.stdout.splitlines():
        line = line.strip()
        if line.isdigit():
            pids.append(int(line))
    return pids


def own_process_ids() -> tuple[int, ...]:
    """PIDs of this process and its parent (sudo, the management agent)."""
    return (os.getpid(), os.getppid())


def format_pids(pids: list[int]) -> str:
    """Render PIDs the way they appear in log lines."""
    return " ".join(str(pid) for pid in pids)


class ProcessScanner(Scanner):
    """Scanner for running processes.

    The pattern pass ignores PIDs already reported by the exact pass as
    well as our own process and its parent, whose command lines may
    contain a pattern (a log directory named after the product).

    Args:
        context: Run context.
        own_pids: PIDs to exclude from pattern matches. Defaults to
            ours and our parent's.
    """

    def __init__(self, context: RunContext, own_pids: Iterable[int] | None = None) -> None:
        super().__init__(context)
        self._own_pids = set(own_pids if own_pids is not None else own_process_ids())

    @property
    def category(self) -> FindingCategory:
        """Return PROCESS."""
        return FindingCategory.PROCESS

    def scan(self) -> Iterator[Finding]:
        """Yield one finding per matching name or pattern."""
        catalog = self._context.catalog
        reported = set(self._own_pids)

        self._context.run_log.log("Checking for running processes...")
        for name in catalog.process_names:
            pids = find_pids(name)
            if not pids:
                continue
            reported.update(pids)
            yield Finding(
                category=self.category,
                description=f"Running process: {name} (PIDs: {format_pids(pids)})",
                key="pid:" + ",".join(str(pid) for pid in pids),
            )

        for pattern in catalog.name_patterns:
            pids = [pid for pid in find_pids(pattern, full=True) if pid not in reported]
            if not pids:
                continue
            reported.update(pids)
            yield Finding(
                category=self.category,
                description=(
                    f"Running process matching pattern '{pattern}' (PIDs: {format_pids(pids)})"
                ),
                key="pid:" + ",".join(str(pid) for pid in pids),
            )
