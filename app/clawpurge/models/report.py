"""Run report models for JSON export.

Detection and removal runs both accumulate a report alongside the run
log. Reports can be exported to JSON with a metadata block.
"""

import socket
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

from clawpurge.models.action import ActionResult, ActionType
from clawpurge.models.finding import Finding


@dataclass(frozen=True, slots=True)
class ReportMetadata:
    """Metadata for an exported report.

    Attributes:
        timestamp: ISO format timestamp when the run finished.
        hostname: Name of the machine that was examined.
        clawpurge_version: Version of clawpurge that produced the report.
        dry_run: Whether mutating steps were only logged.
    """

    timestamp: str
    hostname: str
    clawpurge_version: str
    dry_run: bool = False

    @classmethod
    def create(cls, dry_run: bool = False) -> "ReportMetadata":
        """Create metadata for the current host and time."""
        from clawpurge import __version__

        return cls(
            timestamp=datetime.now(UTC).isoformat(),
            hostname=socket.gethostname(),
            clawpurge_version=__version__,
            dry_run=dry_run,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "hostname": self.hostname,
            "clawpurge_version": self.clawpurge_version,
            "dry_run": self.dry_run,
        }


@dataclass(slots=True)
class DetectionReport:
    """Unique findings of one detection run.

    Attributes:
        log_path: Detection log the run wrote to.
        findings: Findings in the order they were first seen.
    """

    log_path: Path
    findings: list[Finding] = field(default_factory=list)
    _keys: set[str] = field(default_factory=set, repr=False)

    def add(self, finding: Finding) -> bool:
        """Record a finding unless its key was already seen.

        Returns:
            True if the finding is new.
        """
        if finding.key in self._keys:
            return False
        self._keys.add(finding.key)
        self.findings.append(finding)
        return True

    @property
    def total(self) -> int:
        """Number of unique findings."""
        return len(self.findings)

    @property
    def detected(self) -> bool:
        """Whether anything was found."""
        return bool(self.findings)

    def by_category(self) -> dict[str, int]:
        """Count findings per category."""
        counts: dict[str, int] = {}
        for finding in self.findings:
            name = finding.category.value
            counts[name] = counts.get(name, 0) + 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "metadata": ReportMetadata.create().to_dict(),
            "log_path": str(self.log_path),
            "total": self.total,
            "summary": self.by_category(),
            "findings": [finding.to_dict() for finding in self.findings],
        }


class RemovalStatus(Enum):
    """Final status of a removal run."""

    COMPLETE = "complete"
    PARTIAL = "partial"


@dataclass(slots=True)
class RemovalReport:
    """Outcome of one removal run.

    Attributes:
        log_path: Removal log the run wrote to.
        dry_run: Whether mutating steps were only logged.
        removed: Paths actually deleted.
        actions: Results of every external command issued.
        warnings: Number of best-effort failures logged.
        remaining_processes: Process names still running after cleanup.
        remaining_files: Paths still present after cleanup.
    """

    log_path: Path
    dry_run: bool = False
    removed: list[str] = field(default_factory=list)
    actions: list[ActionResult] = field(default_factory=list)
    warnings: int = 0
    remaining_processes: list[str] = field(default_factory=list)
    remaining_files: list[str] = field(default_factory=list)

    @property
    def uninstalled(self) -> int:
        """Number of package-manager uninstall attempts."""
        return sum(1 for r in self.actions if r.action.action_type == ActionType.UNINSTALL)

    @property
    def status(self) -> RemovalStatus:
        """COMPLETE when nothing was left behind, PARTIAL otherwise."""
        if self.remaining_processes or self.remaining_files:
            return RemovalStatus.PARTIAL
        return RemovalStatus.COMPLETE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "metadata": ReportMetadata.create(dry_run=self.dry_run).to_dict(),
            "log_path": str(self.log_path),
            "status": self.status.value,
            "removed": list(self.removed),
            "uninstalled": self.uninstalled,
            "warnings": self.warnings,
            "actions": [
                {
                    "type": r.action.action_type.value,
                    "target": r.action.target,
                    "user": r.action.user,
                    "command": r.action.command_line,
                    "success": r.success,
                    "dry_run": r.dry_run,
                }
                for r in self.actions
            ],
            "remaining_processes": list(self.remaining_processes),
            "remaining_files": list(self.remaining_files),
        }
