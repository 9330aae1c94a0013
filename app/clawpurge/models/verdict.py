"""Classifier verdict models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Verdict(Enum):
    """Outcome of classifying a detection run.

    Attributes:
        GENUINE: Something was really installed.
        FALSE_POSITIVE: Only package-manager queries reported the product.
        NO_DETECTION: Nothing was found and nothing was removed.
        UNUSUAL: Contradictory evidence, treated as genuine.
    """

    GENUINE = "genuine"
    FALSE_POSITIVE = "false_positive"
    NO_DETECTION = "no_detection"
    UNUSUAL = "unusual"

    @property
    def exit_code(self) -> int:
        """Exit status reported to the orchestrator."""
        if self in (Verdict.GENUINE, Verdict.UNUSUAL):
            return 0
        return 1


class Confidence(Enum):
    """How strongly a false positive is supported."""

    CONFIRMED = "confirmed"
    LIKELY = "likely"


@dataclass(frozen=True, slots=True)
class Evidence:
    """Counts and fingerprints extracted from the two run logs.

    Attributes:
        total_found: FOUND lines in the detection log.
        npm_found: FOUND lines for npm global packages.
        pnpm_found: FOUND lines for pnpm global packages.
        removed: Removing lines in the removal log.
        uninstalling: Uninstalling lines in the removal log.
        pnpm_error: Whether pnpm reported a missing importer manifest.
        npm_no_removal: Whether npm reported "up to date" instead of removing.
        detection_log_found: Whether the detection log exists.
        removal_log_found: Whether the removal log exists.
    """

    total_found: int = 0
    npm_found: int = 0
    pnpm_found: int = 0
    removed: int = 0
    uninstalling: int = 0
    pnpm_error: bool = False
    npm_no_removal: bool = False
    detection_log_found: bool = True
    removal_log_found: bool = True

    @property
    def package_manager_found(self) -> int:
        """FOUND lines attributable to npm and pnpm global-list queries."""
        return self.npm_found + self.pnpm_found

    @property
    def other_found(self) -> int:
        """FOUND lines backed by anything other than a package-manager query."""
        return self.total_found - self.package_manager_found

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_found": self.total_found,
            "npm_found": self.npm_found,
            "pnpm_found": self.pnpm_found,
            "other_found": self.other_found,
            "removed": self.removed,
            "uninstalling": self.uninstalling,
            "pnpm_error": self.pnpm_error,
            "npm_no_removal": self.npm_no_removal,
            "detection_log_found": self.detection_log_found,
            "removal_log_found": self.removal_log_found,
        }


@dataclass(frozen=True, slots=True)
class Classification:
    """Verdict plus the evidence and reasoning behind it.

    Attributes:
        verdict: Classification outcome.
        evidence: Counts the verdict was derived from.
        rationale: Human-readable reasons, one per line.
        confidence: Set for false positives only.
    """

    verdict: Verdict
    evidence: Evidence
    rationale: tuple[str, ...] = field(default_factory=tuple)
    confidence: Confidence | None = None

    @property
    def exit_code(self) -> int:
        """Exit status reported to the orchestrator."""
        return self.verdict.exit_code

    @property
    def headline(self) -> str:
        """One-line verdict title."""
        if self.verdict == Verdict.GENUINE:
            return "GENUINE DETECTION"
        if self.verdict == Verdict.FALSE_POSITIVE:
            if self.confidence == Confidence.CONFIRMED:
                return "FALSE POSITIVE CONFIRMED"
            return "LIKELY FALSE POSITIVE"
        if self.verdict == Verdict.NO_DETECTION:
            return "NO DETECTION"
        return "UNUSUAL CASE"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "verdict": self.verdict.value,
            "confidence": self.confidence.value if self.confidence else None,
            "exit_code": self.exit_code,
            "rationale": list(self.rationale),
            "evidence": self.evidence.to_dict(),
        }
