"""False-positive classifier.

``npm list -g <pkg>`` and ``pnpm list -g <pkg>`` can succeed for packages
that were never installed. A detection run that reported nothing but
such package-manager hits, followed by a removal run that deleted
nothing, is most likely a false positive. This module reads both run
logs back and decides.

Rules are evaluated in order; the first match wins:

1. Something was removed                      -> genuine
2. Non-package-manager evidence was found     -> genuine (review manually)
3. Package-manager hits plus a fingerprint    -> false positive (confirmed)
4. Package-manager hits only                  -> false positive (likely)
5. Nothing found                              -> no detection
6. Anything else                              -> unusual, treated as genuine
"""

import logging
import re
from pathlib import Path

from clawpurge.models.verdict import Classification, Confidence, Evidence, Verdict

logger = logging.getLogger(__name__)

FOUND_LINE = re.compile(r"^\[.*\] FOUND:")
NPM_FOUND = "FOUND: npm global package:"
PNPM_FOUND = "FOUND: pnpm global package:"
REMOVING_LINE = re.compile(r"^\[.*\] Removing:")
UNINSTALLING_LINE = re.compile(r"^\[.*\] Uninstalling")

PNPM_NOT_INSTALLED = "ERR_PNPM_NO_IMPORTER_MANIFEST_FOUND"
NPM_NOT_INSTALLED = re.compile(r"up to date, audited.*package")

DETECTION_START = re.compile(r"^\[.*\] Starting .* Detection")
REMOVAL_START = re.compile(r"^\[.*\] Starting .* Uninstall")


def _read_lines(path: Path) -> list[str] | None:
    """Read a log file, or None if it does not exist."""
    if not path.is_file():
        return None
    with open(path, encoding="utf-8", errors="replace") as f:
        return f.read().splitlines()


def _last_run(lines: list[str], start: re.Pattern[str]) -> list[str]:
    """Keep only the lines from the last start banner on."""
    for index in range(len(lines) - 1, -1, -1):
        if start.search(lines[index]):
            return lines[index:]
    return lines


def extract_evidence(
    detection_log: Path,
    removal_log: Path,
    *,
    last_run_only: bool = False,
) -> Evidence:
    """Count detection and removal signals in the two logs.

    A missing log contributes zero counts.

    Args:
        detection_log: Log written by ``clawpurge detect``.
        removal_log: Log written by ``clawpurge remove``.
        last_run_only: Ignore lines written before the last run of each tool.

    Returns:
        Evidence extracted from both logs.
    """
    detection = _read_lines(detection_log)
    removal = _read_lines(removal_log)

    if detection is not None and last_run_only:
        detection = _last_run(detection, DETECTION_START)
    if removal is not None and last_run_only:
        removal = _last_run(removal, REMOVAL_START)

    detection_lines = detection or []
    removal_lines = removal or []
    removal_text = "\n".join(removal_lines)

    evidence = Evidence(
        total_found=sum(1 for line in detection_lines if FOUND_LINE.search(line)),
        npm_found=sum(1 for line in detection_lines if NPM_FOUND in line),
        pnpm_found=sum(1 for line in detection_lines if PNPM_FOUND in line),
        removed=sum(1 for line in removal_lines if REMOVING_LINE.search(line)),
        uninstalling=sum(1 for line in removal_lines if UNINSTALLING_LINE.search(line)),
        pnpm_error=PNPM_NOT_INSTALLED in removal_text,
        npm_no_removal=NPM_NOT_INSTALLED.search(removal_text) is not None,
        detection_log_found=detection is not None,
        removal_log_found=removal is not None,
    )
    logger.debug("Extracted evidence: %s", evidence)
    return evidence


def classify(evidence: Evidence) -> Classification:
    """Apply the ordered rules to extracted evidence."""
    if evidence.removed > 0:
        rationale = [f"Files were actually removed ({evidence.removed} items)"]
        if evidence.other_found > 0:
            rationale.append(
                f"Detection also found {evidence.other_found} item(s) beyond "
                "package manager packages"
            )
        return Classification(Verdict.GENUINE, evidence, tuple(rationale))

    if evidence.other_found > 0:
        return Classification(
            Verdict.GENUINE,
            evidence,
            (
                "Found evidence beyond just package manager packages",
                "However, nothing was removed during uninstall (may need investigation)",
            ),
        )

    if evidence.package_manager_found > 0:
        if evidence.pnpm_found > 0 and evidence.pnpm_error:
            return Classification(
                Verdict.FALSE_POSITIVE,
                evidence,
                (
                    f"Only pnpm packages detected ({evidence.pnpm_found})",
                    "PNPM error confirms packages were never actually installed",
                ),
                Confidence.CONFIRMED,
            )
        if evidence.npm_found > 0 and evidence.npm_no_removal:
            return Classification(
                Verdict.FALSE_POSITIVE,
                evidence,
                (
                    f"Only npm packages detected ({evidence.npm_found})",
                    "NPM output indicates packages were never actually installed",
                ),
                Confidence.CONFIRMED,
            )
        return Classification(
            Verdict.FALSE_POSITIVE,
            evidence,
            (
                "Only package manager packages detected "
                f"(pnpm: {evidence.pnpm_found}, npm: {evidence.npm_found})",
                "Nothing was actually removed during uninstall",
            ),
            Confidence.LIKELY,
        )

    if evidence.total_found == 0:
        return Classification(
            Verdict.NO_DETECTION,
            evidence,
            (
                "No evidence found during detection",
                "Nothing removed during uninstall",
            ),
        )

    return Classification(
        Verdict.UNUSUAL,
        evidence,
        (
            f"Detection found: {evidence.total_found} items",
            f"Items removed: {evidence.removed}",
            "Treating as genuine due to uncertainty",
        ),
    )


def render(classification: Classification, product: str = "OpenClaw") -> list[str]:
    """Render the analysis report printed by ``clawpurge classify``.

    Args:
        classification: Result of :func:`classify`.
        product: Product name used in the header.

    Returns:
        Report lines, without trailing newlines.
    """
    evidence = classification.evidence
    lines = [f"=== {product} False Positive Analysis ==="]

    if not evidence.detection_log_found:
        lines.append("  NOTE: Detection log not found, detection counts are zero")

    lines.extend(
        [
            "Detection Summary:",
            f"  Total items found: {evidence.total_found}",
            f"  pnpm packages found: {evidence.pnpm_found}",
            f"  npm packages found: {evidence.npm_found}",
            f"  Other evidence found: {evidence.other_found}",
            "",
            "Checking uninstall results...",
        ]
    )
    if not evidence.removal_log_found:
        lines.append("  WARNING: Uninstall log not found")

    lines.extend(
        [
            "Uninstall Summary:",
            f"  Items removed: {evidence.removed}",
            f"  Uninstall attempts: {evidence.uninstalling}",
            f"  PNPM error found: {str(evidence.pnpm_error).lower()}",
            f"  NPM no-removal pattern: {str(evidence.npm_no_removal).lower()}",
            "",
            "=== Analysis ===",
            f"{classification.headline}:",
        ]
    )
    lines.extend(f"  - {reason}" for reason in classification.rationale)
    return lines
