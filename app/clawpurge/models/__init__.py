"""Data models for clawpurge.

This module exports the core data structures used throughout the application.
"""

from clawpurge.models.action import Action, ActionResult, ActionType
from clawpurge.models.finding import Finding, FindingCategory
from clawpurge.models.report import (
    DetectionReport,
    RemovalReport,
    RemovalStatus,
    ReportMetadata,
)
from clawpurge.models.verdict import Classification, Confidence, Evidence, Verdict

__all__ = [
    "Action",
    "ActionResult",
    "ActionType",
    "Classification",
    "Confidence",
    "DetectionReport",
    "Evidence",
    "Finding",
    "FindingCategory",
    "RemovalReport",
    "RemovalStatus",
    "ReportMetadata",
    "Verdict",
]
