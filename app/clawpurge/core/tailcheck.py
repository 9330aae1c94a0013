"""Detection log tail check for fleet-management extension attributes.

Prints one of three fixed tagged strings depending on whether the last
lines of the detection log report a detection.
"""

from collections import deque
from enum import Enum
from pathlib import Path

from clawpurge.core.runlog import RESULT_DETECTED

TAIL_LINES = 10


class TailStatus(Enum):
    """Outcome of the tail check."""

    DETECTED = "Detected"
    NOT_DETECTED = "Not Detected"
    LOG_NOT_FOUND = "Log Not Found"

    @property
    def tag(self) -> str:
        """Extension-attribute result string."""
        return f"<result>{self.value}</result>"


def tail(path: Path, count: int = TAIL_LINES) -> list[str]:
    """Return the last ``count`` lines of a text file."""
    with open(path, encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\n") for line in deque(f, maxlen=count)]


def check_detection_log(path: Path, count: int = TAIL_LINES) -> TailStatus:
    """Check whether the last lines of the detection log report a detection.

    Args:
        path: Detection log file.
        count: Number of trailing lines to inspect.

    Returns:
        LOG_NOT_FOUND if the file is missing or unreadable, DETECTED if a
        ``RESULT: Detected`` line is among the last lines, NOT_DETECTED
        otherwise.
    """
    if not path.is_file():
        return TailStatus.LOG_NOT_FOUND
    try:
        lines = tail(path, count)
    except OSError:
        return TailStatus.LOG_NOT_FOUND

    if any(RESULT_DETECTED in line for line in lines):
        return TailStatus.DETECTED
    return TailStatus.NOT_DETECTED
