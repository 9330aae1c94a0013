"""Append-only run log.

Every detection or removal run writes timestamped lines to a plain text
log file and echoes them to the console. The log is the product's only
reporting surface: the classifier and the extension-attribute check read
it back, keyed on the line prefixes defined here.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from clawpurge.core.paths import ensure_log_dir
from clawpurge.utils.formatting import console

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
SECTION_RULE = "=" * 44

# Line prefixes consumed by the classifier and the tail check
FOUND_PREFIX = "FOUND: "
REMOVING_PREFIX = "Removing: "
UNINSTALLING_PREFIX = "Uninstalling "
RESULT_DETECTED = "RESULT: Detected"


def _now() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


class RunLog:
    """Tee-style writer for one run's log file.

    Each call appends a ``[timestamp] message`` line to the file (opening
    it in append mode every time, so concurrent writers never truncate
    each other) and echoes the same line to the console.

    Args:
        path: Log file to append to. Its directory is created on first use.
        echo: If False, lines are only written to the file.
        clock: Timestamp provider, replaceable in tests.
    """

    def __init__(
        self,
        path: Path,
        *,
        echo: bool = True,
        clock: Callable[[], str] = _now,
    ) -> None:
        self._path = path
        self._echo = echo
        self._clock = clock
        self._warnings = 0
        ensure_log_dir(path.parent)

    @property
    def path(self) -> Path:
        """Log file path."""
        return self._path

    @property
    def warning_count(self) -> int:
        """Number of Warning lines written by this run."""
        return self._warnings

    def log(self, message: str) -> None:
        """Append one timestamped line."""
        line = f"[{self._clock()}] {message}"
        with open(self._path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
        if self._echo:
            console.print(line, markup=False, highlight=False, soft_wrap=True)
        logger.debug("run log: %s", message)

    def section(self, title: str) -> None:
        """Write a three-line section banner."""
        self.log(SECTION_RULE)
        self.log(title)
        self.log(SECTION_RULE)

    def found(self, description: str) -> None:
        """Record a detection hit."""
        self.log(f"{FOUND_PREFIX}{description}")

    def removing(self, path: str) -> None:
        """Record a deletion that is about to happen."""
        self.log(f"{REMOVING_PREFIX}{path}")

    def uninstalling(self, what: str) -> None:
        """Record a package-manager uninstall that is about to run."""
        self.log(f"{UNINSTALLING_PREFIX}{what}")

    def warning(self, message: str) -> None:
        """Record a best-effort failure."""
        self._warnings += 1
        self.log(f"Warning: {message}")

    def output(self, text: str) -> None:
        """Append the output of an external command, one line per entry."""
        for line in text.splitlines():
            if line.strip():
                self.log(line.rstrip())
