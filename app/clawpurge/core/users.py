"""Local user discovery.

Enumerates the machine's local accounts once per run through the
directory service (``dscl``). System accounts (uid below the
threshold) and accounts without an existing home directory are skipped.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from clawpurge.utils.shell import run_best_effort

logger = logging.getLogger(__name__)

DEFAULT_MIN_UID = 501


@dataclass(frozen=True, slots=True)
class LocalUser:
    """A local login account.

    Attributes:
        username: Short account name.
        uid: Numeric user id.
        home: Home directory.
    """

    username: str
    uid: int
    home: Path

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if not self.username:
            msg = "Username cannot be empty"
            raise ValueError(msg)


def _parse_uid_listing(output: str) -> list[tuple[str, int]]:
    """Parse ``dscl . list /Users UniqueID`` output into (name, uid) pairs."""
    accounts: list[tuple[str, int]] = []
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        try:
            uid = int(parts[-1])
        except ValueError:
            logger.debug("Skipping dscl line with non-numeric uid: %r", line)
            continue
        accounts.append((parts[0], uid))
    return accounts


def _parse_record_value(output: str, key: str) -> str | None:
    """Extract a single attribute value from ``dscl . read`` output.

    dscl prints ``Key: value`` on one line, or ``Key:`` followed by the
    value on an indented continuation line when the value contains spaces.
    """
    lines = output.splitlines()
    for index, line in enumerate(lines):
        if not line.startswith(f"{key}:"):
            continue
        value = line[len(key) + 1 :].strip()
        if value:
            return value
        if index + 1 < len(lines):
            return lines[index + 1].strip() or None
    return None


def read_home_directory(username: str) -> Path | None:
    """Look up a user's home directory in the directory service."""
    result = run_best_effort(["dscl", ".", "read", f"/Users/{username}", "NFSHomeDirectory"])
    if not result.success:
        return None
    value = _parse_record_value(result.stdout, "NFSHomeDirectory")
    return Path(value) if value else None


def discover_local_users(min_uid: int = DEFAULT_MIN_UID) -> list[LocalUser]:
    """Enumerate local accounts with uid >= min_uid and an existing home.

    Args:
        min_uid: Lowest uid considered a local (non-system) account.

    Returns:
        Local users in directory-service order. Empty if dscl is unavailable.
    """
    result = run_best_effort(["dscl", ".", "list", "/Users", "UniqueID"])
    if not result.success:
        logger.warning("Cannot enumerate users: %s", result.stderr.strip() or "dscl failed")
        return []

    users: list[LocalUser] = []
    for username, uid in _parse_uid_listing(result.stdout):
        if uid < min_uid:
            continue
        home = read_home_directory(username)
        if home is None or not home.is_dir():
            logger.debug("Skipping %s: no home directory", username)
            continue
        users.append(LocalUser(username=username, uid=uid, home=home))

    return users
