"""Per-run context shared by scanners and operators."""

from dataclasses import dataclass, field
from pathlib import Path

from clawpurge.core.catalog import Catalog
from clawpurge.core.runlog import RunLog
from clawpurge.core.users import LocalUser


@dataclass(slots=True)
class RunContext:
    """Everything a detection or removal run works against.

    Attributes:
        catalog: Identifier catalog for the run.
        run_log: Log the run writes to.
        users: Local users, enumerated once at startup.
        root: System root that absolute system paths are resolved against.
        dry_run: If True, mutating steps are only logged.
    """

    catalog: Catalog
    run_log: RunLog
    users: list[LocalUser] = field(default_factory=list)
    root: Path = Path("/")
    dry_run: bool = False

    @property
    def homes(self) -> list[Path]:
        """Home directories of all local users."""
        return [user.home for user in self.users]

    @property
    def usernames(self) -> list[str]:
        """Short names of all local users."""
        return [user.username for user in self.users]

    def log_users(self) -> None:
        """Write the ``Found N local user(s)`` line."""
        names = " ".join(self.usernames)
        self.run_log.log(f"Found {len(self.users)} local user(s): {names}".rstrip())
