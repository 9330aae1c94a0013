"""Detection finding model.

A finding is one confirmed trace of the product. Each finding carries
a key identifying the underlying entity, so that the exact and the
pattern passes of a walk report it only once.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from clawpurge.filesystem.models import path_key


class FindingCategory(Enum):
    """Kind of entity a finding refers to.

    Attributes:
        PROCESS: Running process.
        LAUNCHD: Loaded LaunchAgent or LaunchDaemon.
        APPLICATION: Application bundle.
        LAUNCHD_PLIST: LaunchAgent or LaunchDaemon descriptor file.
        NODE_PACKAGE: npm, pnpm or bun global package.
        HOMEBREW: Homebrew formula, cask or remnant.
        CONFIG: Configuration, cache or application data.
        RECEIPT: Installer receipt.
        SYSTEM_FILE: Temporary or per-user var folder entry.
    """

    PROCESS = "process"
    LAUNCHD = "launchd"
    APPLICATION = "application"
    LAUNCHD_PLIST = "launchd_plist"
    NODE_PACKAGE = "node_package"
    HOMEBREW = "homebrew"
    CONFIG = "config"
    RECEIPT = "receipt"
    SYSTEM_FILE = "system_file"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single detected trace.

    Attributes:
        category: Kind of entity.
        description: Text written after ``FOUND:`` in the run log.
        key: Identity of the entity, used to suppress duplicates.
        user: Local user the finding belongs to, None for system scope.
    """

    category: FindingCategory
    description: str
    key: str
    user: str | None = None

    def __post_init__(self) -> None:
        """Validate finding data after initialization."""
        if not self.description:
            msg = "Finding description cannot be empty"
            raise ValueError(msg)
        if not self.key:
            msg = "Finding key cannot be empty"
            raise ValueError(msg)

    @classmethod
    def for_path(
        cls,
        category: FindingCategory,
        path: Path,
        user: str | None = None,
    ) -> "Finding":
        """Create a finding for an existing filesystem entry."""
        return cls(category=category, description=str(path), key=path_key(path), user=user)

    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category.value,
            "description": self.description,
            "key": self.key,
            "user": self.user,
        }
