"""Filesystem locations walked by detection and removal.

Each builder turns the catalog into an ordered list of PathSpec
entries: exact paths first, then glob patterns that catch unlisted or
profile-suffixed variants. Detection tests the expanded paths for
existence; removal deletes them. System paths are resolved against a
configurable root so that the same tables can be exercised in a
scratch directory.
"""

import glob
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from clawpurge.core.catalog import Catalog
from clawpurge.core.users import LocalUser


def rooted(root: Path, absolute: str) -> Path:
    """Resolve an absolute system path against ``root``."""
    return root / absolute.lstrip("/")


@dataclass(frozen=True, slots=True)
class PathSpec:
    """A single exact path or glob pattern.

    Attributes:
        pattern: Absolute path, or glob pattern whose literal part is escaped.
        is_glob: Whether ``pattern`` contains wildcards to expand.
    """

    pattern: str
    is_glob: bool = False

    @classmethod
    def exact(cls, path: Path) -> "PathSpec":
        """Spec for one literal path."""
        return cls(pattern=str(path))

    @classmethod
    def matching(cls, base: Path, pattern: str) -> "PathSpec":
        """Spec for entries of ``base`` matching a glob ``pattern``."""
        return cls(pattern=f"{glob.escape(str(base))}/{pattern}", is_glob=True)

    def expand(self) -> list[Path]:
        """Return the existing paths this spec refers to.

        A glob that matches nothing yields an empty list. Dangling
        symlinks count as existing.
        """
        if self.is_glob:
            return [Path(p) for p in sorted(glob.glob(self.pattern))]
        path = Path(self.pattern)
        if path.exists() or path.is_symlink():
            return [path]
        return []


def _substr(pattern: str, suffix: str = "") -> str:
    return f"*{glob.escape(pattern)}*{suffix}"


# =============================================================================
# Applications
# =============================================================================


def application_specs(catalog: Catalog, users: Iterable[LocalUser], root: Path) -> list[PathSpec]:
    """Application bundles in system and per-user Applications folders."""
    applications = rooted(root, "/Applications")
    specs = [PathSpec.exact(applications / f"{app}.app") for app in catalog.app_names]

    users = list(users)
    for user in users:
        specs.extend(
            PathSpec.exact(user.home / "Applications" / f"{app}.app") for app in catalog.app_names
        )

    for base in (applications, rooted(root, "/Applications/Utilities")):
        specs.extend(PathSpec.matching(base, _substr(p, ".app")) for p in catalog.name_patterns)

    for user in users:
        base = user.home / "Applications"
        specs.extend(PathSpec.matching(base, _substr(p, ".app")) for p in catalog.name_patterns)

    return specs


# =============================================================================
# launchd descriptors
# =============================================================================


def user_launchagent_specs(catalog: Catalog, user: LocalUser) -> list[PathSpec]:
    """LaunchAgent plists in a user's ~/Library/LaunchAgents."""
    base = user.home / "Library" / "LaunchAgents"
    specs = [PathSpec.exact(base / plist) for plist in catalog.launchagent_plists]
    specs.extend(PathSpec.matching(base, _substr(p, ".plist")) for p in catalog.launchd_patterns)
    return specs


def system_launchd_specs(catalog: Catalog, root: Path) -> list[PathSpec]:
    """LaunchDaemon and system LaunchAgent plists."""
    daemons = rooted(root, "/Library/LaunchDaemons")
    agents = rooted(root, "/Library/LaunchAgents")
    specs = [PathSpec.exact(daemons / f"{label}.plist") for label in catalog.launchd_labels]
    for pattern in catalog.launchd_patterns:
        specs.append(PathSpec.matching(daemons, _substr(pattern, ".plist")))
        specs.append(PathSpec.matching(agents, _substr(pattern, ".plist")))
    return specs


def launchd_plist_specs(
    catalog: Catalog, users: Iterable[LocalUser], root: Path
) -> list[PathSpec]:
    """All launchd descriptor locations, users first."""
    specs: list[PathSpec] = []
    for user in users:
        specs.extend(user_launchagent_specs(catalog, user))
    specs.extend(system_launchd_specs(catalog, root))
    return specs


# =============================================================================
# Node package managers
# =============================================================================


def node_module_specs(catalog: Catalog, user: LocalUser, root: Path) -> list[PathSpec]:
    """Global node_modules entries for npm, pnpm, bun and Homebrew node."""
    home = user.home
    specs: list[PathSpec] = []
    for pkg in catalog.node_packages:
        specs.extend(
            [
                PathSpec.exact(home / ".npm-global" / "lib" / "node_modules" / pkg),
                PathSpec.exact(rooted(root, "/usr/local/lib/node_modules") / pkg),
                PathSpec.exact(home / ".local/share/pnpm/global/5/node_modules" / pkg),
                PathSpec.matching(
                    home / "Library" / "pnpm" / "global",
                    f"*/node_modules/{glob.escape(pkg)}",
                ),
                PathSpec.exact(home / ".bun" / "install" / "global" / "node_modules" / pkg),
                PathSpec.exact(rooted(root, "/opt/homebrew/lib/node_modules") / pkg),
            ]
        )
    return specs


def node_binary_specs(catalog: Catalog, user: LocalUser, root: Path) -> list[PathSpec]:
    """Executables installed by global node packages."""
    home = user.home
    specs: list[PathSpec] = []
    for pkg in catalog.node_packages:
        specs.extend(
            [
                PathSpec.exact(home / ".npm-global" / "bin" / pkg),
                PathSpec.exact(home / ".local" / "share" / "pnpm" / pkg),
                PathSpec.exact(home / ".bun" / "bin" / pkg),
                PathSpec.exact(rooted(root, "/usr/local/bin") / pkg),
                PathSpec.exact(rooted(root, "/opt/homebrew/bin") / pkg),
            ]
        )
    return specs


# =============================================================================
# Homebrew
# =============================================================================

HOMEBREW_PREFIXES: tuple[str, ...] = ("/opt/homebrew", "/usr/local")


def homebrew_remnant_specs(catalog: Catalog, root: Path) -> list[PathSpec]:
    """Cellar, Caskroom and bin entries left behind by Homebrew."""
    specs: list[PathSpec] = []
    for formula in catalog.brew_formulas:
        for subdir in ("Cellar", "Caskroom"):
            for prefix in HOMEBREW_PREFIXES:
                specs.append(PathSpec.exact(rooted(root, prefix) / subdir / formula))
        for prefix in HOMEBREW_PREFIXES:
            specs.append(PathSpec.exact(rooted(root, prefix) / "bin" / formula))
    return specs


# =============================================================================
# Configuration and data
# =============================================================================


def config_dir_specs(catalog: Catalog, user: LocalUser) -> list[PathSpec]:
    """Main and profile-suffixed config directories in a user's home."""
    specs = [PathSpec.exact(user.home / name) for name in catalog.config_dirs]
    specs.extend(
        PathSpec.matching(user.home, f"{glob.escape(prefix)}*")
        for prefix in catalog.profile_prefixes
    )
    return specs


def library_data_specs(catalog: Catalog, user: LocalUser) -> list[PathSpec]:
    """Application data under a user's ~/Library."""
    library = user.home / "Library"
    patterns = catalog.name_patterns
    specs: list[PathSpec] = []

    for folder in ("Application Support", "Caches"):
        base = library / folder
        for app in catalog.app_names:
            specs.append(PathSpec.exact(base / app))
            specs.append(PathSpec.exact(base / f"com.{app}"))
        specs.extend(PathSpec.matching(base, _substr(p)) for p in patterns)

    preferences = library / "Preferences"
    specs.extend(PathSpec.exact(preferences / f"{bid}.plist") for bid in catalog.bundle_ids)
    specs.extend(PathSpec.matching(preferences, _substr(p, ".plist")) for p in patterns)

    saved_state = library / "Saved Application State"
    specs.extend(PathSpec.exact(saved_state / f"{bid}.savedState") for bid in catalog.bundle_ids)

    logs = library / "Logs"
    specs.extend(PathSpec.exact(logs / app) for app in catalog.app_names)
    specs.extend(PathSpec.matching(logs, _substr(p)) for p in patterns)

    specs.extend(PathSpec.exact(library / "Containers" / bid) for bid in catalog.bundle_ids)
    specs.extend(PathSpec.matching(library / "Group Containers", _substr(p)) for p in patterns)
    specs.extend(PathSpec.exact(library / "HTTPStorages" / bid) for bid in catalog.bundle_ids)
    specs.extend(PathSpec.exact(library / "WebKit" / bid) for bid in catalog.bundle_ids)

    return specs


def user_data_specs(catalog: Catalog, user: LocalUser) -> list[PathSpec]:
    """Config directories followed by ~/Library data for one user."""
    return config_dir_specs(catalog, user) + library_data_specs(catalog, user)


# =============================================================================
# System files
# =============================================================================


def receipt_file_specs(catalog: Catalog, root: Path) -> list[PathSpec]:
    """Installer receipt files in /var/db/receipts."""
    receipts = rooted(root, "/var/db/receipts")
    specs: list[PathSpec] = []
    for pattern in catalog.name_patterns:
        specs.append(PathSpec.matching(receipts, _substr(pattern, ".bom")))
        specs.append(PathSpec.matching(receipts, _substr(pattern, ".plist")))
    return specs


def temporary_specs(catalog: Catalog, root: Path) -> list[PathSpec]:
    """Per-user temporary folders and /tmp entries."""
    folders = rooted(root, "/private/var/folders")
    specs = [
        PathSpec.matching(folders, f"*/*/{glob.escape(pattern)}*")
        for pattern in catalog.name_patterns
    ]
    for pattern in catalog.name_patterns:
        specs.append(PathSpec.matching(rooted(root, "/tmp"), _substr(pattern)))
        specs.append(PathSpec.matching(rooted(root, "/private/tmp"), _substr(pattern)))
    return specs
