"""Protected filesystem paths that must never be deleted.

Glob sweeps only ever target entries *inside* these directories. The
list guards against a catalog entry or pattern that would expand to a
container directory itself.
"""

import fnmatch
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

# Protected filesystem path patterns (glob-style, one path segment per
# wildcard). A trailing "/**" protects the whole subtree.
# Patterns starting with ~ are expanded to each local user's home
# directory before matching. Patterns starting with / are resolved
# against the system root.
PROTECTED_PATH_PATTERNS: list[str] = [
    # System roots
    "/",
    "/System/**",
    "/Users",
    "/Library",
    "/Library/LaunchAgents",
    "/Library/LaunchDaemons",
    "/Applications",
    "/Applications/Utilities",
    # Package manager prefixes
    "/usr/local",
    "/usr/local/bin",
    "/usr/local/lib",
    "/usr/local/lib/node_modules",
    "/usr/local/Cellar",
    "/usr/local/Caskroom",
    "/opt/homebrew",
    "/opt/homebrew/bin",
    "/opt/homebrew/lib",
    "/opt/homebrew/lib/node_modules",
    "/opt/homebrew/Cellar",
    "/opt/homebrew/Caskroom",
    # Temporary and bookkeeping
    "/tmp",
    "/private/tmp",
    "/private/var/folders",
    "/private/var/folders/*",
    "/private/var/folders/*/*",
    "/var/db/receipts",
    # User homes and their standard containers
    "~",
    "~/Applications",
    "~/Library",
    "~/Library/*",
    "~/.ssh/**",
    "~/.npm-global",
    "~/.npm-global/bin",
    "~/.npm-global/lib/node_modules",
    "~/.local/share/pnpm",
    "~/.bun",
    "~/.bun/bin",
]


def _expand(pattern: str, root: Path, homes: Iterable[Path]) -> list[str]:
    if pattern.startswith("~"):
        return [str(home) + pattern[1:] for home in homes]
    if pattern == "/":
        return [str(root)]
    return [str(root / pattern.lstrip("/"))]


def _matches(path: str, pattern: str) -> bool:
    if pattern.endswith("/**"):
        base = pattern[:-3].rstrip("/")
        return path == base or path.startswith(base + "/")
    pattern = pattern.rstrip("/") or "/"
    if len(PurePosixPath(path).parts) != len(PurePosixPath(pattern).parts):
        return False
    return fnmatch.fnmatchcase(path, pattern)


def is_protected_path(
    path: str,
    *,
    root: Path = Path("/"),
    homes: Iterable[Path] = (),
) -> bool:
    """Check if a filesystem path is protected and must not be deleted.

    Args:
        path: Absolute filesystem path to check.
        root: System root that ``/``-patterns are resolved against.
        homes: Home directories of local users.

    Returns:
        True if the path matches any protected pattern, False otherwise.
    """
    normalized = path.rstrip("/") or "/"
    homes = list(homes)

    for pattern in PROTECTED_PATH_PATTERNS:
        for expanded in _expand(pattern, root, homes):
            if _matches(normalized, expanded):
                return True

    return False
