"""Package-manager and CLI discovery.

Executables are located by checking an ordered list of candidate
install locations and falling back to a ``which`` lookup run as the
target user. Candidates starting with ``~`` are resolved against the
user's home; absolute candidates against the system root. Candidates
may contain glob patterns (nvm keeps one directory per node version).
"""

import glob
import logging
import os
import pwd
from collections.abc import Sequence
from pathlib import Path

from clawpurge.utils.shell import as_user, run_best_effort

logger = logging.getLogger(__name__)

NPM_CANDIDATES: tuple[str, ...] = (
    "~/.nvm/versions/node/*/bin/npm",
    "/opt/homebrew/bin/npm",
    "/usr/local/bin/npm",
    "/usr/bin/npm",
)
PNPM_CANDIDATES: tuple[str, ...] = (
    "~/.local/share/pnpm/pnpm",
    "~/Library/pnpm/pnpm",
    "/opt/homebrew/bin/pnpm",
    "/usr/local/bin/pnpm",
)
BUN_CANDIDATES: tuple[str, ...] = (
    "~/.bun/bin/bun",
    "/opt/homebrew/bin/bun",
    "/usr/local/bin/bun",
)
BREW_CANDIDATES: tuple[str, ...] = (
    "/opt/homebrew/bin/brew",
    "/usr/local/bin/brew",
)

NODE_MANAGERS: dict[str, tuple[str, ...]] = {
    "npm": NPM_CANDIDATES,
    "pnpm": PNPM_CANDIDATES,
    "bun": BUN_CANDIDATES,
}


def cli_candidates(cli_name: str) -> tuple[str, ...]:
    """Install locations of the product's own command line tool."""
    return (
        f"~/.npm-global/bin/{cli_name}",
        f"~/.local/share/pnpm/{cli_name}",
        f"~/.bun/bin/{cli_name}",
        f"/opt/homebrew/bin/{cli_name}",
        f"/usr/local/bin/{cli_name}",
    )


def is_executable(path: Path) -> bool:
    """Check that a path is a regular file the current process may execute."""
    return path.is_file() and os.access(path, os.X_OK)


def _resolve(candidate: str, home: Path | None, root: Path) -> list[Path]:
    if candidate.startswith("~"):
        if home is None:
            return []
        base, rest = home, candidate[2:]
    else:
        base, rest = root, candidate.lstrip("/")

    if glob.has_magic(rest):
        return [Path(p) for p in sorted(glob.glob(f"{glob.escape(str(base))}/{rest}"))]
    return [base / rest]


def which(name: str, user: str | None = None) -> Path | None:
    """Look a command up in PATH, optionally as another user.

    Args:
        name: Command name.
        user: Account whose PATH is searched. None searches our own.

    Returns:
        First path printed by ``which``, or None.
    """
    args = ["which", name]
    result = run_best_effort(as_user(user, args) if user else args, timeout=15.0)
    if not result.success:
        return None
    lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
    return Path(lines[0]) if lines else None


def find_executable(
    candidates: Sequence[str],
    *,
    home: Path | None = None,
    user: str | None = None,
    name: str | None = None,
    root: Path = Path("/"),
) -> Path | None:
    """Return the first existing executable among the candidates.

    Args:
        candidates: Ordered candidate locations (``~``-relative, absolute,
            or glob patterns).
        home: Home directory used for ``~`` candidates.
        user: Account used for the ``which`` fallback.
        name: Command name for the ``which`` fallback. No fallback if None.
        root: System root for absolute candidates.

    Returns:
        Path to the executable, or None if the tool is absent.
    """
    for candidate in candidates:
        for path in _resolve(candidate, home, root):
            if is_executable(path):
                logger.debug("Found %s", path)
                return path

    if name is None:
        return None

    found = which(name, user)
    if found is not None and is_executable(found):
        return found
    return None


def find_node_manager(manager: str, home: Path, user: str, root: Path = Path("/")) -> Path | None:
    """Locate npm, pnpm or bun for a user."""
    return find_executable(NODE_MANAGERS[manager], home=home, user=user, name=manager, root=root)


def find_brew(root: Path = Path("/")) -> Path | None:
    """Locate Homebrew, falling back to ``which brew``.

    The ``which`` result is trusted as-is: brew may live outside the
    standard prefixes.
    """
    path = find_executable(BREW_CANDIDATES, root=root)
    if path is not None:
        return path
    return which("brew")


def path_owner(path: Path) -> str | None:
    """Return the name of the account owning ``path``.

    Returns:
        Username, or None if the path is missing or the uid is unknown.
    """
    try:
        uid = path.stat().st_uid
        return pwd.getpwuid(uid).pw_name
    except (OSError, KeyError):
        return None
