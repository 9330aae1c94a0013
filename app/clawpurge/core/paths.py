"""Path management for clawpurge.

clawpurge runs as root under a fleet-management agent, so its
configuration lives in a system-wide location rather than under a
user's XDG directories:

- Config: /etc/clawpurge/config.toml (or $CLAWPURGE_CONFIG)
- Logs:   configured ``log_dir`` (or $CLAWPURGE_LOG_DIR)
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "clawpurge"

CONFIG_ENV_VAR = "CLAWPURGE_CONFIG"
LOG_DIR_ENV_VAR = "CLAWPURGE_LOG_DIR"

SYSTEM_CONFIG_DIR = Path("/etc") / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Directory of $CLAWPURGE_CONFIG if set, otherwise /etc/clawpurge/.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).parent
    return SYSTEM_CONFIG_DIR


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path from $CLAWPURGE_CONFIG if set, otherwise /etc/clawpurge/config.toml.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return SYSTEM_CONFIG_DIR / "config.toml"


def get_log_dir_override() -> Path | None:
    """Get the log directory forced through the environment, if any.

    Returns:
        Path from $CLAWPURGE_LOG_DIR, or None when unset or empty.
    """
    value = os.environ.get(LOG_DIR_ENV_VAR)
    if value:
        return Path(value)
    return None


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_log_dir(path: Path) -> Path:
    """Create the log directory if it doesn't exist.

    Returns:
        Path to the log directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(path, "log")


def ensure_config_dir(path: Path | None = None) -> Path:
    """Create the configuration directory if it doesn't exist.

    Args:
        path: Directory to create. Defaults to :func:`get_config_dir`.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(path or get_config_dir(), "config")
