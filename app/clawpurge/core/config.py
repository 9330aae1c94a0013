"""Runtime configuration.

Settings are read from a TOML file (``/etc/clawpurge/config.toml`` by
default) and validated with pydantic. The only value that must be set
before first use is ``log_dir``; it can also come from the
``--log-dir`` option or the ``CLAWPURGE_LOG_DIR`` environment variable.
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from clawpurge.core.catalog import Catalog
from clawpurge.core.paths import ensure_config_dir, get_config_path, get_log_dir_override

logger = logging.getLogger(__name__)

DEFAULT_DETECTION_LOG = "openclaw_detection.log"
DEFAULT_REMOVAL_LOG = "openclaw_uninstall.log"


class Settings(BaseModel):
    """Resolved clawpurge settings.

    Attributes:
        log_dir: Directory holding the detection and removal logs.
        detection_log: File name of the detection log inside log_dir.
        removal_log: File name of the removal log inside log_dir.
        min_uid: Lowest uid treated as a local (non-system) account.
        catalog: Identifier catalog walked by detection and removal.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    log_dir: Annotated[Path | None, Field(description="Log directory")] = None
    detection_log: Annotated[str, Field(min_length=1)] = DEFAULT_DETECTION_LOG
    removal_log: Annotated[str, Field(min_length=1)] = DEFAULT_REMOVAL_LOG
    min_uid: Annotated[int, Field(ge=0, description="Lowest local account uid")] = 501
    catalog: Annotated[Catalog, Field(default_factory=Catalog)]

    def require_log_dir(self) -> Path:
        """Return the configured log directory.

        Raises:
            ConfigError: If no log directory has been configured.
        """
        if self.log_dir is None:
            msg = (
                "No log directory configured. Set log_dir in the config file, "
                "pass --log-dir, or export CLAWPURGE_LOG_DIR."
            )
            raise ConfigError(msg)
        return self.log_dir

    @property
    def detection_log_path(self) -> Path:
        """Full path of the detection log."""
        return self.require_log_dir() / self.detection_log

    @property
    def removal_log_path(self) -> Path:
        """Full path of the removal log."""
        return self.require_log_dir() / self.removal_log


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_settings(path: Path | None = None, *, log_dir: Path | None = None) -> Settings:
    """Load settings from a TOML file and apply overrides.

    The default config file is optional; an explicitly given ``path``
    must exist.

    Args:
        path: Config file to read. If None, uses the default config path.
        log_dir: Log directory override (e.g. from ``--log-dir``). Takes
            precedence over $CLAWPURGE_LOG_DIR and the file.

    Returns:
        Validated Settings.

    Raises:
        ConfigNotFoundError: If an explicit config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()
    data: dict[str, Any] = {}

    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read config {config_path}: {e}") from e
        logger.debug("Loaded config from %s", config_path)
    elif path is not None:
        raise ConfigNotFoundError(f"Config file not found: {config_path}")

    override = log_dir or get_log_dir_override()
    if override is not None:
        data["log_dir"] = str(override)

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write settings to a TOML file.

    Args:
        settings: Settings to persist.
        path: Destination file. If None, uses the default config path.

    Returns:
        Path of the written file.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = settings.model_dump(mode="json", exclude_none=True, exclude={"catalog"})
    # Only catalog fields that differ from the built-in defaults are written
    overrides = settings.catalog.model_dump(mode="json", exclude_defaults=True)
    if overrides:
        data["catalog"] = overrides

    try:
        ensure_config_dir(config_path.parent)
        with open(config_path, "wb") as f:
            tomli_w.dump(data, f)
    except (OSError, RuntimeError) as e:
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path
