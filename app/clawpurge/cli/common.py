"""Shared helpers for CLI commands.

Settings loading, the privilege check, run log and context setup, and
JSON export are the same for every command that touches the system.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

import typer
from rich.logging import RichHandler

from clawpurge.core.config import ConfigError, Settings, load_settings
from clawpurge.core.context import RunContext
from clawpurge.core.runlog import RunLog
from clawpurge.core.users import discover_local_users
from clawpurge.utils.formatting import err_console, print_error, print_info

logger = logging.getLogger(__name__)

ROOT_REQUIRED_MESSAGE = "This command must be run as root"


def configure_logging(verbose: bool) -> None:
    """Route diagnostic logging to stderr through Rich when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
        force=True,
    )


def require_root() -> None:
    """Exit with status 1 unless running with effective uid 0.

    Raises:
        typer.Exit: If not running as root.
    """
    if os.geteuid() != 0:
        print_error(ROOT_REQUIRED_MESSAGE)
        raise typer.Exit(code=1)


def get_settings(ctx: typer.Context, log_dir: Path | None = None) -> Settings:
    """Load settings for a command, honouring the global ``--config``.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    obj = ctx.obj or {}
    try:
        return load_settings(obj.get("config_path"), log_dir=log_dir)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def require_log_path(settings: Settings, *, removal: bool = False) -> Path:
    """Return the detection or removal log path.

    Raises:
        typer.Exit: If no log directory is configured.
    """
    try:
        return settings.removal_log_path if removal else settings.detection_log_path
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def build_context(
    ctx: typer.Context,
    settings: Settings,
    log_path: Path,
    *,
    root: Path = Path("/"),
    dry_run: bool = False,
) -> RunContext:
    """Open the run log and enumerate local users.

    Raises:
        typer.Exit: If the log directory cannot be created.
    """
    quiet = bool((ctx.obj or {}).get("quiet", False))
    try:
        run_log = RunLog(log_path, echo=not quiet)
    except RuntimeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    users = discover_local_users(settings.min_uid)
    logger.debug("Local users: %s", [user.username for user in users])
    return RunContext(
        catalog=settings.catalog,
        run_log=run_log,
        users=users,
        root=root,
        dry_run=dry_run,
    )


def export_json(path: Path, data: dict[str, Any], what: str) -> None:
    """Write a report to a JSON file.

    Raises:
        typer.Exit: If the file cannot be written.
    """
    export_path = path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)
    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(data, indent=2))
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
    print_info(f"{what} exported to {export_path}")
