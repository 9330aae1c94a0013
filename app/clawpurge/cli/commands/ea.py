"""Extension attribute command implementation.

Prints a single ``<result>...</result>`` line for a fleet-management
agent and always exits 0.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from clawpurge.core.config import ConfigError, load_settings
from clawpurge.core.tailcheck import TailStatus, check_detection_log

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Print the detection result as an extension attribute.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def extension_attribute(
    ctx: typer.Context,
    log_dir: Annotated[
        Path | None,
        typer.Option(
            "--log-dir",
            "-l",
            help="Directory holding the detection log (overrides config).",
        ),
    ] = None,
) -> None:
    """Report Detected, Not Detected or Log Not Found.

    Only the last lines of the detection log are inspected. A missing
    or unusable configuration reports Log Not Found.
    """
    if ctx.invoked_subcommand is not None:
        return

    obj = ctx.obj or {}
    try:
        settings = load_settings(obj.get("config_path"), log_dir=log_dir)
        status = check_detection_log(settings.detection_log_path)
    except ConfigError as e:
        logger.debug("Configuration unusable: %s", e)
        status = TailStatus.LOG_NOT_FOUND

    typer.echo(status.tag)
