"""Detect command implementation.

Read-only inventory of every trace of the product on this machine.
"""

from pathlib import Path
from typing import Annotated

import typer

from clawpurge.cli.common import (
    build_context,
    export_json,
    get_settings,
    require_log_path,
    require_root,
)
from clawpurge.core.detector import InventoryWalker

app = typer.Typer(
    help="Detect installed components (read-only).",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def detect(
    ctx: typer.Context,
    log_dir: Annotated[
        Path | None,
        typer.Option(
            "--log-dir",
            "-l",
            help="Directory for the detection log (overrides config).",
        ),
    ] = None,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export the detection report to a JSON file.",
        ),
    ] = None,
    root: Annotated[
        Path,
        typer.Option("--root", hidden=True, help="Resolve system paths against this root."),
    ] = Path("/"),
) -> None:
    """Walk every known location and log each component found.

    Each finding is written as a FOUND line to the detection log. The
    command always exits 0 once it has run; the result is in the log.

    Examples:
        clawpurge detect
        clawpurge detect --log-dir /var/log/openclaw_detection
        clawpurge detect --export detection.json
    """
    if ctx.invoked_subcommand is not None:
        return

    require_root()
    settings = get_settings(ctx, log_dir)
    log_path = require_log_path(settings)
    context = build_context(ctx, settings, log_path, root=root)

    report = InventoryWalker(context).run()

    if export_path is not None:
        export_json(export_path, report.to_dict(), "Detection report")
