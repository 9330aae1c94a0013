"""Remove command implementation.

Uninstalls and deletes every trace of the product, then verifies.
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
from clawpurge.core.remover import RemovalExecutor
from clawpurge.models.report import RemovalStatus

app = typer.Typer(
    help="Remove all installed components.",
    invoke_without_command=True,
)

# Exit status for a partial removal when --fail-on-partial is given
PARTIAL_EXIT_CODE = 2


@app.callback(invoke_without_command=True)
def remove(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Log what would be done without changing anything."),
    ] = False,
    fail_on_partial: Annotated[
        bool,
        typer.Option(
            "--fail-on-partial",
            help=f"Exit with status {PARTIAL_EXIT_CODE} when components remain.",
        ),
    ] = False,
    log_dir: Annotated[
        Path | None,
        typer.Option(
            "--log-dir",
            "-l",
            help="Directory for the removal log (overrides config).",
        ),
    ] = None,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export the removal report to a JSON file.",
        ),
    ] = None,
    root: Annotated[
        Path,
        typer.Option("--root", hidden=True, help="Resolve system paths against this root."),
    ] = Path("/"),
) -> None:
    """Uninstall, unload, kill and delete every component, then verify.

    Individual failures are logged as warnings and never stop the run.

    Examples:
        clawpurge remove
        clawpurge remove --dry-run
        clawpurge remove --fail-on-partial
    """
    if ctx.invoked_subcommand is not None:
        return

    require_root()
    settings = get_settings(ctx, log_dir)
    log_path = require_log_path(settings, removal=True)
    context = build_context(ctx, settings, log_path, root=root, dry_run=dry_run)

    report = RemovalExecutor(context).run()

    if export_path is not None:
        export_json(export_path, report.to_dict(), "Removal report")

    if fail_on_partial and report.status == RemovalStatus.PARTIAL:
        raise typer.Exit(code=PARTIAL_EXIT_CODE)
