"""Classify command implementation.

Reads the detection and removal logs back and decides whether the
detection was genuine or a package-manager false positive.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from clawpurge.cli.common import get_settings, require_log_path
from clawpurge.core.classifier import classify, extract_evidence, render
from clawpurge.utils.formatting import console

app = typer.Typer(
    help="Classify the last detection as genuine or false positive.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


@app.callback(invoke_without_command=True)
def classify_logs(
    ctx: typer.Context,
    log_dir: Annotated[
        Path | None,
        typer.Option(
            "--log-dir",
            "-l",
            help="Directory holding both logs (overrides config).",
        ),
    ] = None,
    last_run: Annotated[
        bool,
        typer.Option("--last-run", help="Only count lines from the most recent runs."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: text or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TEXT,
) -> None:
    """Analyse the logs and exit 0 (genuine) or 1 (false positive / nothing).

    Examples:
        clawpurge classify
        clawpurge classify --last-run
        clawpurge classify --format json
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = get_settings(ctx, log_dir)
    detection_log = require_log_path(settings)
    removal_log = require_log_path(settings, removal=True)

    evidence = extract_evidence(detection_log, removal_log, last_run_only=last_run)
    classification = classify(evidence)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(classification.to_dict()))
    else:
        product = settings.catalog.app_names[0] if settings.catalog.app_names else "OpenClaw"
        for line in render(classification, product):
            console.print(line, markup=False, highlight=False, soft_wrap=True)

    raise typer.Exit(code=classification.exit_code)
