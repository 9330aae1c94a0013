"""Configuration commands.

Shows the resolved settings and writes an initial config file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from clawpurge.cli.common import get_settings
from clawpurge.core.config import ConfigError, Settings, save_settings
from clawpurge.core.paths import get_config_path
from clawpurge.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show or initialise the configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def _config_path(ctx: typer.Context) -> Path:
    return (ctx.obj or {}).get("config_path") or get_config_path()


@app.command()
def show(
    ctx: typer.Context,
    log_dir: Annotated[
        Path | None,
        typer.Option("--log-dir", "-l", help="Log directory override."),
    ] = None,
) -> None:
    """Print the resolved settings and catalog."""
    settings = get_settings(ctx, log_dir)

    table = Table(title=f"Settings ({_config_path(ctx)})", border_style="border")
    table.add_column("Key", style="header")
    table.add_column("Value", style="text")
    table.add_row("log_dir", str(settings.log_dir) if settings.log_dir else "[warning]not set[/]")
    table.add_row("detection_log", settings.detection_log)
    table.add_row("removal_log", settings.removal_log)
    table.add_row("min_uid", str(settings.min_uid))
    console.print(table)

    catalog = Table(title="Catalog", border_style="border")
    catalog.add_column("Category", style="header")
    catalog.add_column("Identifiers", style="muted")
    for name, value in settings.catalog.model_dump().items():
        shown = ", ".join(value) if isinstance(value, (list, tuple)) else str(value)
        catalog.add_row(name, shown)
    console.print(catalog)


@app.command()
def init(
    ctx: typer.Context,
    log_dir: Annotated[
        Path,
        typer.Option("--log-dir", "-l", help="Directory for the detection and removal logs."),
    ],
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the given log directory."""
    path = _config_path(ctx)
    if path.exists() and not force:
        print_error(f"Config file already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        written = save_settings(Settings(log_dir=log_dir), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote {written}")
