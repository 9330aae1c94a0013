"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from clawpurge import __version__
from clawpurge.cli.commands import classify, config, detect, ea, remove
from clawpurge.cli.common import configure_logging

# Create main Typer app
app = typer.Typer(
    name="clawpurge",
    help="Detect and remove OpenClaw / ClawdBot / MoltBot on macOS.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"clawpurge version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable diagnostic logging on stderr.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Do not echo log lines to the console (the log file is still written).",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file (default: $CLAWPURGE_CONFIG or /etc/clawpurge/config.toml).",
        ),
    ] = None,
) -> None:
    """clawpurge - Detect and remove OpenClaw / ClawdBot / MoltBot.

    Run [bold]detect[/] for a read-only inventory, [bold]remove[/] to purge,
    and [bold]classify[/] to check a detection for package-manager false
    positives.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path
    configure_logging(verbose)


# Register commands
app.add_typer(detect.app, name="detect")
app.add_typer(remove.app, name="remove")
app.add_typer(classify.app, name="classify")
app.add_typer(ea.app, name="ea")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
