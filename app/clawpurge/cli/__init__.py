"""CLI package for clawpurge.

This package contains the Typer application and all subcommands.
"""

from clawpurge.cli.main import app

__all__ = ["app"]
