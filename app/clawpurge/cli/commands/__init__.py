"""CLI commands for clawpurge.

This package contains all subcommand implementations.
"""

from clawpurge.cli.commands import classify, config, detect, ea, remove

__all__ = ["classify", "config", "detect", "ea", "remove"]
