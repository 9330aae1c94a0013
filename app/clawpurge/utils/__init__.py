"""Utility modules for clawpurge.

This module exports commonly used utility functions.
"""

from clawpurge.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
)
from clawpurge.utils.shell import (
    CommandResult,
    as_user,
    run_best_effort,
    run_command,
)

__all__ = [
    "CommandResult",
    "as_user",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "run_best_effort",
    "run_command",
]
