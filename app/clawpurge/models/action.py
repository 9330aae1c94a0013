"""Action models for removal operations.

This module defines data structures for representing the external
commands a removal run issues (native uninstall, kill, unload,
package-manager uninstall, receipt forget) and their results.
"""

from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    """Type of removal action.

    Attributes:
        NATIVE: Step of the product's own uninstaller.
        KILL: Signal running processes.
        QUIT: Ask an application to quit.
        UNLOAD: Unload a launchd job.
        UNINSTALL: Package-manager uninstall.
        FORGET: Forget an installer receipt.
    """

    NATIVE = "native"
    KILL = "kill"
    QUIT = "quit"
    UNLOAD = "unload"
    UNINSTALL = "uninstall"
    FORGET = "forget"


@dataclass(frozen=True, slots=True)
class Action:
    """A single external command issued during removal.

    Attributes:
        action_type: Kind of action.
        target: What the action operates on (package, label, process name).
        command: Full argument list, including any sudo wrapping.
        user: Local user the action runs for, None for system scope.
    """

    action_type: ActionType
    target: str
    command: tuple[str, ...]
    user: str | None = None

    def __post_init__(self) -> None:
        """Validate action data after initialization."""
        if not self.target:
            msg = "Action target cannot be empty"
            raise ValueError(msg)
        if not self.command:
            msg = "Action command cannot be empty"
            raise ValueError(msg)

    @property
    def command_line(self) -> str:
        """Command as a single display string."""
        return " ".join(self.command)


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of executing a removal action.

    Attributes:
        action: The action that was executed.
        success: Whether the command exited with status 0.
        output: Combined stdout and stderr of the command.
        error: Error message if the action failed.
        dry_run: Whether the command was only logged.
    """

    action: Action
    success: bool
    output: str = ""
    error: str | None = None
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return not self.success
