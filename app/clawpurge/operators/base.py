"""Base class for removal operators.

This module defines the Operator interface shared by everything that
issues mutating commands during removal. Every command is best-effort:
failures are returned as results for the caller to log, never raised.
"""

import logging

from clawpurge.core.context import RunContext
from clawpurge.models.action import Action, ActionResult
from clawpurge.utils.shell import run_best_effort

logger = logging.getLogger(__name__)


class Operator:
    """Base class for all removal operators.

    Attributes:
        dry_run: If True, commands are logged instead of executed.

    Example:
        >>> operator = ProcessOperator(context)
        >>> for result in operator.terminate_all():
        ...     print(f"{result.action.target}: {result.success}")
    """

    # Per-command timeout in seconds
    timeout: float = 120.0

    def __init__(self, context: RunContext) -> None:
        """Initialize the operator.

        Args:
            context: Run context supplying catalog, users, log and dry-run flag.
        """
        self._context = context

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._context.dry_run

    def execute(self, action: Action, *, record_output: bool = False) -> ActionResult:
        """Run one action, or log it in dry-run mode.

        Args:
            action: Action to execute.
            record_output: Append the command's output to the run log.

        Returns:
            ActionResult; a timeout or missing executable is a failed result.
        """
        run_log = self._context.run_log
        if self.dry_run:
            run_log.log(f"Dry-run: would run {action.command_line}")
            return ActionResult(action=action, success=True, dry_run=True)

        result = run_best_effort(list(action.command), timeout=self.timeout)
        if record_output and result.output:
            run_log.output(result.output)
        if not result.success:
            logger.debug("%s exited %d", action.command_line, result.returncode)
            return ActionResult(
                action=action,
                success=False,
                output=result.output,
                error=result.stderr.strip() or f"exit status {result.returncode}",
            )
        return ActionResult(action=action, success=True, output=result.output)
