"""Shell execution utilities.

Provides subprocess execution with proper error handling, plus helpers
for running commands on behalf of another local user.
"""

import subprocess
from dataclasses import dataclass

# Exit statuses used when a command never produced one of its own.
NOT_FOUND_STATUS = 127
TIMEOUT_STATUS = 124


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, in that order."""
        parts = [part.strip("\n") for part in (self.stdout, self.stderr) if part.strip()]
        return "\n".join(parts)


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
) -> CommandResult:
    """Execute a shell command and return the result.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def run_best_effort(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Execute a command whose failure must never abort the caller.

    A missing executable, an OS-level launch error or a timeout are folded
    into a failed CommandResult so that callers only ever inspect
    ``returncode`` to decide whether to log and continue.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        CommandResult; never raises for launch or timeout problems.
    """
    try:
        return run_command(args, timeout=timeout)
    except FileNotFoundError as e:
        return CommandResult(stdout="", stderr=str(e), returncode=NOT_FOUND_STATUS)
    except subprocess.TimeoutExpired:
        msg = f"{args[0]} timed out after {timeout:.0f}s"
        return CommandResult(stdout="", stderr=msg, returncode=TIMEOUT_STATUS)
    except OSError as e:
        return CommandResult(stdout="", stderr=str(e), returncode=NOT_FOUND_STATUS)


def as_user(
    username: str,
    args: list[str],
    *,
    env: dict[str, str] | None = None,
) -> list[str]:
    """Wrap a command so that it runs as another user via sudo.

    sudo resets the environment, so extra variables are passed through
    ``env`` on the target side.

    Args:
        username: Account to run the command as.
        args: Command and arguments.
        env: Environment variables to set for the command.

    Returns:
        The wrapped argument list.
    """
    wrapped = ["sudo", "-u", username]
    if env:
        wrapped.append("env")
        wrapped.extend(f"{key}={value}" for key, value in env.items())
    wrapped.extend(args)
    return wrapped
