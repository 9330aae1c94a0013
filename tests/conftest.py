"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules. External
commands are never run: ``fake_shell`` replaces ``run_best_effort`` in
every module that calls it and answers from canned responses.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from clawpurge.core.catalog import Catalog
from clawpurge.core.context import RunContext
from clawpurge.core.runlog import RunLog
from clawpurge.core.users import LocalUser
from clawpurge.utils.shell import CommandResult

FIXED_TIMESTAMP = "2026-02-03 10:00:00"

# Modules that import run_best_effort by name
SHELL_CALLERS = (
    "clawpurge.core.discovery",
    "clawpurge.core.users",
    "clawpurge.operators.base",
    "clawpurge.operators.node",
    "clawpurge.scanners.homebrew",
    "clawpurge.scanners.launchd",
    "clawpurge.scanners.node",
    "clawpurge.scanners.processes",
    "clawpurge.scanners.receipts",
)


class FakeShell:
    """Stand-in for run_best_effort.

    Responses are registered with :meth:`on`; a command matches when it
    contains every given token. The most recent matching registration
    wins. Unmatched commands fail with exit status 1, which every caller
    treats as "not present".
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self._responses: list[tuple[tuple[str, ...], CommandResult]] = []

    def on(self, *tokens: str, stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        """Register the result for commands containing all ``tokens``."""
        self._responses.append((tokens, CommandResult(stdout, stderr, returncode)))

    def __call__(self, args: list[str], *, timeout: float | None = None) -> CommandResult:
        self.calls.append(list(args))
        for tokens, result in reversed(self._responses):
            if all(token in args for token in tokens):
                return result
        return CommandResult(stdout="", stderr="", returncode=1)

    def ran(self, *tokens: str) -> bool:
        """Check whether any recorded command contains all ``tokens``."""
        return any(all(token in call for token in tokens) for call in self.calls)


@pytest.fixture
def fake_shell(monkeypatch: pytest.MonkeyPatch) -> FakeShell:
    """Replace every external command with a FakeShell."""
    shell = FakeShell()
    for module in SHELL_CALLERS:
        monkeypatch.setattr(f"{module}.run_best_effort", shell)
    return shell


@pytest.fixture
def run_log(tmp_path: Path) -> RunLog:
    """Run log writing to a temporary file, without console echo."""
    return RunLog(tmp_path / "logs" / "run.log", echo=False, clock=lambda: FIXED_TIMESTAMP)


@pytest.fixture
def read_log(run_log: RunLog) -> Callable[[], list[str]]:
    """Return a function reading the run log's lines, without timestamps."""

    def _read() -> list[str]:
        if not run_log.path.exists():
            return []
        prefix = f"[{FIXED_TIMESTAMP}] "
        return [line.removeprefix(prefix) for line in run_log.path.read_text().splitlines()]

    return _read


@pytest.fixture
def system_root(tmp_path: Path) -> Path:
    """Scratch directory standing in for the system root."""
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def local_user(tmp_path: Path) -> LocalUser:
    """Local user with an existing home directory."""
    home = tmp_path / "Users" / "alice"
    home.mkdir(parents=True)
    return LocalUser(username="alice", uid=501, home=home)


@pytest.fixture
def catalog() -> Catalog:
    """Default identifier catalog."""
    return Catalog()


@pytest.fixture
def context(
    catalog: Catalog,
    run_log: RunLog,
    local_user: LocalUser,
    system_root: Path,
) -> RunContext:
    """Run context for one local user against the scratch root."""
    return RunContext(catalog=catalog, run_log=run_log, users=[local_user], root=system_root)


@pytest.fixture
def make_executable() -> Callable[[Path], Path]:
    """Return a function creating an executable file at a path."""

    def _make(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n")
        path.chmod(0o755)
        return path

    return _make
