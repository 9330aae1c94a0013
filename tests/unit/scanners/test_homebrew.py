"""Unit tests for the Homebrew scanner."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from clawpurge.core.context import RunContext
from clawpurge.scanners.homebrew import HomebrewScanner, brew_command


@pytest.fixture
def brew(context: RunContext, make_executable) -> Path:
    return make_executable(context.root / "opt" / "homebrew" / "bin" / "brew")


class TestBrewCommand:
    """Tests for brew_command."""

    def test_runs_as_owner_without_auto_update(self) -> None:
        """brew runs as the owner with auto-update disabled."""
        command = brew_command(Path("/opt/homebrew/bin/brew"), "alice", ["list", "--cask", "x"])

        assert command == [
            "sudo",
            "-u",
            "alice",
            "env",
            "HOMEBREW_NO_AUTO_UPDATE=1",
            "/opt/homebrew/bin/brew",
            "list",
            "--cask",
            "x",
        ]


class TestHomebrewScanner:
    """Tests for HomebrewScanner."""

    def test_unavailable(self, context: RunContext, fake_shell) -> None:
        """Without brew the scanner is unavailable and yields nothing."""
        scanner = HomebrewScanner(context)

        assert not scanner.is_available()
        assert list(scanner.scan()) == []

    def test_formula_and_cask(
        self, context: RunContext, brew: Path, fake_shell, read_log: Callable[[], list[str]]
    ) -> None:
        """Formulas and casks listed by brew are reported."""
        fake_shell.on(str(brew), "list", "--formula", "openclaw-cli")
        fake_shell.on(str(brew), "list", "--cask", "openclaw")

        with patch("clawpurge.scanners.homebrew.path_owner", return_value="alice"):
            findings = list(HomebrewScanner(context).scan())

        assert [f.description for f in findings] == [
            "Homebrew cask: openclaw",
            "Homebrew formula: openclaw-cli",
        ]
        assert fake_shell.ran("sudo", "-u", "alice", str(brew), "list", "--cask", "openclaw")
        assert f"Found Homebrew at: {brew}" in read_log()
        assert "Homebrew owned by: alice" in read_log()

    def test_unknown_owner(
        self, context: RunContext, brew: Path, fake_shell, read_log: Callable[[], list[str]]
    ) -> None:
        """brew is not queried when its owner cannot be determined."""
        with patch("clawpurge.scanners.homebrew.path_owner", return_value=None):
            findings = list(HomebrewScanner(context).scan())

        assert findings == []
        assert read_log()[-1] == f"Warning: Cannot determine the owner of {brew}"
        assert not fake_shell.ran("list")
