"""Unit tests for the remove command."""

import json
from pathlib import Path

import pytest
from clawpurge.cli.main import app
from clawpurge.core.users import LocalUser
from typer.testing import CliRunner

runner = CliRunner()


@pytest.mark.usefixtures("as_root")
class TestRemoveCommand:
    """Tests for clawpurge remove."""

    def test_removes_and_logs(
        self, log_dir: Path, system_root: Path, local_user: LocalUser
    ) -> None:
        """Traces are deleted and each deletion is logged."""
        config = local_user.home / ".openclaw"
        config.mkdir()

        result = runner.invoke(
            app, ["remove", "--log-dir", str(log_dir), "--root", str(system_root)]
        )

        assert result.exit_code == 0
        assert not config.exists()
        log = (log_dir / "openclaw_uninstall.log").read_text()
        assert f"Removing: {config}" in log
        assert "SUCCESS: All OpenClaw/ClawdBot/MoltBot components have been removed." in log

    def test_dry_run(self, log_dir: Path, system_root: Path, local_user: LocalUser) -> None:
        """--dry-run deletes nothing."""
        config = local_user.home / ".openclaw"
        config.mkdir()

        result = runner.invoke(
            app,
            ["remove", "--dry-run", "--log-dir", str(log_dir), "--root", str(system_root)],
        )

        assert result.exit_code == 0
        assert config.is_dir()
        assert "Removing:" not in (log_dir / "openclaw_uninstall.log").read_text()

    def test_partial_exits_zero_by_default(
        self, log_dir: Path, system_root: Path, fake_shell
    ) -> None:
        """Leftovers are reported but do not fail the command."""
        fake_shell.on("pgrep", "-x", "moltbot", stdout="31\n")

        result = runner.invoke(
            app, ["remove", "--log-dir", str(log_dir), "--root", str(system_root)]
        )

        assert result.exit_code == 0
        assert "PARTIAL" in (log_dir / "openclaw_uninstall.log").read_text()

    def test_fail_on_partial(self, log_dir: Path, system_root: Path, fake_shell) -> None:
        """--fail-on-partial turns leftovers into exit status 2."""
        fake_shell.on("pgrep", "-x", "moltbot", stdout="31\n")

        result = runner.invoke(
            app,
            [
                "remove",
                "--fail-on-partial",
                "--log-dir",
                str(log_dir),
                "--root",
                str(system_root),
            ],
        )

        assert result.exit_code == 2

    def test_export(self, log_dir: Path, system_root: Path, tmp_path: Path) -> None:
        """The removal report can be exported."""
        export = tmp_path / "removal.json"

        result = runner.invoke(
            app,
            [
                "remove",
                "--log-dir",
                str(log_dir),
                "--root",
                str(system_root),
                "--export",
                str(export),
            ],
        )

        assert result.exit_code == 0
        data = json.loads(export.read_text())
        assert data["status"] == "complete"
        assert data["removed"] == []
