"""Unit tests for the classify command."""

from pathlib import Path

from clawpurge.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()

TS = "[2026-02-03 10:00:00]"


def write_logs(log_dir: Path, detection: list[str], removal: list[str] | None) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)
    (log_dir / "openclaw_detection.log").write_text("".join(f"{TS} {l}\n" for l in detection))
    if removal is not None:
        (log_dir / "openclaw_uninstall.log").write_text("".join(f"{TS} {l}\n" for l in removal))


class TestClassifyCommand:
    """Tests for clawpurge classify."""

    def test_genuine_exits_zero(self, log_dir: Path) -> None:
        """Three findings and one removal are genuine."""
        write_logs(
            log_dir,
            [
                "FOUND: /Applications/OpenClaw.app",
                "FOUND: /Users/alice/.openclaw",
                "FOUND: Running process: openclaw (PIDs: 12)",
            ],
            ["Removing: /Applications/OpenClaw.app"],
        )

        result = runner.invoke(app, ["classify", "--log-dir", str(log_dir)])

        assert result.exit_code == 0
        assert "=== OpenClaw False Positive Analysis ===" in result.stdout
        assert "GENUINE DETECTION:" in result.stdout
        assert "  Total items found: 3" in result.stdout

    def test_npm_false_positive_exits_one(self, log_dir: Path) -> None:
        """npm-only hits with an up-to-date uninstall exit 1."""
        write_logs(
            log_dir,
            [
                "FOUND: npm global package: openclaw (user: alice)",
                "FOUND: npm global package: clawdbot (user: alice)",
            ],
            ["Uninstalling openclaw via npm for alice", "up to date, audited 1 package in 1s"],
        )

        result = runner.invoke(app, ["classify", "--log-dir", str(log_dir)])

        assert result.exit_code == 1
        assert "FALSE POSITIVE CONFIRMED:" in result.stdout
        assert "  NPM no-removal pattern: true" in result.stdout

    def test_missing_removal_log(self, log_dir: Path) -> None:
        """A missing uninstall log is warned about."""
        write_logs(log_dir, [], None)

        result = runner.invoke(app, ["classify", "--log-dir", str(log_dir)])

        assert result.exit_code == 1
        assert "WARNING: Uninstall log not found" in result.stdout
        assert "NO DETECTION:" in result.stdout

    def test_json_output(self, log_dir: Path) -> None:
        """JSON output carries the verdict and evidence."""
        write_logs(
            log_dir,
            ["FOUND: pnpm global package: moltbot (user: alice)"],
            ["ERR_PNPM_NO_IMPORTER_MANIFEST_FOUND"],
        )

        result = runner.invoke(app, ["classify", "--log-dir", str(log_dir), "--format", "json"])

        assert result.exit_code == 1
        assert '"verdict": "false_positive"' in result.stdout
        assert '"confidence": "confirmed"' in result.stdout
        assert '"pnpm_error": true' in result.stdout

    def test_last_run(self, log_dir: Path) -> None:
        """--last-run ignores earlier appended runs."""
        write_logs(
            log_dir,
            [
                "Starting OpenClaw Detection (Read-Only)",
                "FOUND: /Applications/OpenClaw.app",
                "Starting OpenClaw Detection (Read-Only)",
                "RESULT: No OpenClaw components detected.",
            ],
            ["Starting OpenClaw Uninstall"],
        )

        everything = runner.invoke(app, ["classify", "--log-dir", str(log_dir)])
        last = runner.invoke(app, ["classify", "--log-dir", str(log_dir), "--last-run"])

        assert everything.exit_code == 0
        assert last.exit_code == 1

    def test_does_not_require_root(self, log_dir: Path) -> None:
        """classify only reads logs and never checks privileges."""
        write_logs(log_dir, [], [])

        result = runner.invoke(app, ["classify", "--log-dir", str(log_dir)])

        assert "must be run as root" not in result.output
