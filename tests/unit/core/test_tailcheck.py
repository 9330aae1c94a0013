"""Unit tests for the detection log tail check."""

from pathlib import Path

from clawpurge.core.tailcheck import TailStatus, check_detection_log, tail


class TestTailStatus:
    """Tests for TailStatus."""

    def test_tags(self) -> None:
        """Each status renders as a fixed result tag."""
        assert TailStatus.DETECTED.tag == "<result>Detected</result>"
        assert TailStatus.NOT_DETECTED.tag == "<result>Not Detected</result>"
        assert TailStatus.LOG_NOT_FOUND.tag == "<result>Log Not Found</result>"


class TestTail:
    """Tests for tail."""

    def test_last_lines(self, tmp_path: Path) -> None:
        """Only the requested number of trailing lines is returned."""
        path = tmp_path / "log"
        path.write_text("".join(f"line {i}\n" for i in range(20)))

        assert tail(path, 3) == ["line 17", "line 18", "line 19"]


class TestCheckDetectionLog:
    """Tests for check_detection_log."""

    def test_detected(self, tmp_path: Path) -> None:
        """A RESULT: Detected line near the end is a detection."""
        path = tmp_path / "openclaw_detection.log"
        path.write_text(
            "[t] FOUND: /Applications/OpenClaw.app\n"
            "[t] RESULT: Detected 1 OpenClaw/ClawdBot/MoltBot component(s).\n"
            "[t] Review the log at /var/log/openclaw_detection.log for details.\n"
            "[t] \n"
            "[t] To remove these components, run: clawpurge remove\n"
        )

        assert check_detection_log(path) == TailStatus.DETECTED

    def test_clean(self, tmp_path: Path) -> None:
        """A clean result is not a detection."""
        path = tmp_path / "openclaw_detection.log"
        path.write_text(
            "[t] RESULT: No OpenClaw/ClawdBot/MoltBot components detected.\n"
            "[t] The system appears clean.\n"
        )

        assert check_detection_log(path) == TailStatus.NOT_DETECTED

    def test_old_detection_scrolled_out(self, tmp_path: Path) -> None:
        """Only the last ten lines are inspected."""
        path = tmp_path / "openclaw_detection.log"
        lines = ["[t] RESULT: Detected 2 components."] + [f"[t] later {i}" for i in range(10)]
        path.write_text("\n".join(lines) + "\n")

        assert check_detection_log(path) == TailStatus.NOT_DETECTED

    def test_missing_log(self, tmp_path: Path) -> None:
        """A missing file is reported as such."""
        assert check_detection_log(tmp_path / "missing.log") == TailStatus.LOG_NOT_FOUND

    def test_directory_is_not_a_log(self, tmp_path: Path) -> None:
        """A directory at the log path is not a log."""
        assert check_detection_log(tmp_path) == TailStatus.LOG_NOT_FOUND
