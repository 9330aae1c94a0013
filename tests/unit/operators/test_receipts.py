"""Unit tests for the receipt operator."""

from collections.abc import Callable

from clawpurge.core.context import RunContext
from clawpurge.operators.receipts import ReceiptOperator


class TestForgetAll:
    """Tests for ReceiptOperator.forget_all."""

    def test_forgets_matching_receipts(
        self, context: RunContext, fake_shell, read_log: Callable[[], list[str]]
    ) -> None:
        """Every matching receipt is forgotten."""
        fake_shell.on("pkgutil", "--pkgs", stdout="com.apple.pkg.Core\nai.openclaw.gateway\n")
        fake_shell.on("pkgutil", "--forget", "ai.openclaw.gateway")

        results = ReceiptOperator(context).forget_all()

        assert [r.action.target for r in results] == ["ai.openclaw.gateway"]
        assert results[0].success
        assert read_log() == [
            "Removing package receipts via pkgutil...",
            "Forgetting package receipt: ai.openclaw.gateway",
        ]

    def test_failure_is_warning(
        self, context: RunContext, fake_shell, read_log: Callable[[], list[str]]
    ) -> None:
        """A failed forget is logged and the run continues."""
        fake_shell.on("pkgutil", "--pkgs", stdout="ai.openclaw.gateway\nbot.moltbot.pkg\n")

        results = ReceiptOperator(context).forget_all()

        assert len(results) == 2
        assert all(r.failed for r in results)
        assert "Warning: Could not forget package receipt bot.moltbot.pkg" in read_log()
