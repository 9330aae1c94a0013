"""Unit tests for the installer receipt scanner."""

from clawpurge.core.catalog import Catalog
from clawpurge.core.context import RunContext
from clawpurge.scanners.receipts import ReceiptScanner, matching_receipts

PKGS = "com.apple.pkg.Core\ncom.OpenClaw.installer\nai.openclaw.gateway\nbot.moltbot.pkg\n"


class TestMatchingReceipts:
    """Tests for matching_receipts."""

    def test_case_insensitive(self, fake_shell, catalog: Catalog) -> None:
        """Receipt ids are matched without regard to case."""
        fake_shell.on("pkgutil", "--pkgs", stdout=PKGS)

        assert matching_receipts(catalog) == [
            "com.OpenClaw.installer",
            "ai.openclaw.gateway",
            "bot.moltbot.pkg",
        ]

    def test_each_id_once(self, fake_shell) -> None:
        """An id matching several patterns is returned once."""
        fake_shell.on("pkgutil", "--pkgs", stdout="com.openclaw.moltbot\n")

        assert matching_receipts(Catalog()) == ["com.openclaw.moltbot"]

    def test_pkgutil_failure(self, fake_shell, catalog: Catalog) -> None:
        """No receipts when pkgutil fails."""
        assert matching_receipts(catalog) == []


class TestReceiptScanner:
    """Tests for ReceiptScanner."""

    def test_findings(self, context: RunContext, fake_shell) -> None:
        """One finding per receipt id."""
        fake_shell.on("pkgutil", "--pkgs", stdout="ai.openclaw.gateway\n")

        findings = list(ReceiptScanner(context).scan())

        assert [f.description for f in findings] == ["Package receipt: ai.openclaw.gateway"]
        assert findings[0].key == "receipt:ai.openclaw.gateway"
