"""Unit tests for the identifier catalog."""

import pytest
from clawpurge.core.catalog import Catalog
from pydantic import ValidationError

DEFAULT_CATALOG = Catalog()


class TestCatalogDefaults:
    """Tests for the built-in identifiers."""

    def test_covers_all_product_names(self) -> None:
        """Current and legacy names are all present."""
        assert DEFAULT_CATALOG.app_names == ("OpenClaw", "ClawdBot", "MoltBot")
        assert DEFAULT_CATALOG.node_packages == ("openclaw", "moltbot", "clawdbot")

    def test_launchd_patterns_include_reverse_dns(self) -> None:
        """bot.molt labels do not contain the word moltbot."""
        assert "bot.molt" in DEFAULT_CATALOG.launchd_patterns

    def test_product_label(self) -> None:
        """The label joins every application name."""
        assert DEFAULT_CATALOG.product_label == "OpenClaw/ClawdBot/MoltBot"

    def test_cli_name(self) -> None:
        """The product CLI is called openclaw."""
        assert DEFAULT_CATALOG.cli_name == "openclaw"


class TestCatalogValidation:
    """Tests for catalog validation."""

    def test_override_single_field(self) -> None:
        """Fields can be overridden individually."""
        catalog = Catalog(node_packages=["openclaw"])

        assert catalog.node_packages == ("openclaw",)
        assert catalog.app_names == DEFAULT_CATALOG.app_names

    def test_rejects_blank_entries(self) -> None:
        """An empty pattern would match everything."""
        with pytest.raises(ValidationError, match="name_patterns"):
            Catalog(name_patterns=("openclaw", " "))

    def test_rejects_unknown_fields(self) -> None:
        """Typos in the config file are errors."""
        with pytest.raises(ValidationError):
            Catalog.model_validate({"app_name": ["OpenClaw"]})

    def test_is_frozen(self) -> None:
        """The catalog cannot be changed after construction."""
        with pytest.raises(ValidationError):
            DEFAULT_CATALOG.cli_name = "moltbot"  # type: ignore[misc]
