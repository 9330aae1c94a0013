"""Unit tests for the detection finding model."""

from pathlib import Path

import pytest
from clawpurge.models.finding import Finding, FindingCategory


class TestFinding:
    """Tests for Finding dataclass."""

    def test_rejects_empty_description(self) -> None:
        """A finding needs something to print."""
        with pytest.raises(ValueError, match="description cannot be empty"):
            Finding(category=FindingCategory.PROCESS, description="", key="pid:1")

    def test_rejects_empty_key(self) -> None:
        """A finding needs an identity."""
        with pytest.raises(ValueError, match="key cannot be empty"):
            Finding(category=FindingCategory.PROCESS, description="x", key="")

    def test_for_path(self, tmp_path: Path) -> None:
        """Path findings print the path and key on the resolved parent."""
        path = tmp_path / ".openclaw"

        finding = Finding.for_path(FindingCategory.CONFIG, path, user="alice")

        assert finding.description == str(path)
        assert finding.key == str(tmp_path.resolve() / ".openclaw")
        assert finding.user == "alice"

    def test_to_dict(self) -> None:
        """Serialization uses the category value."""
        finding = Finding(
            category=FindingCategory.HOMEBREW,
            description="Homebrew cask: openclaw",
            key="brew:cask:openclaw",
        )

        assert finding.to_dict() == {
            "category": "homebrew",
            "description": "Homebrew cask: openclaw",
            "key": "brew:cask:openclaw",
            "user": None,
        }
