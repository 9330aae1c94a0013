"""Unit tests for the filesystem path scanner."""

from clawpurge.core.context import RunContext
from clawpurge.filesystem.locations import PathSpec
from clawpurge.models.finding import FindingCategory
from clawpurge.scanners.paths import PathScanner


class TestPathScanner:
    """Tests for PathScanner."""

    def test_reports_existing_paths(self, context: RunContext) -> None:
        """Only existing entries become findings."""
        home = context.users[0].home
        (home / ".openclaw").mkdir()
        specs = [PathSpec.exact(home / ".openclaw"), PathSpec.exact(home / ".moltbot")]

        findings = list(PathScanner(context, FindingCategory.CONFIG, specs, user="alice").scan())

        assert [f.description for f in findings] == [str(home / ".openclaw")]
        assert findings[0].category == FindingCategory.CONFIG
        assert findings[0].user == "alice"

    def test_overlap_shares_key(self, context: RunContext) -> None:
        """An exact spec and a glob reaching the same entry yield the same key."""
        home = context.users[0].home
        (home / ".openclaw-dev").mkdir()
        specs = [PathSpec.exact(home / ".openclaw-dev"), PathSpec.matching(home, ".openclaw-*")]

        findings = list(PathScanner(context, FindingCategory.CONFIG, specs).scan())

        assert len(findings) == 2
        assert findings[0].key == findings[1].key
