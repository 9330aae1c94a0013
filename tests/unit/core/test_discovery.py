"""Unit tests for package-manager and CLI discovery."""

from pathlib import Path
from unittest.mock import patch

from clawpurge.core.discovery import (
    BREW_CANDIDATES,
    NPM_CANDIDATES,
    cli_candidates,
    find_brew,
    find_executable,
    find_node_manager,
    is_executable,
    path_owner,
    which,
)
from clawpurge.core.users import LocalUser


class TestIsExecutable:
    """Tests for is_executable."""

    def test_executable_file(self, tmp_path: Path, make_executable) -> None:
        """An executable regular file qualifies."""
        assert is_executable(make_executable(tmp_path / "npm"))

    def test_plain_file(self, tmp_path: Path) -> None:
        """A file without execute permission does not."""
        path = tmp_path / "npm"
        path.write_text("")
        path.chmod(0o644)

        assert not is_executable(path)

    def test_directory(self, tmp_path: Path) -> None:
        """Directories never qualify."""
        assert not is_executable(tmp_path)


class TestFindExecutable:
    """Tests for find_executable."""

    def test_home_candidate(
        self, local_user: LocalUser, system_root: Path, make_executable, fake_shell
    ) -> None:
        """``~`` candidates resolve against the user's home."""
        bun = make_executable(local_user.home / ".bun" / "bin" / "bun")

        found = find_executable(("~/.bun/bin/bun",), home=local_user.home, root=system_root)

        assert found == bun

    def test_root_candidate(self, system_root: Path, make_executable, fake_shell) -> None:
        """Absolute candidates resolve against the root."""
        brew = make_executable(system_root / "usr" / "local" / "bin" / "brew")

        assert find_executable(BREW_CANDIDATES, root=system_root) == brew

    def test_first_candidate_wins(
        self, local_user: LocalUser, system_root: Path, make_executable, fake_shell
    ) -> None:
        """Candidates are checked in order."""
        nvm = make_executable(local_user.home / ".nvm/versions/node/v20.11.0/bin/npm")
        make_executable(system_root / "opt" / "homebrew" / "bin" / "npm")

        found = find_executable(NPM_CANDIDATES, home=local_user.home, root=system_root)

        assert found == nvm

    def test_which_fallback(
        self, tmp_path: Path, system_root: Path, make_executable, fake_shell
    ) -> None:
        """which runs as the user when no candidate exists."""
        elsewhere = make_executable(tmp_path / "custom" / "pnpm")
        fake_shell.on("which", "pnpm", stdout=f"{elsewhere}\n")

        found = find_executable((), home=tmp_path, user="alice", name="pnpm", root=system_root)

        assert found == elsewhere
        assert fake_shell.ran("sudo", "-u", "alice", "which", "pnpm")

    def test_which_result_must_be_executable(self, system_root: Path, fake_shell) -> None:
        """A path printed by which that is not executable is ignored."""
        fake_shell.on("which", "npm", stdout="/nonexistent/npm\n")

        assert find_executable((), user="alice", name="npm", root=system_root) is None

    def test_no_fallback_without_name(self, system_root: Path, fake_shell) -> None:
        """Without a name, which is never run."""
        assert find_executable(("/usr/local/bin/npm",), root=system_root) is None
        assert fake_shell.calls == []


class TestFindNodeManager:
    """Tests for find_node_manager."""

    def test_pnpm_in_library(
        self, local_user: LocalUser, system_root: Path, make_executable, fake_shell
    ) -> None:
        """pnpm under ~/Library/pnpm is found."""
        pnpm = make_executable(local_user.home / "Library" / "pnpm" / "pnpm")

        assert find_node_manager("pnpm", local_user.home, "alice", system_root) == pnpm

    def test_absent(self, local_user: LocalUser, system_root: Path, fake_shell) -> None:
        """None when the manager is nowhere."""
        assert find_node_manager("bun", local_user.home, "alice", system_root) is None


class TestFindBrew:
    """Tests for find_brew."""

    def test_trusts_which(self, system_root: Path, fake_shell) -> None:
        """The which result is used even outside the standard prefixes."""
        fake_shell.on("which", "brew", stdout="/home/linuxbrew/.linuxbrew/bin/brew\n")

        assert find_brew(system_root) == Path("/home/linuxbrew/.linuxbrew/bin/brew")

    def test_absent(self, system_root: Path, fake_shell) -> None:
        """None when brew is not installed."""
        assert find_brew(system_root) is None


class TestWhich:
    """Tests for which."""

    def test_own_path(self, fake_shell) -> None:
        """Without a user, which runs unwrapped."""
        fake_shell.on("which", "brew", stdout="/opt/homebrew/bin/brew\n")

        assert which("brew") == Path("/opt/homebrew/bin/brew")
        assert fake_shell.calls == [["which", "brew"]]


class TestCliCandidates:
    """Tests for cli_candidates."""

    def test_uses_cli_name(self) -> None:
        """Every candidate ends with the CLI name."""
        candidates = cli_candidates("openclaw")

        assert "~/.npm-global/bin/openclaw" in candidates
        assert all(c.endswith("/openclaw") for c in candidates)


class TestPathOwner:
    """Tests for path_owner."""

    def test_missing_path(self, tmp_path: Path) -> None:
        """A missing path has no owner."""
        assert path_owner(tmp_path / "missing") is None

    def test_unknown_uid(self, tmp_path: Path) -> None:
        """A uid without a passwd entry has no owner."""
        with patch("clawpurge.core.discovery.pwd.getpwuid", side_effect=KeyError(4242)):
            assert path_owner(tmp_path) is None
