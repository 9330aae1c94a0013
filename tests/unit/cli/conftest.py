"""Fixtures for CLI command tests."""

from pathlib import Path

import pytest
from clawpurge.core.paths import CONFIG_ENV_VAR, LOG_DIR_ENV_VAR
from clawpurge.core.users import LocalUser


@pytest.fixture(autouse=True)
def cli_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Isolate the CLI from the machine's config and log directory.

    Returns:
        Path of the (not yet existing) default config file.
    """
    config = tmp_path / "etc" / "config.toml"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config))
    monkeypatch.delenv(LOG_DIR_ENV_VAR, raising=False)
    return config


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Log directory for CLI runs."""
    return tmp_path / "logs"


@pytest.fixture
def as_root(monkeypatch: pytest.MonkeyPatch, local_user: LocalUser, fake_shell) -> None:
    """Pretend to run as root on a machine with one local user."""
    monkeypatch.setattr("clawpurge.cli.common.os.geteuid", lambda: 0)
    monkeypatch.setattr("clawpurge.cli.common.discover_local_users", lambda min_uid: [local_user])
    monkeypatch.setattr("clawpurge.operators.processes.QUIT_GRACE_SECONDS", 0.0)
    monkeypatch.setattr("clawpurge.operators.processes.SETTLE_SECONDS", 0.0)
