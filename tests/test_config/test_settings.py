"""Tests for environment settings."""

import pytest

from hosttrust.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove HOSTTRUST_* variables set by the outer environment."""
    for key in [
        "HOSTTRUST_HOME",
        "HOSTTRUST_KNOWN_HOSTS",
        "HOSTTRUST_SSH_CONFIG",
        "HOSTTRUST_LOCK_TIMEOUT",
        "HOSTTRUST_SCANNER",
        "HOSTTRUST_KEYSCAN_BINARY",
        "HOSTTRUST_KEYSCAN_TIMEOUT",
        "HOSTTRUST_LOG_LEVEL",
        "HOSTTRUST_LOG_COLORS",
    ]:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    """Unset environment gives documented defaults."""
    settings = Settings.from_env()

    assert settings.home is None
    assert settings.known_hosts is None
    assert settings.lock_timeout == 30.0
    assert settings.scanner == "ssh-keyscan"
    assert settings.keyscan_binary == "ssh-keyscan"
    assert settings.keyscan_timeout == 0.0
    assert settings.log_level == "INFO"
    assert settings.log_colors is True


def test_values_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """HOSTTRUST_* variables are read."""
    monkeypatch.setenv("HOSTTRUST_HOME", "/srv/agent")
    monkeypatch.setenv("HOSTTRUST_KNOWN_HOSTS", "/srv/agent/kh")
    monkeypatch.setenv("HOSTTRUST_LOCK_TIMEOUT", "5.5")
    monkeypatch.setenv("HOSTTRUST_SCANNER", "AsyncSSH")
    monkeypatch.setenv("HOSTTRUST_KEYSCAN_TIMEOUT", "10")
    monkeypatch.setenv("HOSTTRUST_LOG_LEVEL", "debug")
    monkeypatch.setenv("HOSTTRUST_LOG_COLORS", "false")

    settings = Settings.from_env()

    assert settings.home == "/srv/agent"
    assert settings.known_hosts == "/srv/agent/kh"
    assert settings.lock_timeout == 5.5
    assert settings.scanner == "asyncssh"
    assert settings.keyscan_timeout == 10.0
    assert settings.log_level == "DEBUG"
    assert settings.log_colors is False


@pytest.mark.parametrize("value", ["soon", "-1"])
def test_invalid_lock_timeout_uses_default(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    """Invalid numbers fall back to the default."""
    monkeypatch.setenv("HOSTTRUST_LOCK_TIMEOUT", value)
    assert Settings.from_env().lock_timeout == 30.0


def test_unknown_scanner_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unknown scanner names fall back to ssh-keyscan."""
    monkeypatch.setenv("HOSTTRUST_SCANNER", "nmap")
    assert Settings.from_env().scanner == "ssh-keyscan"


def test_blank_paths_are_none(monkeypatch: pytest.MonkeyPatch) -> None:
    """Blank path variables are treated as unset."""
    monkeypatch.setenv("HOSTTRUST_KNOWN_HOSTS", "  ")
    assert Settings.from_env().known_hosts is None
