"""Tests for dependency injection container."""

import logging
from pathlib import Path

import pytest

from hosttrust.config import Config, Settings
from hosttrust.dependencies import Dependencies
from hosttrust.services.keyscan import AsyncSSHKeyScanner, SSHKeyscanScanner
from hosttrust.services.known_hosts import TrustStore


class NullScanner:
    def scan(self, host: str, port: int = 22) -> str:
        return f"{host} ssh-ed25519 AAAA"


@pytest.fixture
def restore_logging():
    """Undo handler changes made by configure_logging."""
    package_logger = logging.getLogger("hosttrust")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


class TestDependencies:
    """Test Dependencies container."""

    def test_create_uses_environment(self, tmp_path: Path, monkeypatch, restore_logging):
        """Dependencies.create() builds the store under HOSTTRUST_HOME."""
        monkeypatch.setenv("HOSTTRUST_HOME", str(tmp_path))
        monkeypatch.setenv("HOSTTRUST_LOCK_TIMEOUT", "5")
        monkeypatch.delenv("HOSTTRUST_KNOWN_HOSTS", raising=False)
        monkeypatch.delenv("HOSTTRUST_SSH_CONFIG", raising=False)
        monkeypatch.delenv("HOSTTRUST_SCANNER", raising=False)

        deps = Dependencies.create()

        assert isinstance(deps.config, Config)
        assert isinstance(deps.store, TrustStore)
        assert isinstance(deps.scanner, SSHKeyscanScanner)
        assert deps.store.path == tmp_path / ".ssh" / "known_hosts"
        assert deps.store.path.is_file()
        assert deps.store.lock_timeout == 5
        assert deps.config.ssh_config_path == tmp_path / ".ssh" / "config"

    def test_create_configures_logging(self, tmp_path: Path, monkeypatch, restore_logging):
        """Dependencies.create() applies the configured log level."""
        monkeypatch.setenv("HOSTTRUST_HOME", str(tmp_path))
        monkeypatch.setenv("HOSTTRUST_LOG_LEVEL", "debug")

        Dependencies.create()

        assert logging.getLogger("hosttrust").level == logging.DEBUG

    def test_from_config_wires_components(self, tmp_path: Path):
        """Scanner, normalizer and store share the config."""
        config = Config.from_settings(Settings(home=str(tmp_path), scanner="asyncssh"))

        deps = Dependencies.from_config(config)

        assert deps.config is config
        assert isinstance(deps.scanner, AsyncSSHKeyScanner)
        assert deps.store.scanner is deps.scanner
        assert deps.store.normalizer is deps.normalizer
        assert deps.normalizer.resolver is config.parser

    def test_from_config_scanner_override(self, tmp_path: Path):
        """An explicit scanner replaces the configured backend."""
        config = Config.from_settings(Settings(home=str(tmp_path)))
        scanner = NullScanner()

        deps = Dependencies.from_config(config, scanner=scanner)

        assert deps.scanner is scanner
        assert deps.store.scanner is scanner
