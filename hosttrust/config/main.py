"""Application configuration.

Delegates to specialized components:
- Settings: Environment variables
- SSHConfigParser: Reads ~/.ssh/config for alias resolution
- host_keys: Locates the known_hosts file
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from hosttrust.config.host_keys import find_home, resolve_known_hosts_path
from hosttrust.config.parser import SSHConfigParser
from hosttrust.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Application configuration.

    Aggregates environment settings and the SSH client config.
    """

    settings: Settings
    parser: SSHConfigParser

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment.

        Returns:
            Configured instance with all components initialized
        """
        return cls.from_settings(Settings.from_env())

    @classmethod
    def from_settings(cls, settings: Settings) -> "Config":
        """Create config from explicit settings.

        Args:
            settings: Settings to use

        Returns:
            Config with an SSH config parser rooted at the configured home

        Raises:
            SetupError: If no ssh config path is set and the home directory
                cannot be determined
        """
        ssh_config = settings.ssh_config
        if ssh_config is None:
            ssh_config = str(find_home(settings.home) / ".ssh" / "config")
        parser = SSHConfigParser(config_path=ssh_config)
        return cls(settings=settings, parser=parser)

    @property
    def home(self) -> Path:
        """Base directory that holds ``.ssh``."""
        return find_home(self.settings.home)

    @property
    def known_hosts_path(self) -> Path:
        """Path to the known_hosts file."""
        return resolve_known_hosts_path(self.settings.home, self.settings.known_hosts)

    @property
    def ssh_config_path(self) -> Path:
        """Path to the SSH client config."""
        return self.parser.config_path

    @property
    def lock_timeout(self) -> float:
        """Seconds to wait for the known_hosts lock."""
        return self.settings.lock_timeout

    @property
    def keyscan_timeout(self) -> float | None:
        """Seconds allowed for a key scan, or None for no limit."""
        return self.settings.keyscan_timeout or None
