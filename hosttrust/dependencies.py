"""Dependency injection container for hosttrust.

Wires configuration, the key scanner and the normalizer into a TrustStore.
"""

from dataclasses import dataclass

from hosttrust.config import Config
from hosttrust.protocols import KeyScanner
from hosttrust.services.keyscan import build_scanner
from hosttrust.services.known_hosts import TrustStore
from hosttrust.services.normalizer import HostNormalizer
from hosttrust.utils.console import configure_logging


@dataclass
class Dependencies:
    """Container for hosttrust dependencies.

    Example:
        deps = Dependencies.create()
        deps.store.add_from_repository("git@github.com:org/repo.git")
    """

    config: Config
    scanner: KeyScanner
    normalizer: HostNormalizer
    store: TrustStore

    @classmethod
    def create(cls) -> "Dependencies":
        """Create dependencies from environment configuration.

        Also installs the package log handler at the configured level.

        Returns:
            Initialized Dependencies instance

        Raises:
            SetupError: If the known_hosts file cannot be established
        """
        config = Config.from_env()
        configure_logging(config.settings.log_level, config.settings.log_colors)
        return cls.from_config(config)

    @classmethod
    def from_config(cls, config: Config, scanner: KeyScanner | None = None) -> "Dependencies":
        """Create dependencies with custom configuration.

        Args:
            config: Custom Config instance
            scanner: Scanner override (default: backend chosen in settings)

        Returns:
            Dependencies with the trust store initialized from config
        """
        if scanner is None:
            scanner = build_scanner(config.settings)
        normalizer = HostNormalizer(config.parser)
        store = TrustStore.from_config(config, scanner=scanner, normalizer=normalizer)
        return cls(config=config, scanner=scanner, normalizer=normalizer, store=store)
