"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

SCANNER_BACKENDS = ("ssh-keyscan", "asyncssh")


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Locations
    home: str | None = field(default=None)
    known_hosts: str | None = field(default=None)
    ssh_config: str | None = field(default=None)

    # Locking
    lock_timeout: float = field(default=30.0)

    # Key scanning
    scanner: str = field(default="ssh-keyscan")
    keyscan_binary: str = field(default="ssh-keyscan")
    keyscan_timeout: float = field(default=0.0)  # 0 disables the limit

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from HOSTTRUST_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            home=cls._get_str("HOSTTRUST_HOME"),
            known_hosts=cls._get_str("HOSTTRUST_KNOWN_HOSTS"),
            ssh_config=cls._get_str("HOSTTRUST_SSH_CONFIG"),
            lock_timeout=cls._get_float("HOSTTRUST_LOCK_TIMEOUT", 30.0),
            scanner=cls._get_scanner(),
            keyscan_binary=os.getenv("HOSTTRUST_KEYSCAN_BINARY", "ssh-keyscan"),
            keyscan_timeout=cls._get_float("HOSTTRUST_KEYSCAN_TIMEOUT", 0.0),
            log_level=os.getenv("HOSTTRUST_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("HOSTTRUST_LOG_COLORS", True),
        )

    @staticmethod
    def _get_str(key: str) -> str | None:
        """Get a non-empty string from environment, or None."""
        value = os.getenv(key, "").strip()
        return value or None

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        """Get a non-negative number from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Float value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            parsed = float(value)
        except ValueError:
            logger.warning("Invalid number for %s: %s, using default %g", key, value, default)
            return default

        if parsed < 0:
            logger.warning("Negative value for %s: %s, using default %g", key, value, default)
            return default
        return parsed

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_scanner() -> str:
        """Get scanner backend from environment with validation.

        Returns:
            Backend name ("ssh-keyscan" or "asyncssh")
        """
        scanner = os.getenv("HOSTTRUST_SCANNER", "").lower()
        if scanner in SCANNER_BACKENDS:
            return scanner
        if scanner:
            logger.warning("Unknown scanner backend %r, using ssh-keyscan", scanner)
        return "ssh-keyscan"
