"""Services for hosttrust."""

from hosttrust.services.keyscan import (
    AsyncSSHKeyScanner,
    SSHKeyscanScanner,
    build_scanner,
)
from hosttrust.services.known_hosts import DEFAULT_LOCK_TIMEOUT, TrustStore
from hosttrust.services.normalizer import HostNormalizer

__all__ = [
    "AsyncSSHKeyScanner",
    "build_scanner",
    "DEFAULT_LOCK_TIMEOUT",
    "HostNormalizer",
    "SSHKeyscanScanner",
    "TrustStore",
]
