"""SSH host trust store management.

Keeps a known_hosts file populated with the keys of SSH source-control
hosts so automated jobs can connect without interactive trust prompts.
"""

from hosttrust.errors import (
    AddHostError,
    HostTrustError,
    LockTimeoutError,
    RepositoryParseError,
    ScanError,
    SetupError,
    TrustStoreIOError,
)
from hosttrust.services import HostNormalizer, TrustStore

__version__ = "0.1.0"

__all__ = [
    "AddHostError",
    "HostNormalizer",
    "HostTrustError",
    "LockTimeoutError",
    "RepositoryParseError",
    "ScanError",
    "SetupError",
    "TrustStore",
    "TrustStoreIOError",
]
