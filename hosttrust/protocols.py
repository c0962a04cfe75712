"""Protocol interfaces for dependency inversion.

Defines the capabilities the trust store depends on, so tests can pass
doubles instead of spawning ssh-keyscan or reading a real ssh config.

Usage Example:

    from hosttrust.protocols import KeyScanner

    class CannedScanner:
        def scan(self, host: str, port: int = 22) -> str:
            return f"{host} ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAA"

    store = TrustStore(path, scanner=CannedScanner())
"""

from typing import Protocol, runtime_checkable

from hosttrust.models import SSHHost


@runtime_checkable
class KeyScanner(Protocol):
    """Protocol for fetching a host's public keys.

    Implementations return the keys in known_hosts line format, one line
    per key, ready to be appended to the file.
    """

    def scan(self, host: str, port: int = 22) -> str:
        """Fetch host keys.

        Args:
            host: Bare host name or address, without port
            port: SSH port, passed separately from the host

        Returns:
            One or more known_hosts lines

        Raises:
            ScanError: If the keys could not be fetched
        """
        ...


@runtime_checkable
class HostResolver(Protocol):
    """Protocol for mapping SSH aliases to the host that is dialed."""

    def resolve(self, alias: str) -> SSHHost | None:
        """Look up an alias.

        Args:
            alias: Host name as written in a repository URL

        Returns:
            SSHHost with the real hostname and port, or None if not an alias
        """
        ...
