"""Key scanner backends.

Fetch a host's current public keys in known_hosts format. Neither backend
retries; a failed scan is reported to the caller as a ScanError.
"""

import asyncio
import logging
import subprocess

import asyncssh

from hosttrust.config.settings import Settings
from hosttrust.errors import ScanError
from hosttrust.protocols import KeyScanner
from hosttrust.utils.hostname import DEFAULT_SSH_PORT, join_host_port, normalize_host
from hosttrust.utils.shell import format_command

logger = logging.getLogger(__name__)


class SSHKeyscanScanner:
    """Scan host keys by running ``ssh-keyscan``.

    ssh-keyscan does not accept ``host:port``, so a non-default port is
    passed with ``-p``.
    """

    def __init__(self, binary: str = "ssh-keyscan", timeout: float | None = None):
        """Initialize scanner.

        Args:
            binary: ssh-keyscan executable name or path
            timeout: Seconds to let the process run, None for no limit
        """
        self.binary = binary
        self.timeout = timeout

    def command(self, host: str, port: int = DEFAULT_SSH_PORT) -> list[str]:
        """Build the ssh-keyscan argument vector."""
        if port != DEFAULT_SSH_PORT:
            return [self.binary, "-p", str(port), host]
        return [self.binary, host]

    def scan(self, host: str, port: int = DEFAULT_SSH_PORT) -> str:
        """Run ssh-keyscan and return its standard output.

        Raises:
            ScanError: If the process cannot run, exits non-zero, times out
                or prints no keys
        """
        target = join_host_port(host, port)
        argv = self.command(host, port)
        logger.debug("Running %s", format_command(argv))

        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ScanError(target, f"{self.binary} timed out after {self.timeout:g}s") from e
        except FileNotFoundError as e:
            raise ScanError(target, f"{self.binary} not found") from e
        except OSError as e:
            raise ScanError(target, f"could not run {self.binary}: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ScanError(
                target,
                f"{self.binary} exited with status {result.returncode}: {stderr}",
            )

        output = (result.stdout or "").strip()
        if not output:
            raise ScanError(target, f"{self.binary} returned no host keys")
        return output


class AsyncSSHKeyScanner:
    """Scan the negotiated host key over an SSH handshake with asyncssh.

    Only the key the server offers for the negotiated algorithm is returned,
    so the result is always a single line.
    """

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout

    async def fetch(self, host: str, port: int = DEFAULT_SSH_PORT) -> str:
        """Fetch the server host key and format it as a known_hosts line.

        Raises:
            ScanError: On connection failure, timeout or when no key is offered
        """
        target = join_host_port(host, port)
        logger.debug("Fetching host key for %s with asyncssh", target)

        try:
            # config=[] keeps asyncssh from re-applying ~/.ssh/config aliases
            key = await asyncio.wait_for(
                asyncssh.get_server_host_key(host, port, config=[]),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise ScanError(target, f"timed out after {self.timeout:g}s") from e
        except (OSError, asyncssh.Error) as e:
            raise ScanError(target, str(e)) from e

        if key is None:
            raise ScanError(target, "server offered no host key")

        fields = key.export_public_key().decode().split()
        if len(fields) < 2:
            raise ScanError(target, "could not encode server host key")

        return f"{normalize_host(target)} {fields[0]} {fields[1]}"

    def scan(self, host: str, port: int = DEFAULT_SSH_PORT) -> str:
        """Blocking wrapper around fetch()."""
        return asyncio.run(self.fetch(host, port))


def build_scanner(settings: Settings) -> KeyScanner:
    """Create the scanner backend selected in settings.

    Args:
        settings: Application settings

    Returns:
        A KeyScanner implementation
    """
    timeout = settings.keyscan_timeout or None
    if settings.scanner == "asyncssh":
        return AsyncSSHKeyScanner(timeout=timeout)
    return SSHKeyscanScanner(binary=settings.keyscan_binary, timeout=timeout)
