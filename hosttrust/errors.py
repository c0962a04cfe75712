"""Error types raised by hosttrust.

Every error derives from HostTrustError so callers can catch the whole
family in one place. Messages always name the host and/or file involved.
"""

from pathlib import Path


class HostTrustError(Exception):
    """Base class for all host trust failures."""

    pass


class SetupError(HostTrustError):
    """The known_hosts file or its directory could not be established."""

    pass


class RepositoryParseError(HostTrustError, ValueError):
    """A repository URL could not be interpreted."""

    def __init__(self, repository: str, reason: str):
        """Initialize parse error.

        Args:
            repository: The URL that failed to parse
            reason: Human readable description of the problem
        """
        self.repository = repository
        self.reason = reason
        super().__init__(f"Could not parse {repository!r} as a repository URL: {reason}")


class LockTimeoutError(HostTrustError, TimeoutError):
    """The known_hosts lock file was not acquired before the deadline."""

    def __init__(self, lock_path: Path | str, timeout: float):
        self.lock_path = str(lock_path)
        self.timeout = timeout
        super().__init__(
            f"Timed out after {timeout:g}s waiting for known_hosts lock {self.lock_path}"
        )


class ScanError(HostTrustError):
    """Fetching a host's public keys failed."""

    def __init__(self, host: str, reason: str):
        self.host = host
        self.reason = reason
        super().__init__(f"Could not scan host keys for {host}: {reason}")


class TrustStoreIOError(HostTrustError):
    """Reading or appending to the known_hosts file failed."""

    def __init__(self, path: Path | str, action: str, original_error: Exception):
        self.path = str(path)
        self.original_error = original_error
        super().__init__(f"Could not {action} {self.path}: {original_error}")


class AddHostError(HostTrustError):
    """Adding a repository's host to known_hosts failed."""

    def __init__(self, host: str, path: Path | str, original_error: Exception):
        """Initialize add error.

        Args:
            host: Host token that was being added
            path: Path of the known_hosts file
            original_error: Underlying failure
        """
        self.host = host
        self.path = str(path)
        self.original_error = original_error
        super().__init__(
            f"Failed to add {host} to known_hosts file {self.path}: {original_error}"
        )
