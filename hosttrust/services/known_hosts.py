"""known_hosts trust store.

Owns the known_hosts file: membership lookups against plain and hashed
host patterns, and appends of freshly scanned keys under a lock file so
parallel jobs on one machine do not write duplicate or interleaved lines.

The lock is advisory. A writer that bypasses ``<path>.lock`` can still
corrupt the file. The lock file stays on disk after release and is
reused by the next writer; only the lock held on it is transient.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from filelock import FileLock, Timeout

from hosttrust.config.host_keys import FILE_MODE, ensure_known_hosts
from hosttrust.config.parser import SSHConfigParser
from hosttrust.errors import (
    AddHostError,
    HostTrustError,
    LockTimeoutError,
    RepositoryParseError,
    ScanError,
    TrustStoreIOError,
)
from hosttrust.models import HostEntry, parse_entry
from hosttrust.protocols import KeyScanner
from hosttrust.services.keyscan import SSHKeyscanScanner
from hosttrust.services.normalizer import HostNormalizer
from hosttrust.utils.hostname import normalize_host, split_host_port

if TYPE_CHECKING:
    from hosttrust.config import Config

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 30.0


class TrustStore:
    """SSH host trust store backed by a known_hosts file.

    Every lookup re-reads the file; nothing is cached between calls.
    Writers serialize on ``<path>.lock``, which is left in place after
    release.
    """

    def __init__(
        self,
        path: Path | str,
        scanner: KeyScanner | None = None,
        normalizer: HostNormalizer | None = None,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
    ):
        """Initialize the trust store, creating the file if needed.

        Args:
            path: known_hosts file path
            scanner: Key scanner (default: ssh-keyscan)
            normalizer: Repository URL normalizer (default: resolves
                aliases from ~/.ssh/config)
            lock_timeout: Seconds to wait for the lock in add()

        Raises:
            SetupError: If the file or its directory cannot be created
        """
        self.path = ensure_known_hosts(path)
        self.scanner = scanner if scanner is not None else SSHKeyscanScanner()
        self.normalizer = (
            normalizer if normalizer is not None else HostNormalizer(SSHConfigParser())
        )
        self.lock_timeout = lock_timeout

    @classmethod
    def from_config(
        cls,
        config: "Config",
        scanner: KeyScanner | None = None,
        normalizer: HostNormalizer | None = None,
    ) -> "TrustStore":
        """Create a trust store from application config.

        Args:
            config: Application config
            scanner: Key scanner override
            normalizer: Normalizer override (default: config's SSH parser)

        Returns:
            TrustStore at the configured known_hosts path
        """
        if normalizer is None:
            normalizer = HostNormalizer(config.parser)
        return cls(
            config.known_hosts_path,
            scanner=scanner,
            normalizer=normalizer,
            lock_timeout=config.lock_timeout,
        )

    @property
    def lock_path(self) -> Path:
        """Sibling lock file guarding appends."""
        return Path(f"{self.path}.lock")

    def entries(self) -> Iterator[HostEntry]:
        """Iterate over well formed entries in the file.

        A missing file has no entries. Bytes that are not valid UTF-8 are
        kept as surrogate escapes, so such lines never match a host.

        Raises:
            TrustStoreIOError: If the file exists but cannot be read
        """
        try:
            with self.path.open(encoding="utf-8", errors="surrogateescape") as f:
                for line in f:
                    entry = parse_entry(line)
                    if entry is not None:
                        yield entry
        except FileNotFoundError:
            return
        except OSError as e:
            raise TrustStoreIOError(self.path, "read", e) from e

    def contains(self, host: str) -> bool:
        """Check whether a host already has an entry.

        Args:
            host: Host token, ``host`` or ``host:port``

        Returns:
            True if any plain or hashed pattern matches

        Raises:
            ValueError: If the host token has an invalid port
            TrustStoreIOError: If the file cannot be read
        """
        normalized = normalize_host(host)
        return any(entry.matches(normalized) for entry in self.entries())

    def add(self, host: str) -> bool:
        """Scan a host's keys and append them unless already trusted.

        Args:
            host: Host token, ``host`` or ``host:port``

        Returns:
            True if keys were appended, False if the host was already present

        Raises:
            LockTimeoutError: If the lock is not acquired in time
            ScanError: If the key scan fails
            TrustStoreIOError: If the file cannot be read or appended to
        """
        hostname, port = split_host_port(host)
        lock = FileLock(str(self.lock_path), timeout=self.lock_timeout)

        try:
            lock.acquire()
        except Timeout as e:
            raise LockTimeoutError(self.lock_path, self.lock_timeout) from e
        except OSError as e:
            raise TrustStoreIOError(self.lock_path, "lock", e) from e

        try:
            # Checked again under the lock; another job may have added it
            if self.contains(host):
                logger.info("Host %s already in list of known hosts at %s", host, self.path)
                return False

            keys = self._scan(host, hostname, port)
            self._append(keys)
            logger.info("Added host %s to known hosts at %s", host, self.path)
            return True
        finally:
            self._release(lock)

    def add_from_repository(self, repository: str) -> bool:
        """Trust the SSH host a repository URL points at.

        Non-SSH repositories need no host key and are skipped.

        Args:
            repository: Repository URL or scp-like location

        Returns:
            True if keys were appended

        Raises:
            RepositoryParseError: If the URL cannot be parsed; callers may
                treat this as "proceed without host trust"
            AddHostError: If adding the host failed
        """
        try:
            location = self.normalizer.normalize(repository)
        except RepositoryParseError:
            logger.warning(
                "Could not parse %r as a URL - skipping adding host to SSH known_hosts",
                repository,
            )
            raise

        if not location.is_ssh:
            logger.debug("Skipping %s repository %s", location.scheme, repository)
            return False

        host = location.host_token
        try:
            return self.add(host)
        except HostTrustError as e:
            raise AddHostError(host, self.path, e) from e

    def add_many_from_repositories(self, repositories: Iterable[str]) -> list[str]:
        """Trust the hosts of several repositories.

        Unparseable repositories are skipped; any other failure stops
        processing.

        Args:
            repositories: Repository URLs

        Returns:
            Repositories that were skipped because they could not be parsed

        Raises:
            AddHostError: If adding a host failed
        """
        skipped: list[str] = []
        for repository in repositories:
            try:
                self.add_from_repository(repository)
            except RepositoryParseError:
                skipped.append(repository)
        return skipped

    def _scan(self, host: str, hostname: str, port: int) -> str:
        try:
            keys = self.scanner.scan(hostname, port)
        except ScanError:
            raise
        except Exception as e:
            raise ScanError(host, str(e)) from e

        keys = (keys or "").rstrip()
        if not keys:
            raise ScanError(host, "no host keys returned")
        return keys

    def _append(self, keys: str) -> None:
        """Append scanned lines in a single write."""
        try:
            fd = os.open(self.path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, FILE_MODE)
            with os.fdopen(fd, "a", encoding="utf-8") as f:
                f.write(f"{keys}\n")
        except OSError as e:
            raise TrustStoreIOError(self.path, "append to", e) from e

    def _release(self, lock: FileLock) -> None:
        try:
            lock.release()
        except OSError as e:
            logger.warning("Failed to release known_hosts file lock %s: %s", self.lock_path, e)
