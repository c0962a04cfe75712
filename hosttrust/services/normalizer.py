"""Repository URL to connection host normalization."""

import logging
from dataclasses import replace

from hosttrust.errors import RepositoryParseError
from hosttrust.models import RepositoryURL
from hosttrust.protocols import HostResolver
from hosttrust.utils.hostname import DEFAULT_SSH_PORT
from hosttrust.utils.url import parse_repository_url
from hosttrust.utils.validation import validate_host

logger = logging.getLogger(__name__)


class HostNormalizer:
    """Derive the host that will actually be dialed for a repository.

    Keys must be recorded under the real connection host, not the alias
    written in the URL, or later lookups will miss.
    """

    def __init__(self, resolver: HostResolver | None = None):
        """Initialize normalizer.

        Args:
            resolver: SSH alias resolver, usually an SSHConfigParser.
                Aliases are left untouched when None.
        """
        self.resolver = resolver

    def normalize(self, repository: str) -> RepositoryURL:
        """Parse a repository URL and strip SSH aliases from its host.

        An alias port only applies when the URL itself uses the default
        port.

        Args:
            repository: Repository URL or scp-like location

        Returns:
            RepositoryURL whose ``host_token`` is the canonical host

        Raises:
            RepositoryParseError: If the URL is malformed or an alias
                resolves to an invalid host
        """
        location = parse_repository_url(repository)
        if not location.is_ssh or self.resolver is None:
            return location

        alias = self.resolver.resolve(location.host)
        if alias is None:
            return location

        try:
            hostname = validate_host(alias.hostname)
        except ValueError as e:
            raise RepositoryParseError(
                repository, f"alias {alias.name!r} resolves to an invalid host: {e}"
            ) from e

        port = location.port
        if port in (None, DEFAULT_SSH_PORT):
            port = alias.port

        resolved = replace(location, host=hostname, port=port)
        logger.debug(
            "Resolved SSH alias %s to %s",
            location.host_token,
            resolved.host_token,
        )
        return resolved
