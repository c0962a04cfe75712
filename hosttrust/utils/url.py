"""Repository URL parsing.

Understands the URL shapes git accepts for remotes:

    ssh://[user@]host[:port]/path     (also git+ssh:// and ssh+git://)
    [user@]host:path                  (scp-like shorthand)
    https://host/path, git://host/path, file:///path
    /local/path, ./relative/path
"""

import re
from urllib.parse import urlsplit

from hosttrust.errors import RepositoryParseError
from hosttrust.models import RepositoryURL
from hosttrust.utils.hostname import DEFAULT_SSH_PORT
from hosttrust.utils.validation import validate_host

SSH_SCHEMES = frozenset({"ssh", "git+ssh", "ssh+git"})
LOCAL_SCHEMES = frozenset({"file"})

_SCHEME_PATTERN = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*)://")
_SCP_PATTERN = re.compile(
    r"^(?:(?P<user>[^@/]+)@)?(?P<host>\[[^\]/]+\]|[^:/\[\]]+):(?P<path>.*)$"
)


def parse_repository_url(repository: str) -> RepositoryURL:
    """Parse a git repository location.

    Returns:
        RepositoryURL with scheme ``ssh`` for every SSH transport form.

    Raises:
        RepositoryParseError: If the location cannot be interpreted.
    """
    url = repository.strip()
    if not url:
        raise RepositoryParseError(repository, "empty repository")

    if _SCHEME_PATTERN.match(url):
        return _parse_scheme_url(repository, url)

    scp = _SCP_PATTERN.match(url)
    if scp:
        host = scp.group("host")
        if host.startswith("["):
            host = host[1:-1]
        return RepositoryURL(
            scheme="ssh",
            host=_checked_host(repository, host),
            port=DEFAULT_SSH_PORT,
            user=scp.group("user"),
            path=scp.group("path"),
            original=repository,
        )

    # Anything else is a path on the local filesystem
    return RepositoryURL(scheme="file", host="", port=None, path=url, original=repository)


def _parse_scheme_url(repository: str, url: str) -> RepositoryURL:
    """Parse a URL that carries an explicit ``scheme://`` prefix."""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise RepositoryParseError(repository, str(e)) from e
    if port == 0:
        raise RepositoryParseError(repository, "port out of range 1-65535")

    scheme = parts.scheme.lower()
    if scheme in SSH_SCHEMES:
        scheme = "ssh"
        if port is None:
            port = DEFAULT_SSH_PORT

    host = parts.hostname or ""
    if not host and scheme not in LOCAL_SCHEMES:
        raise RepositoryParseError(repository, f"missing host for {scheme} URL")

    return RepositoryURL(
        scheme=scheme,
        host=_checked_host(repository, host) if host else "",
        port=port,
        user=parts.username,
        path=parts.path,
        original=repository,
    )


def _checked_host(repository: str, host: str) -> str:
    try:
        return validate_host(host.lower())
    except ValueError as e:
        raise RepositoryParseError(repository, str(e)) from e
