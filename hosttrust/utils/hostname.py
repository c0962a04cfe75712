"""Host token helpers shared by the normalizer and the trust store.

A host token is ``host`` or ``host:port`` (port only when not 22). The
known_hosts file stores the same identity as ``host`` or ``[host]:port``,
optionally hashed as ``|1|<base64 salt>|<base64 HMAC-SHA1>``.
"""

import base64
import binascii
import hashlib
import hmac
import os
from typing import Final

DEFAULT_SSH_PORT: Final[int] = 22
HASH_MAGIC: Final[str] = "|1|"
HASH_DELIM: Final[str] = "|"
SALT_LENGTH: Final[int] = 20


def split_host_port(token: str) -> tuple[str, int]:
    """Split a host token into host and port.

    <parameters>
    token: ``host``, ``host:port``, ``[addr]`` or ``[addr]:port``
    </parameters>

    <returns>
    Lowercase host and port (22 when absent)
    </returns>

    <raises>
    ValueError: If the port is not a number in 1..65535
    </raises>
    """
    token = token.strip()
    port_str = ""

    if token.startswith("["):
        end = token.find("]")
        if end == -1:
            raise ValueError(f"Unterminated bracket in host {token!r}")
        host = token[1:end]
        rest = token[end + 1 :]
        if rest:
            if not rest.startswith(":"):
                raise ValueError(f"Unexpected text after bracketed host {token!r}")
            port_str = rest[1:]
    elif token.count(":") == 1:
        host, port_str = token.split(":", 1)
    else:
        # Zero colons, or a bare IPv6 literal
        host = token

    port = DEFAULT_SSH_PORT
    if port_str:
        if not port_str.isdigit():
            raise ValueError(f"Invalid port in host {token!r}")
        port = int(port_str)
        if not 0 < port < 65536:
            raise ValueError(f"Port out of range in host {token!r}")

    return host.lower(), port


def join_host_port(host: str, port: int = DEFAULT_SSH_PORT) -> str:
    """Build a host token, omitting the default port."""
    host = host.lower()
    if port == DEFAULT_SSH_PORT:
        return host
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def normalize_host(token: str) -> str:
    """Convert a host token to the form known_hosts records it in.

    ``example.com`` stays as is, ``example.com:2222`` becomes
    ``[example.com]:2222`` and a bare IPv6 literal is bracketed.
    """
    host, port = split_host_port(token)
    if port != DEFAULT_SSH_PORT:
        return f"[{host}]:{port}"
    if ":" in host:
        return f"[{host}]"
    return host


def hash_hostname(normalized: str, salt: bytes | None = None) -> str:
    """Hash a normalized host the way ``ssh-keygen -H`` does.

    <parameters>
    normalized: Host in known_hosts form (see normalize_host)
    salt: 20 byte salt, random when omitted
    </parameters>

    <returns>
    Hashed host pattern ``|1|salt|digest``
    </returns>
    """
    if salt is None:
        salt = os.urandom(SALT_LENGTH)
    digest = hmac.new(salt, normalized.encode(), hashlib.sha1).digest()
    return (
        f"{HASH_MAGIC}{base64.b64encode(salt).decode()}"
        f"{HASH_DELIM}{base64.b64encode(digest).decode()}"
    )


def is_hashed_pattern(pattern: str) -> bool:
    """Check whether a host pattern uses the hashed encoding."""
    return pattern.startswith(HASH_MAGIC)


def hashed_pattern_matches(pattern: str, normalized: str) -> bool:
    """Check a hashed host pattern against a normalized host.

    The digest is recomputed with the salt embedded in the pattern.
    Patterns that are not hashed or do not decode never match.
    """
    if not is_hashed_pattern(pattern):
        return False

    parts = pattern[len(HASH_MAGIC) :].split(HASH_DELIM)
    if len(parts) != 2:
        return False

    try:
        salt = base64.b64decode(parts[0], validate=True)
        expected = base64.b64decode(parts[1], validate=True)
    except (binascii.Error, ValueError):
        return False

    digest = hmac.new(salt, normalized.encode(), hashlib.sha1).digest()
    return hmac.compare_digest(digest, expected)
