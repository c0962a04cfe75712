"""Input validation utilities."""

from typing import Final

# Characters that have no place in a hostname and could confuse a
# subprocess argument or a known_hosts line
SUSPICIOUS_CHARS: Final[list[str]] = [
    "/",
    "\\",
    ";",
    "&",
    "|",
    "$",
    "`",
    ",",
    " ",
    "\t",
    "\n",
    "\r",
    "\x00",
]


def validate_host(host: str) -> str:
    """Validate a host name taken from a repository URL.

    Args:
        host: The host name to validate

    Returns:
        Validated host name

    Raises:
        ValueError: If host name is invalid
    """
    if not host:
        raise ValueError("Host cannot be empty")

    if len(host) > 253:
        raise ValueError(f"Host name too long: {len(host)} chars")

    # ssh-keyscan would read a leading dash as an option
    if host.startswith("-"):
        raise ValueError(f"Host cannot start with '-': {host!r}")

    for char in SUSPICIOUS_CHARS:
        if char in host:
            raise ValueError(f"Host contains invalid characters: {host!r}")

    return host
