"""Utilities for hosttrust."""

from hosttrust.utils.console import ColorfulFormatter, configure_logging
from hosttrust.utils.hostname import (
    DEFAULT_SSH_PORT,
    hash_hostname,
    hashed_pattern_matches,
    join_host_port,
    normalize_host,
    split_host_port,
)
from hosttrust.utils.shell import format_command
from hosttrust.utils.validation import validate_host

__all__ = [
    "ColorfulFormatter",
    "configure_logging",
    "DEFAULT_SSH_PORT",
    "format_command",
    "hash_hostname",
    "hashed_pattern_matches",
    "join_host_port",
    "normalize_host",
    "split_host_port",
    "validate_host",
]
