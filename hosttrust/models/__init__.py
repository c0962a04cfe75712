"""Data models for hosttrust."""

from hosttrust.models.entry import HostEntry, parse_entry
from hosttrust.models.repository import RepositoryURL
from hosttrust.models.ssh import SSHHost

__all__ = [
    "HostEntry",
    "parse_entry",
    "RepositoryURL",
    "SSHHost",
]
