"""Configuration module for hosttrust.

Provides focused classes for different configuration concerns:
- Config: Main configuration class (aggregates all components)
- SSHConfigParser: Parses ~/.ssh/config files
- Settings: Environment variable configuration
- ensure_known_hosts / resolve_known_hosts_path: known_hosts location
"""

from hosttrust.config.host_keys import (
    ensure_known_hosts,
    find_home,
    resolve_known_hosts_path,
)
from hosttrust.config.main import Config
from hosttrust.config.parser import SSHConfigParser
from hosttrust.config.settings import Settings

__all__ = [
    "Config",
    "ensure_known_hosts",
    "find_home",
    "resolve_known_hosts_path",
    "Settings",
    "SSHConfigParser",
]
