"""SSH client config parser.

Reads ~/.ssh/config and maps host aliases to the host and port that ssh
actually dials, so keys are recorded under the real identity.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path

from hosttrust.models import SSHHost
from hosttrust.utils.hostname import DEFAULT_SSH_PORT

logger = logging.getLogger(__name__)

_KEYWORD_PATTERN = re.compile(r"^(\w+)(?:\s*=\s*|\s+)(.+)$")
_WILDCARD_CHARS = ("*", "?", "!")


@dataclass
class HostBlock:
    """Options from one ``Host`` section, in file order."""

    patterns: list[str]
    options: dict[str, str] = field(default_factory=dict)

    def matches(self, name: str) -> bool:
        """Check a lowercase host name against the section's patterns.

        A matching negated pattern (``!host``) excludes the name even if
        another pattern matches.
        """
        matched = False
        for pattern in self.patterns:
            if pattern.startswith("!"):
                if fnmatchcase(name, pattern[1:]):
                    return False
            elif fnmatchcase(name, pattern):
                matched = True
        return matched


class SSHConfigParser:
    """Parser for SSH client config files.

    Options are resolved the way ssh does it: every ``Host`` section whose
    patterns match is visited in file order and the first value seen for
    each keyword wins. Only the keywords that change where a connection
    goes (HostName, Port) plus User and IdentityFile are kept.
    """

    def __init__(
        self,
        config_path: Path | str | None = None,
        home: Path | str | None = None,
    ):
        """Initialize SSH config parser.

        Args:
            config_path: Path to SSH config file (default: <home>/.ssh/config)
            home: Base directory used for the default path
        """
        if config_path is None:
            base = Path(home) if home is not None else Path.home()
            config_path = base / ".ssh" / "config"

        self.config_path = Path(config_path)
        self._blocks: list[HostBlock] | None = None
        self._hosts: dict[str, SSHHost] | None = None

    @property
    def blocks(self) -> list[HostBlock]:
        """Host sections in file order, read once."""
        if self._blocks is None:
            self._blocks = self._read()
        return self._blocks

    def parse(self) -> dict[str, SSHHost]:
        """Parse SSH config and return alias definitions.

        Every literal name on a ``Host`` line is resolved. The result is
        cached after the first call.

        Returns:
            Dictionary mapping lowercase alias to SSHHost objects
        """
        if self._hosts is None:
            hosts: dict[str, SSHHost] = {}
            for block in self.blocks:
                for name in block.patterns:
                    if name in hosts or any(c in name for c in _WILDCARD_CHARS):
                        continue
                    host = self.resolve(name)
                    if host is not None:
                        hosts[name] = host
            logger.debug("Parsed %d aliases from %s", len(hosts), self.config_path)
            self._hosts = hosts
        return self._hosts

    def resolve(self, alias: str) -> SSHHost | None:
        """Look up the real connection host for an alias.

        Args:
            alias: Host name as written in a repository URL

        Returns:
            SSHHost if any matching section sets HostName or Port,
            None otherwise
        """
        name = alias.lower()
        options: dict[str, str] = {}
        for block in self.blocks:
            if block.matches(name):
                for key, value in block.options.items():
                    options.setdefault(key, value)

        if "hostname" not in options and "port" not in options:
            return None

        try:
            port = int(options.get("port", DEFAULT_SSH_PORT))
        except ValueError:
            logger.warning(
                "Invalid port %r for %s in %s, using %d",
                options.get("port"),
                name,
                self.config_path,
                DEFAULT_SSH_PORT,
            )
            port = DEFAULT_SSH_PORT

        hostname = options.get("hostname", name).replace("%h", name)
        return SSHHost(
            name=name,
            hostname=hostname.lower(),
            port=port,
            user=options.get("user"),
            identity_file=options.get("identityfile"),
        )

    def _read(self) -> list[HostBlock]:
        if not self.config_path.exists():
            logger.debug("SSH config not found: %s", self.config_path)
            return []

        try:
            content = self.config_path.read_text()
            logger.debug("Reading SSH config from %s", self.config_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read SSH config %s: %s", self.config_path, e)
            return []

        # Options before the first Host line apply to every host
        current: HostBlock | None = HostBlock(patterns=["*"])
        blocks: list[HostBlock] = [current]

        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            kv_match = _KEYWORD_PATTERN.match(line)
            if not kv_match:
                continue
            key = kv_match.group(1).lower()
            value = kv_match.group(2).strip().strip('"')

            if key == "match":
                # Match blocks are conditional; their options are ignored
                current = None
                continue

            if key == "host":
                current = HostBlock(patterns=[p.lower() for p in value.split()])
                blocks.append(current)
                continue

            if current is None:
                continue

            if key == "identityfile":
                value = os.path.expanduser(value)
            # ssh uses the first value obtained for each keyword
            current.options.setdefault(key, value)

        return blocks
