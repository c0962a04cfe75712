"""known_hosts line model.

Line format (see sshd(8), SSH_KNOWN_HOSTS_FILE_FORMAT):

    # Comments allowed at start of line
    cvs.example.net,192.0.2.10 ssh-rsa AAAA1234.....=
    |1|JfKTdBh7rNbXkVAQCRp4OQoPfmI=|USECr3SWf1JUPsms5AqfD5QfxkM= ssh-rsa AAAA1234.....=
    @revoked * ssh-rsa AAAAB5W...

Only lines made of exactly three single-space separated fields are
entries. Comments, markers such as @revoked or @cert-authority, trailing
key comments and lines padded with extra spaces or tabs are ignored.
"""

from dataclasses import dataclass, field

from hosttrust.utils.hostname import hashed_pattern_matches, is_hashed_pattern


@dataclass
class HostEntry:
    """A single known_hosts entry."""

    patterns: list[str] = field(default_factory=list)
    key_type: str = ""
    key_blob: str = ""

    def matches(self, normalized: str) -> bool:
        """Check whether any host pattern names the normalized host.

        Args:
            normalized: Host in known_hosts form, e.g. ``[git.example.com]:2222``

        Returns:
            True on a plain or hashed match
        """
        for pattern in self.patterns:
            if pattern == normalized:
                return True
            if is_hashed_pattern(pattern) and hashed_pattern_matches(pattern, normalized):
                return True
        return False

    def to_line(self) -> str:
        """Render the entry back into known_hosts format."""
        return f"{','.join(self.patterns)} {self.key_type} {self.key_blob}"


def parse_entry(line: str) -> HostEntry | None:
    """Parse one known_hosts line.

    Returns:
        HostEntry, or None when the line is not a three field entry.
    """
    fields = line.rstrip("\r\n").split(" ")
    if len(fields) != 3:
        return None

    hosts, key_type, key_blob = fields
    return HostEntry(patterns=hosts.split(","), key_type=key_type, key_blob=key_blob)
