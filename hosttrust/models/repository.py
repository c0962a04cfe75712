"""Repository location models."""

from dataclasses import dataclass

from hosttrust.utils.hostname import DEFAULT_SSH_PORT, join_host_port


@dataclass
class RepositoryURL:
    """Parsed repository location."""

    scheme: str
    host: str
    port: int | None = None
    user: str | None = None
    path: str = ""
    original: str = ""

    @property
    def is_ssh(self) -> bool:
        """Whether the repository is reached over SSH."""
        return self.scheme == "ssh"

    @property
    def host_token(self) -> str:
        """Host with ``:port`` appended only for non-default ports."""
        return join_host_port(self.host, self.port or DEFAULT_SSH_PORT)
