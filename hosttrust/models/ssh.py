"""SSH client config models."""

from dataclasses import dataclass

from hosttrust.utils.hostname import DEFAULT_SSH_PORT, join_host_port


@dataclass
class SSHHost:
    """One alias from the SSH client config."""

    name: str
    hostname: str
    port: int = DEFAULT_SSH_PORT
    user: str | None = None
    identity_file: str | None = None

    @property
    def host_token(self) -> str:
        """Get the host token that is actually dialed for this alias.

        Returns:
            Lowercase hostname, with ``:port`` when not 22
        """
        return join_host_port(self.hostname, self.port)
