"""known_hosts file location and creation."""

import logging
import os
from pathlib import Path

from hosttrust.errors import SetupError

logger = logging.getLogger(__name__)

SSH_DIRECTORY = ".ssh"
KNOWN_HOSTS_FILE = "known_hosts"
DIRECTORY_MODE = 0o700
FILE_MODE = 0o600


def find_home(home: Path | str | None = None) -> Path:
    """Get the base directory that holds ``.ssh``.

    Args:
        home: Explicit base directory; the current user's home when None

    Raises:
        SetupError: If the home directory cannot be determined
    """
    if home is not None:
        return Path(os.path.expanduser(str(home)))

    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise SetupError(f"Could not find the current user's home directory ({e})") from e


def resolve_known_hosts_path(
    home: Path | str | None = None,
    override: Path | str | None = None,
) -> Path:
    """Resolve the known_hosts path.

    Args:
        home: Base directory (see find_home)
        override: Explicit known_hosts path, takes precedence over home

    Returns:
        ``<home>/.ssh/known_hosts`` unless overridden
    """
    if override:
        return Path(os.path.expanduser(str(override)))
    return find_home(home) / SSH_DIRECTORY / KNOWN_HOSTS_FILE


def ensure_known_hosts(path: Path | str) -> Path:
    """Make sure the known_hosts file and its directory exist.

    The directory is created owner-only (0700) and a missing file is
    created empty and owner read/write (0600). Existing files are left
    untouched.

    Returns:
        The known_hosts path

    Raises:
        SetupError: If the directory or file cannot be created, or the path
            exists but is not a regular file
    """
    path = Path(path)

    try:
        path.parent.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise SetupError(f"Could not create directory {str(path.parent)!r}: {e}") from e

    if path.exists():
        if not path.is_file():
            raise SetupError(f"known_hosts path {str(path)!r} is not a regular file")
        return path

    try:
        path.touch(mode=FILE_MODE, exist_ok=True)
    except OSError as e:
        raise SetupError(f"Could not create {str(path)!r}: {e}") from e

    logger.info("Created empty known_hosts file at %s", path)
    return path
