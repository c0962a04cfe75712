"""Shell command formatting utilities."""

import shlex


def format_command(argv: list[str]) -> str:
    """Render an argument vector as a copy-pasteable shell command.

    Args:
        argv: Program and arguments

    Returns:
        Shell-safe quoted command line
    """
    return shlex.join(argv)
