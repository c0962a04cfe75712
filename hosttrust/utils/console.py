"""Colorful console logging for hosttrust."""

import logging
import re
import sys
from datetime import datetime

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "white": "\033[37m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

# Log level colors
LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "hosttrust.services.known_hosts": COLORS["bright_magenta"],
    "hosttrust.services.keyscan": COLORS["bright_blue"],
    "hosttrust.services.normalizer": COLORS["bright_cyan"],
    "hosttrust.config": COLORS["green"],
    "default": COLORS["white"],
}

NOISY_LOGGERS = ("asyncssh", "filelock")

_HOST_PATTERN = re.compile(r"(\[[\w\.\-:]+\]:\d+|\b[\w\-]+(?:\.[\w\-]+)+:\d+\b)")
_PATH_PATTERN = re.compile(r"((?:~|/)[\w\.\-/]*known_hosts[\w\.]*)")


class ColorfulFormatter(logging.Formatter):
    """Colorful log formatter with component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        """Get color for a logger name/component."""
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt.strftime('%H:%M:%S')}.{int(record.msecs):03d} {dt.strftime('%m/%d')}"

    def _format_level(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        return self._colorize(f"{level:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith("hosttrust."):
            name = name[len("hosttrust.") :]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<20}", color)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as ``time | LEVEL | component | message``."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _highlight_message(self, message: str) -> str:
        """Highlight host tokens and known_hosts paths."""
        if not self.use_colors:
            return message

        message = _HOST_PATTERN.sub(
            f"{COLORS['bright_magenta']}\\1{COLORS['reset']}",
            message,
        )
        message = _PATH_PATTERN.sub(
            f"{COLORS['bright_blue']}\\1{COLORS['reset']}",
            message,
        )
        return message


def configure_logging(log_level: str = "INFO", use_colors: bool = True) -> logging.Logger:
    """Configure colorful logging for the hosttrust package.

    Safe to call more than once; the handler is only installed the first time.

    Args:
        log_level: Level name for the ``hosttrust`` logger
        use_colors: Enable ANSI colors (ignored when stderr is not a TTY)

    Returns:
        The configured ``hosttrust`` logger
    """
    if not sys.stderr.isatty():
        use_colors = False

    package_logger = logging.getLogger("hosttrust")
    package_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for noisy_logger in NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    return package_logger
