"""Logging configuration and setup utilities."""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config.settings import CalendarParserSettings

# Custom log level between INFO(20) and DEBUG(10)
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

ROOT_LOGGER_NAME = "calendarparser"


def verbose(self: logging.Logger, message: Any, *args: Any, **kwargs: Any) -> None:
    """Log a message at the VERBOSE level.

    Example:
        >>> logger = logging.getLogger(__name__)
        >>> logger.verbose("Tokenized %d lines", line_count)
    """
    if self.isEnabledFor(VERBOSE):
        self._log(VERBOSE, message, args, **kwargs)


# Add verbose method to all Logger instances
logging.Logger.verbose = verbose  # type: ignore[attr-defined]


def get_log_level(level_name: str) -> int:
    """Get numeric log level from string name, including custom VERBOSE level.

    Args:
        level_name: Log level name (DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL),
            case insensitive

    Returns:
        Numeric log level

    Raises:
        ValueError: If the level name is not recognized
    """
    level_name = level_name.upper()
    if level_name == "VERBOSE":
        return VERBOSE
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return level


class AutoColoredFormatter(logging.Formatter):
    """Formatter that colors level names when the terminal supports it."""

    COLORS = {
        "CRITICAL": "\033[31m\033[1m",
        "ERROR": "\033[31m",
        "WARNING": "\033[33m",
        "INFO": "\033[34m",
        "VERBOSE": "\033[32m",
        "DEBUG": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, *args: Any, enable_colors: bool = True, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.use_colors = enable_colors and self._detect_color_support()

    @staticmethod
    def _detect_color_support() -> bool:
        """Colors only on a TTY whose TERM is not dumb."""
        if not hasattr(sys.stderr, "isatty") or not sys.stderr.isatty():
            return False
        if "NO_COLOR" in os.environ:
            return False

        term = os.environ.get("TERM", "").lower()
        if term == "dumb":
            return False
        if os.name == "nt":
            return "WT_SESSION" in os.environ
        return bool(term)

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if not self.use_colors or record.levelname not in self.COLORS:
            return formatted

        colored_level = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return formatted.replace(record.levelname, colored_level, 1)


def setup_logging(settings: "CalendarParserSettings") -> logging.Logger:
    """Set up package logging with console and optional rotating file output.

    Args:
        settings: Application settings holding the logging configuration

    Returns:
        The configured ``calendarparser`` logger
    """
    log_settings = settings.logging

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # Allow all levels, handlers will filter
    logger.handlers.clear()

    if log_settings.console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(get_log_level(log_settings.console_level))
        console_handler.setFormatter(
            AutoColoredFormatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
                enable_colors=log_settings.console_colors,
            )
        )
        logger.addHandler(console_handler)

    if log_settings.file_enabled:
        log_dir = Path(log_settings.file_directory) if log_settings.file_directory else Path.cwd()
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / log_settings.file_name

        # Rotating file handler to prevent large log files
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=log_settings.max_log_files,
            encoding="utf-8",
        )
        file_handler.setLevel(get_log_level(log_settings.file_level))
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)
        logger.debug(f"Logging to file: {log_path}")

    # Set third-party library log levels to reduce noise
    third_party_level = get_log_level(log_settings.third_party_level)
    for name in ("icalendar", "yaml", "pydantic"):
        logging.getLogger(name).setLevel(third_party_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the ``calendarparser`` namespace.

    Example:
        >>> logger = get_logger("ics.custom")
        >>> logger.name
        'calendarparser.ics.custom'
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def apply_command_line_overrides(
    settings: "CalendarParserSettings", args: Any
) -> "CalendarParserSettings":
    """Apply command-line logging overrides to settings in place.

    Priority: Command-line > Environment > YAML > Defaults.
    """
    if getattr(args, "log_level", None):
        settings.logging.console_level = args.log_level
        settings.logging.file_level = args.log_level

    if getattr(args, "verbose", False):
        settings.logging.console_level = "VERBOSE"
        settings.logging.file_level = "VERBOSE"

    if getattr(args, "quiet", False):
        settings.logging.console_level = "ERROR"

    if getattr(args, "log_dir", None):
        settings.logging.file_enabled = True
        settings.logging.file_directory = args.log_dir

    if getattr(args, "no_log_colors", False):
        settings.logging.console_colors = False

    return settings
