"""Utility functions and helpers package."""

from .logging import VERBOSE, apply_command_line_overrides, get_log_level, get_logger, setup_logging

__all__ = [
    "VERBOSE",
    "apply_command_line_overrides",
    "get_log_level",
    "get_logger",
    "setup_logging",
]
