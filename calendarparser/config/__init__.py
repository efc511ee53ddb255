"""Configuration management for calendarparser."""

from .settings import CalendarParserSettings, LoggingSettings, get_settings, reset_settings

__all__ = [
    "CalendarParserSettings",
    "LoggingSettings",
    "get_settings",
    "reset_settings",
]
