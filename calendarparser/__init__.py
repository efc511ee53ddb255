"""calendarparser - iCalendar parsing into a tree of typed components."""

__version__ = "1.0.0"
__author__ = "CalendarParser Team"
__description__ = "iCalendar (RFC 5545) parser with strict and lenient error handling"

# Package metadata
__all__ = [
    "__author__",
    "__description__",
    "__version__",
]
