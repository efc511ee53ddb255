"""CLI module for calendarparser.

Reads an iCalendar document, parses it with ICSDataParser and prints either
a short summary or the full component tree as JSON.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from calendarparser.config.settings import CalendarParserSettings
from calendarparser.ics import Calendar, ICSDataParser, ICSError, ParserConfig
from calendarparser.utils.logging import apply_command_line_overrides, setup_logging

from .parser import create_parser

logger = logging.getLogger(__name__)


def apply_cli_overrides(settings: CalendarParserSettings, args: Any) -> CalendarParserSettings:
    """Apply parser and logging overrides from command-line arguments."""
    if getattr(args, "strict", None):
        settings.halt_on_parse_errors = True
    if getattr(args, "event_class", None):
        settings.event_class = args.event_class
    return apply_command_line_overrides(settings, args)


def read_source(path: str) -> str:
    """Read calendar text from a file path or ``-`` for standard input."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def format_summary(calendar: Calendar, total_items: int) -> str:
    """Render a plain-text summary of a parsed calendar."""
    tzid = calendar.timezone.tzid if calendar.timezone else None
    lines = [
        f"Events: {total_items}",
        f"Timezone: {tzid or 'none'}",
    ]
    for event in calendar.events:
        summary = event.get_attribute("SUMMARY") if hasattr(event, "get_attribute") else None
        start = event.get_attribute("DTSTART") if hasattr(event, "get_attribute") else None
        lines.append(f"  - {summary or '(no summary)'} [{start or 'no start'}]")
    return "\n".join(lines)


def main_entry(argv: Optional[list[str]] = None) -> int:
    """Main entry point with argument parsing.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = apply_cli_overrides(CalendarParserSettings(), args)
    setup_logging(settings)

    try:
        ics_parser = ICSDataParser(ParserConfig.from_settings(settings))
    except ICSError as e:
        logger.error(f"Invalid parser configuration: {e.message}")
        return 1

    try:
        contents = read_source(args.file)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read {args.file}: {e}")
        return 1

    try:
        calendar = ics_parser.parse_data(contents)
    except ICSError as e:
        logger.error(f"Failed to parse {args.file}: {e.message}")
        return 1

    if args.json:
        print(json.dumps(calendar.to_dict(), indent=2))
    else:
        print(format_summary(calendar, ics_parser.get_total_items()))

    if ics_parser.warnings:
        logger.info(f"{len(ics_parser.warnings)} problems were skipped while parsing")

    return 0


__all__ = ["apply_cli_overrides", "create_parser", "format_summary", "main_entry", "read_source"]
