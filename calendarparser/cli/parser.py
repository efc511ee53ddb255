"""Command-line argument parsing for calendarparser."""

import argparse

from calendarparser import __version__

LOG_LEVELS = ["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="calendarparser",
        description="Parse an iCalendar (.ics) document and summarize its contents",
        epilog="""
Examples:
  calendarparser meetings.ics              # Summary of events and timezone
  calendarparser meetings.ics --json       # Full component tree as JSON
  calendarparser meetings.ics --strict     # Fail on the first parse error
  cat meetings.ics | calendarparser -      # Read from standard input
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "file",
        help="Path to the .ics file to parse, or - for standard input",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser_group = parser.add_argument_group("parsing", "Parser behaviour")
    parser_group.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Abort on the first parse error instead of logging and continuing",
    )
    parser_group.add_argument(
        "--event-class",
        metavar="PATH",
        help="Import path of the class used for VEVENT blocks (module:Class)",
    )

    output_group = parser.add_argument_group("output", "Output format")
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print the parsed calendar as JSON",
    )

    logging_group = parser.add_argument_group("logging", "Logging configuration")
    verbosity = logging_group.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Set console and file log level",
    )
    verbosity.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging (VERBOSE level)",
    )
    verbosity.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only show errors",
    )
    logging_group.add_argument(
        "--log-dir",
        metavar="DIR",
        help="Also write logs to a rotating file in DIR",
    )
    logging_group.add_argument(
        "--no-log-colors",
        action="store_true",
        help="Disable colored console output",
    )

    return parser
