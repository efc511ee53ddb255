"""Entry point for `python -m calendarparser` and the console script."""

import sys

from calendarparser.cli import main_entry


def main() -> None:
    sys.exit(main_entry())


if __name__ == "__main__":
    main()
