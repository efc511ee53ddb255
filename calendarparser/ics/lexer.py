"""Line unfolding and content-line tokenizing for iCalendar text.

Unfolding, content-line splitting and TEXT unescaping are delegated to
``icalendar.parser``; this module adapts the results to ContentLine and
applies the strict/lenient error policy.
"""

import logging
from collections.abc import Iterator
from typing import Any, Callable, Optional

from icalendar.parser import Contentline, Contentlines
from icalendar.prop import vText

from .exceptions import MalformedLineError
from .models import ContentLine

logger = logging.getLogger(__name__)


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and bare CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def iter_logical_lines(text: str) -> Iterator[str]:
    """Yield the logical lines of a calendar document, one at a time.

    A line break followed by one space or tab is a folding marker and is
    removed; any further whitespace belongs to the value. Empty lines are
    not yielded.
    """
    for line in Contentlines.from_ical(normalize_line_endings(text)):
        if line:
            yield str(line)


def unfold(text: str) -> str:
    """Return calendar text with all folding markers removed."""
    return "\n".join(iter_logical_lines(text))


def unescape_text(raw: str) -> str:
    """Decode iCalendar TEXT escapes.

    Unknown backslash sequences are left untouched.
    """
    return str(vText.from_ical(raw))


def _param_value(value: Any) -> str:
    # Unquoted comma-separated parameter values come back as a list
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)


def parse_content_line(line: str) -> ContentLine:
    """Split one logical line into a ContentLine.

    Raises:
        MalformedLineError: If the line has no unescaped colon, no valid
            name or an unparsable parameter
    """
    try:
        name, params, value = Contentline(line).parts()
    except ValueError as e:
        raise MalformedLineError(f"Found a line {line} that may not be valid", line=line) from e

    return ContentLine(
        name=str(name),
        value=unescape_text(value).strip(),
        params={str(key): _param_value(param) for key, param in params.items()},
    )


class ContentLineTokenizer:
    """Tokenizer applying the strict/lenient error policy to each line.

    In lenient mode a malformed line is reported through ``on_error`` (or
    logged) and an invalid, empty ContentLine is returned in its place.
    """

    def __init__(
        self,
        halt_on_parse_errors: bool = False,
        on_error: Optional[Callable[[MalformedLineError], None]] = None,
    ) -> None:
        self.halt_on_parse_errors = halt_on_parse_errors
        self.on_error = on_error

    def tokenize(self, line: str) -> ContentLine:
        try:
            return parse_content_line(line)
        except MalformedLineError as e:
            if self.halt_on_parse_errors:
                raise
            if self.on_error is not None:
                self.on_error(e)
            else:
                logger.warning(e.message)
            return ContentLine()
