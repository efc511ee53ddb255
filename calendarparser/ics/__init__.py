"""ICS calendar parsing module."""

from .components import (
    Alarm,
    Calendar,
    Component,
    ComponentKind,
    Daylight,
    Event,
    EventComponent,
    FreeBusy,
    Journal,
    Standard,
    Timezone,
    Todo,
)
from .exceptions import (
    AttributeRejectedError,
    EventClassError,
    ICSError,
    ICSParseError,
    MalformedLineError,
    StructureMismatchError,
    UnknownComponentTypeError,
)
from .lexer import parse_content_line, unescape_text, unfold
from .models import ContentLine, ParserConfig, ParserState
from .parser import ICSDataParser

__all__ = [
    "Alarm",
    "AttributeRejectedError",
    "Calendar",
    "Component",
    "ComponentKind",
    "ContentLine",
    "Daylight",
    "Event",
    "EventClassError",
    "EventComponent",
    "FreeBusy",
    "ICSDataParser",
    "ICSError",
    "ICSParseError",
    "Journal",
    "MalformedLineError",
    "ParserConfig",
    "ParserState",
    "Standard",
    "StructureMismatchError",
    "Timezone",
    "Todo",
    "UnknownComponentTypeError",
    "parse_content_line",
    "unescape_text",
    "unfold",
]
