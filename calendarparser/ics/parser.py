"""iCalendar parser building a component tree with a stack machine."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from .components import (
    COMPONENT_CLASSES,
    Calendar,
    ComponentKind,
    UnknownComponent,
)
from .exceptions import (
    AttributeRejectedError,
    ICSParseError,
    StructureMismatchError,
    UnknownComponentTypeError,
)
from .lexer import ContentLineTokenizer, iter_logical_lines
from .models import ContentLine, ParserConfig, ParserState

logger = logging.getLogger(__name__)


class ICSDataParser:
    """Parse iCalendar text into a Calendar of typed components.

    Lines are tokenized one at a time and fed to a stack of open
    components. Parsing stops as soon as the top-level ``END:VCALENDAR`` is
    seen; anything after it is never read.

    With ``halt_on_parse_errors`` set, the first problem raises an
    ICSParseError subclass. Otherwise each problem is logged, recorded in
    ``warnings`` and parsing carries on with the best state available.
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize ICS data parser.

        Args:
            config: Parser configuration, defaults to lenient parsing with
                the default Event class
        """
        self.config = config or ParserConfig()
        self.warnings: list[str] = []
        self._reset()
        logger.debug("ICS data parser initialized")

    @classmethod
    def from_settings(cls, settings: Any = None) -> "ICSDataParser":
        """Create a parser configured from application settings."""
        return cls(ParserConfig.from_settings(settings))

    def init(self, args: Mapping[str, Any]) -> None:
        """Reconfigure the parser from an options mapping.

        Recognized keys are ``EVENT_CLASS`` and ``HALT_ON_PARSE_ERRORS``.
        Must not be called while a parse is running.
        """
        event_class = args.get("EVENT_CLASS") or self.config.event_class
        halt = args.get("HALT_ON_PARSE_ERRORS", self.config.halt_on_parse_errors)
        self.config = ParserConfig(event_class=event_class, halt_on_parse_errors=halt)

    def set_event_class(self, event_class: Any) -> None:
        """Install the class used for VEVENT blocks.

        Raises:
            EventClassError: If the class is not defined or unusable
        """
        if event_class:
            self.config = ParserConfig(
                event_class=event_class,
                halt_on_parse_errors=self.config.halt_on_parse_errors,
            )

    @property
    def event_class(self) -> type:
        return self.config.event_class

    @property
    def halt_on_parse_errors(self) -> bool:
        return self.config.halt_on_parse_errors

    def get_event_categories(self) -> list[str]:
        """Categories declared by the configured event class."""
        get_categories = getattr(self.event_class, "get_event_categories", None)
        if get_categories is None:
            return []
        return list(get_categories())

    def set_total_items(self, total: int) -> None:
        self._total_items = total

    def get_total_items(self) -> int:
        """Number of events collected by the most recent parse."""
        return self._total_items

    @property
    def state(self) -> ParserState:
        if self._finished:
            return ParserState.DONE
        if not self._stack:
            return ParserState.AWAITING_ROOT
        if len(self._stack) == 1:
            return ParserState.IN_CALENDAR
        return ParserState.IN_NESTED_COMPONENT

    def parse_data(self, contents: str) -> Calendar:
        """Parse a complete calendar document.

        Args:
            contents: Full iCalendar text; CRLF, CR and LF line endings are accepted

        Returns:
            The root Calendar with its events and timezone

        Raises:
            TypeError: If contents is not a string
            ICSParseError: On the first parse problem when halt_on_parse_errors is set
        """
        if not isinstance(contents, str):
            raise TypeError("ICS content must be a string")

        self._reset()
        self.warnings = []
        calendar = self._calendar
        tokenizer = ContentLineTokenizer(self.halt_on_parse_errors, on_error=self._report)

        for line in iter_logical_lines(contents):
            if not line.strip():
                continue

            content_line = tokenizer.tokenize(line)
            if not content_line.is_valid:
                continue

            name = content_line.name.upper()
            if name == "BEGIN":
                self._begin_component(content_line, line)
            elif name == "END":
                if self._end_component(content_line, line):
                    break
            else:
                self._apply_attribute(content_line, line)

        self.set_total_items(len(calendar.events))
        logger.debug(
            f"Parsed {self.get_total_items()} events from ICS content "
            f"({len(self.warnings)} warnings)"
        )
        return calendar

    def _reset(self) -> None:
        self._calendar = Calendar()
        self._stack: list[Any] = []
        self._add_event = False
        self._finished = False
        self._total_items = 0

    def _report(self, error: ICSParseError) -> None:
        self.warnings.append(error.message)
        logger.warning(error.message)

    def _handle_error(self, error: ICSParseError) -> None:
        if self.halt_on_parse_errors:
            raise error
        self._report(error)

    def _begin_component(self, content_line: ContentLine, line: str) -> None:
        type_name = content_line.value.upper()

        if type_name == ComponentKind.CALENDAR.value:
            component = self._calendar
        elif type_name == ComponentKind.EVENT.value:
            self._add_event = True
            component = self.event_class()
        elif type_name in COMPONENT_CLASSES:
            component = COMPONENT_CLASSES[type_name]()
        else:
            self._handle_error(
                UnknownComponentTypeError(
                    f"unknown component type {content_line.value}",
                    line=line,
                    actual=content_line.value,
                )
            )
            component = UnknownComponent(type_name)

        self._stack.append(component)

    def _end_component(self, content_line: ContentLine, line: str) -> bool:
        """Close the open component. Returns True once the root calendar is closed."""
        type_name = content_line.value.upper()

        if not self._stack:
            self._handle_error(
                StructureMismatchError(
                    f"END {content_line.value} without a matching BEGIN",
                    line=line,
                    actual=content_line.value,
                )
            )
            return False

        component = self._stack.pop()
        component_name = component.get_name()
        if component_name.upper() != type_name:
            self._handle_error(
                StructureMismatchError(
                    f"BEGIN {component_name} ended by END {content_line.value}",
                    line=line,
                    expected=component_name,
                    actual=content_line.value,
                )
            )
            if component is self._calendar:
                # The root stays open until its own END
                self._stack.append(component)
            elif type_name == ComponentKind.CALENDAR.value and any(
                frame is self._calendar for frame in self._stack
            ):
                self._finished = True
                return True
            return False

        if isinstance(component, UnknownComponent):
            logger.debug(f"Dropped unknown component {component_name}")
        elif type_name == ComponentKind.EVENT.value:
            self._finish_event(component, line)
        elif type_name == ComponentKind.TIMEZONE.value:
            self._calendar.timezone = component
        elif type_name == ComponentKind.CALENDAR.value:
            self._finished = True
            return True
        elif self._stack and hasattr(self._stack[-1], "add_component"):
            self._stack[-1].add_component(component)

        return False

    def _finish_event(self, event: Any, line: str) -> None:
        timezone = self._calendar.timezone
        if timezone is not None and timezone.tzid:
            set_tzid = getattr(event, "replace_attribute", event.set_attribute)
            try:
                set_tzid("TZID", timezone.tzid)
            except (AttributeRejectedError, ValueError) as e:
                self._reject_attribute(event, "TZID", line, e)

        if self._add_event:
            self._calendar.add_event(event)
        else:
            logger.debug("Discarding event with rejected attributes")

    def _apply_attribute(self, content_line: ContentLine, line: str) -> None:
        if not self._stack:
            self._handle_error(
                StructureMismatchError(
                    f"Something other than BEGIN at the start of the calendar: {line}",
                    line=line,
                    expected=ComponentKind.CALENDAR.value,
                    actual=content_line.name,
                )
            )
            return

        component = self._stack[-1]
        try:
            component.set_attribute(content_line.name, content_line.value, content_line.params)
        except (AttributeRejectedError, ValueError) as e:
            self._reject_attribute(component, content_line.name, line, e)

    def _reject_attribute(self, component: Any, name: str, line: str, cause: Exception) -> None:
        """Apply the error policy to an attribute a component refused."""
        message = cause.message if isinstance(cause, AttributeRejectedError) else str(cause)
        error = AttributeRejectedError(
            f"{component.get_name()} rejected {name}: {message}",
            line=line,
            expected=component.get_name(),
            actual=name,
        )
        if self.halt_on_parse_errors:
            raise error from cause
        self._report(error)
        self._add_event = False
