"""Data models for ICS content parsing."""

import importlib
import inspect
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .components import ComponentKind, Event, EventComponent
from .exceptions import EventClassError

if TYPE_CHECKING:
    from ..config.settings import CalendarParserSettings


class ContentLine(BaseModel):
    """One logical content line split into name, value and parameters.

    A line that could not be tokenized is represented by an empty name.
    """

    name: str = ""
    value: str = ""
    params: dict[str, str] = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return bool(self.name)


class ParserState(str, Enum):
    """Position of the component stack machine within a document."""

    AWAITING_ROOT = "awaiting_root"
    IN_CALENDAR = "in_calendar"
    IN_NESTED_COMPONENT = "in_nested_component"
    DONE = "done"


def _import_event_class(path: str) -> Any:
    module_name, sep, attr_name = path.partition(":")
    if not sep:
        module_name, _, attr_name = path.rpartition(".")
    if not module_name or not attr_name:
        raise EventClassError(f"Event class {path} not defined")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise EventClassError(f"Event class {path} not defined") from e

    try:
        return getattr(module, attr_name)
    except AttributeError as e:
        raise EventClassError(f"Event class {path} not defined") from e


def resolve_event_class(event_class: Any) -> type:
    """Resolve and validate the class instantiated for VEVENT blocks.

    Args:
        event_class: A class, a dotted import path (``pkg.mod:Class`` or
            ``pkg.mod.Class``) or None for the default Event class

    Returns:
        The validated event class

    Raises:
        EventClassError: If the class cannot be found or does not behave
            like an event component
    """
    if event_class is None or event_class == "":
        return Event

    if isinstance(event_class, str):
        event_class = _import_event_class(event_class)

    if not inspect.isclass(event_class):
        raise EventClassError(f"Event class {event_class!r} is not a class")

    try:
        instance = event_class()
    except Exception as e:
        raise EventClassError(
            f"Event class {event_class.__name__} cannot be instantiated: {e}"
        ) from e

    if not isinstance(instance, EventComponent):
        raise EventClassError(
            f"Event class {event_class.__name__} must provide set_attribute() and get_name()"
        )

    if instance.get_name() != ComponentKind.EVENT.value:
        raise EventClassError(
            f"Event class {event_class.__name__} reports component type "
            f"{instance.get_name()!r}, expected {ComponentKind.EVENT.value}"
        )

    return event_class


class ParserConfig(BaseModel):
    """Immutable configuration for one ICSDataParser instance."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    event_class: Any = Field(
        default=None,
        validate_default=True,
        description="Class (or import path) instantiated for VEVENT blocks",
    )
    halt_on_parse_errors: bool = Field(
        default=False, description="Raise on the first parse error instead of logging it"
    )

    @field_validator("event_class", mode="before")
    @classmethod
    def _validate_event_class(cls, value: Any) -> type:
        return resolve_event_class(value)

    @classmethod
    def from_settings(cls, settings: Optional["CalendarParserSettings"] = None) -> "ParserConfig":
        """Build a parser configuration from application settings."""
        if settings is None:
            from ..config.settings import get_settings  # noqa: PLC0415

            settings = get_settings()

        return cls(
            event_class=settings.event_class,
            halt_on_parse_errors=settings.halt_on_parse_errors,
        )
