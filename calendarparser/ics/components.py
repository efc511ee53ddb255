"""Component object model for parsed iCalendar documents.

Every BEGIN/END block in a document becomes one of the component classes
below. Components only store attributes and sub-components; interpreting
dates, recurrence rules or offsets is left to the code consuming them.
"""

import re
from enum import Enum
from typing import Any, ClassVar, Optional, Protocol, runtime_checkable

from .exceptions import AttributeRejectedError

# iana-token / x-name as defined by RFC 5545 section 3.1
ATTRIBUTE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9-]+$")

AttributeValue = tuple[str, dict[str, str]]


class ComponentKind(str, Enum):
    """Component types known to the parser, valued by their iCalendar name."""

    CALENDAR = "VCALENDAR"
    EVENT = "VEVENT"
    TIMEZONE = "VTIMEZONE"
    DAYLIGHT = "DAYLIGHT"
    STANDARD = "STANDARD"
    TODO = "VTODO"
    JOURNAL = "VJOURNAL"
    FREEBUSY = "VFREEBUSY"
    ALARM = "VALARM"


@runtime_checkable
class EventComponent(Protocol):
    """Capabilities required from a class used for VEVENT blocks."""

    def set_attribute(
        self, name: str, value: str, params: Optional[dict[str, str]] = None
    ) -> None:
        """Store one attribute line on the event."""
        ...

    def get_name(self) -> str:
        """Return the component type name, ``VEVENT`` for events."""
        ...


class Component:
    """Base class for all iCalendar components.

    Attributes are kept as an ordered list of ``(value, params)`` pairs per
    attribute name so repeated lines (ATTENDEE, CATEGORIES, ...) survive.
    """

    kind: ClassVar[Optional[ComponentKind]] = None

    def __init__(self) -> None:
        self.attributes: dict[str, list[AttributeValue]] = {}
        self.children: list[Any] = []

    def get_name(self) -> str:
        """Return the iCalendar type name of this component."""
        return self.kind.value if self.kind else ""

    def validate_attribute(self, name: str, value: str, params: dict[str, str]) -> None:
        """Check an attribute before it is stored.

        Raises:
            AttributeRejectedError: If the attribute name is not a valid token
        """
        if not ATTRIBUTE_NAME_PATTERN.match(name):
            raise AttributeRejectedError(
                f"Invalid attribute name {name!r} for {self.get_name()}",
                expected=self.get_name(),
                actual=name,
            )

    def set_attribute(
        self, name: str, value: str, params: Optional[dict[str, str]] = None
    ) -> None:
        """Append an attribute value, keeping earlier values of the same name."""
        params = dict(params or {})
        self.validate_attribute(name, value, params)
        self.attributes.setdefault(name.upper(), []).append((value, params))

    def replace_attribute(
        self, name: str, value: str, params: Optional[dict[str, str]] = None
    ) -> None:
        """Set an attribute to a single value, dropping any previous values."""
        params = dict(params or {})
        self.validate_attribute(name, value, params)
        self.attributes[name.upper()] = [(value, params)]

    def get_attribute(self, name: str) -> Optional[str]:
        """Return the first value stored for an attribute, if any."""
        values = self.attributes.get(name.upper())
        return values[0][0] if values else None

    def get_attribute_params(self, name: str) -> dict[str, str]:
        """Return the parameters of the first value stored for an attribute."""
        values = self.attributes.get(name.upper())
        return dict(values[0][1]) if values else {}

    def get_attributes(self, name: str) -> list[str]:
        """Return every value stored for an attribute, in parse order."""
        return [value for value, _ in self.attributes.get(name.upper(), [])]

    def has_attribute(self, name: str) -> bool:
        return name.upper() in self.attributes

    def add_component(self, component: Any) -> None:
        """Attach a closed sub-component."""
        self.children.append(component)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the component tree to plain Python types."""
        return {
            "type": self.get_name(),
            "attributes": {
                name: [{"value": value, "params": dict(params)} for value, params in values]
                for name, values in self.attributes.items()
            },
            "components": [_component_to_dict(child) for child in self.children],
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.get_name()} attributes={len(self.attributes)}>"


def _component_to_dict(component: Any) -> Any:
    if hasattr(component, "to_dict"):
        return component.to_dict()
    return repr(component)


class Event(Component):
    """A VEVENT block. Default class used for events by the parser."""

    kind = ComponentKind.EVENT

    # Categories a calendar using this event class is known to emit.
    event_categories: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def get_event_categories(cls) -> list[str]:
        return sorted(cls.event_categories)

    @property
    def uid(self) -> Optional[str]:
        return self.get_attribute("UID")

    @property
    def summary(self) -> Optional[str]:
        return self.get_attribute("SUMMARY")

    @property
    def tzid(self) -> Optional[str]:
        return self.get_attribute("TZID")

    @property
    def categories(self) -> list[str]:
        """All CATEGORIES values, comma lists flattened."""
        categories = []
        for value in self.get_attributes("CATEGORIES"):
            categories.extend(item.strip() for item in value.split(",") if item.strip())
        return categories

    @property
    def alarms(self) -> list["Alarm"]:
        return [child for child in self.children if isinstance(child, Alarm)]


class Timezone(Component):
    """A VTIMEZONE block holding its DAYLIGHT/STANDARD rules."""

    kind = ComponentKind.TIMEZONE

    def validate_attribute(self, name: str, value: str, params: dict[str, str]) -> None:
        super().validate_attribute(name, value, params)
        if name.upper() == "TZID" and not value:
            raise AttributeRejectedError(
                "VTIMEZONE requires a non-empty TZID",
                expected=self.get_name(),
                actual=name,
            )

    @property
    def tzid(self) -> Optional[str]:
        return self.get_attribute("TZID")

    @property
    def rules(self) -> list["TimezoneRule"]:
        return [child for child in self.children if isinstance(child, TimezoneRule)]


class TimezoneRule(Component):
    """Shared base for the DAYLIGHT and STANDARD observance rules."""


class Daylight(TimezoneRule):
    kind = ComponentKind.DAYLIGHT


class Standard(TimezoneRule):
    kind = ComponentKind.STANDARD


class Todo(Component):
    kind = ComponentKind.TODO

    @property
    def alarms(self) -> list["Alarm"]:
        return [child for child in self.children if isinstance(child, Alarm)]


class Journal(Component):
    kind = ComponentKind.JOURNAL


class FreeBusy(Component):
    kind = ComponentKind.FREEBUSY


class Alarm(Component):
    kind = ComponentKind.ALARM


class UnknownComponent(Component):
    """Inert frame for a BEGIN type the parser does not know.

    Absorbs the attribute lines of the unknown block so they do not land on
    the enclosing component. Discarded when its END is reached.
    """

    def __init__(self, type_name: str) -> None:
        super().__init__()
        self.type_name = type_name

    def get_name(self) -> str:
        return self.type_name

    def validate_attribute(self, name: str, value: str, params: dict[str, str]) -> None:
        return None


class Calendar(Component):
    """The VCALENDAR root of a parsed document."""

    kind = ComponentKind.CALENDAR

    def __init__(self) -> None:
        super().__init__()
        self.events: list[Any] = []
        self.timezone: Optional[Timezone] = None

    def add_event(self, event: Any) -> None:
        self.events.append(event)

    def get_events(self) -> list[Any]:
        return list(self.events)

    @property
    def components(self) -> list[Any]:
        """Closed top-level components other than events and the timezone."""
        return list(self.children)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["timezone"] = self.timezone.to_dict() if self.timezone else None
        data["events"] = [_component_to_dict(event) for event in self.events]
        return data

    def __repr__(self) -> str:
        tzid = self.timezone.tzid if self.timezone else None
        return f"<Calendar events={len(self.events)} timezone={tzid}>"


# BEGIN type -> component class. VEVENT and VCALENDAR are resolved by the
# parser itself (configurable event class, single root calendar).
COMPONENT_CLASSES: dict[str, type[Component]] = {
    ComponentKind.TIMEZONE.value: Timezone,
    ComponentKind.DAYLIGHT.value: Daylight,
    ComponentKind.STANDARD.value: Standard,
    ComponentKind.TODO.value: Todo,
    ComponentKind.JOURNAL.value: Journal,
    ComponentKind.FREEBUSY.value: FreeBusy,
    ComponentKind.ALARM.value: Alarm,
}
