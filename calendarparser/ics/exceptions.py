"""ICS-specific exceptions for error handling."""

from typing import Optional


class ICSError(Exception):
    """Base exception for ICS-related errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EventClassError(ICSError):
    """Exception raised when a configured event class cannot be used."""


class ICSParseError(ICSError):
    """Exception raised when ICS content cannot be parsed.

    Carries the offending content line and, for structural errors, the
    component type that was expected and the one actually found.
    """

    def __init__(
        self,
        message: str,
        line: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.expected = expected
        self.actual = actual


class MalformedLineError(ICSParseError):
    """Exception raised when a content line has no unescaped colon."""


class UnknownComponentTypeError(ICSParseError):
    """Exception raised when BEGIN names a component type that is not mapped."""


class StructureMismatchError(ICSParseError):
    """Exception raised when component nesting is broken.

    Either an END names a different type than the open component, or a
    line arrives while no component is open.
    """


class AttributeRejectedError(ICSParseError):
    """Exception raised when a component refuses an attribute value."""
