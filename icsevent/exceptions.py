"""Exception hierarchy for calendar event conversion.

Field parsers raise :class:`PropertyParseError`. The event builder translates
those into :class:`EventConversionError` subclasses so callers can tell which
field failed without holding on to the raw property list.
"""

from enum import Enum
from typing import Optional


class ParseFailureKind(str, Enum):
    """Why a single property value could not be parsed."""

    INVALID_DATE_TIME = "InvalidDateTime"
    INVALID_DURATION = "InvalidDuration"
    INVALID_RECURRENCE = "InvalidRecurrence"
    INVALID_PARTICIPANT = "InvalidParticipant"
    UNRECOGNIZED_ENUM_VALUE = "UnrecognizedEnumValue"
    INVALID_INTEGER = "InvalidInteger"


class ConversionErrorKind(str, Enum):
    """Why a whole event could not be converted."""

    MISSING_UID = "MissingUid"
    FIELD_PARSE_ERROR = "FieldParseError"
    INVALID_TIME_RANGE = "InvalidTimeRange"
    UNKNOWN_PROPERTY = "UnknownProperty"


class PropertyParseError(ValueError):
    """Raised by a field parser when a raw value does not match its grammar."""

    def __init__(self, kind: ParseFailureKind, detail: str, raw_value: Optional[str] = None):
        super().__init__(detail)
        self.kind = kind
        self.detail = detail
        self.raw_value = raw_value

    def __repr__(self) -> str:
        return f"PropertyParseError({self.kind.value}, {self.detail!r})"


class EventConversionError(Exception):
    """Base exception for all event conversion failures.

    Attributes:
        message: Human readable description
        kind: Structured failure category
        field: Name of the Event field involved, if any
        property_name: Calendar property name involved, if any
        detail: Extra diagnostic text from the failing parser or check
        raw_value: The offending raw value, kept for debugging
    """

    kind: ConversionErrorKind

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        property_name: Optional[str] = None,
        detail: Optional[str] = None,
        raw_value: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.property_name = property_name
        self.detail = detail
        self.raw_value = raw_value


class MissingUidError(EventConversionError):
    """Raised when the UID property is absent or empty."""

    kind = ConversionErrorKind.MISSING_UID


class FieldParseError(EventConversionError):
    """Raised when a present property fails its type-specific parser."""

    kind = ConversionErrorKind.FIELD_PARSE_ERROR

    def __init__(
        self,
        message: str,
        parse_kind: ParseFailureKind,
        field: Optional[str] = None,
        property_name: Optional[str] = None,
        detail: Optional[str] = None,
        raw_value: Optional[str] = None,
    ):
        super().__init__(
            message,
            field=field,
            property_name=property_name,
            detail=detail,
            raw_value=raw_value,
        )
        self.parse_kind = parse_kind


class InvalidTimeRangeError(EventConversionError):
    """Raised when an event ends before it starts."""

    kind = ConversionErrorKind.INVALID_TIME_RANGE


class UnknownPropertyError(EventConversionError):
    """Raised in strict mode for properties that are neither known nor X- extensions."""

    kind = ConversionErrorKind.UNKNOWN_PROPERTY
