"""icsevent - typed calendar events from raw calendar properties.

Typical use::

    from icsevent import build_event

    event = build_event([
        ("UID", "evt-1", ()),
        ("DTSTART", "20240115T090000Z", ()),
        ("ATTENDEE", "mailto:jane@example.com", (("CN", "Jane"),)),
    ])
"""

from .component_adapter import event_from_component, raw_properties_from_component
from .config_loader import ConversionSettings, load_settings
from .event_builder import EventBuilder, build_event
from .event_logging import configure_logging
from .exceptions import (
    ConversionErrorKind,
    EventConversionError,
    FieldParseError,
    InvalidTimeRangeError,
    MissingUidError,
    ParseFailureKind,
    PropertyParseError,
    UnknownPropertyError,
)
from .models import (
    CalendarDateTime,
    Event,
    EventStatus,
    EventTransparency,
    Frequency,
    Participant,
    ParticipantRole,
    ParticipationStatus,
    RawProperty,
    RecurrenceRule,
    Weekday,
    WeekdayNum,
)
from .property_extractor import PropertyMap, PropertyOccurrence, extract_properties

__version__ = "1.0.0"

__all__ = [
    "CalendarDateTime",
    "ConversionErrorKind",
    "ConversionSettings",
    "Event",
    "EventBuilder",
    "EventConversionError",
    "EventStatus",
    "EventTransparency",
    "FieldParseError",
    "Frequency",
    "InvalidTimeRangeError",
    "MissingUidError",
    "ParseFailureKind",
    "Participant",
    "ParticipantRole",
    "ParticipationStatus",
    "PropertyMap",
    "PropertyOccurrence",
    "PropertyParseError",
    "RawProperty",
    "RecurrenceRule",
    "UnknownPropertyError",
    "Weekday",
    "WeekdayNum",
    "build_event",
    "configure_logging",
    "event_from_component",
    "extract_properties",
    "load_settings",
    "raw_properties_from_component",
]
