"""Event assembly for calendar event conversion.

Turns one event's raw property list into an immutable ``Event``. Properties
are processed in a fixed order so the first failure reported for a given
input is always the same one.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, NamedTuple, Optional

from .config_loader import ConversionSettings
from .datetime_parser import parse_date_time, parse_date_time_list
from .duration_parser import parse_duration
from .exceptions import (
    FieldParseError,
    InvalidTimeRangeError,
    MissingUidError,
    PropertyParseError,
    UnknownPropertyError,
)
from .models import CalendarDateTime, Event, EventStatus, EventTransparency
from .participant_parser import parse_participant
from .property_extractor import Params, PropertyMap, PropertyOccurrence, extract_properties
from .rrule_parser import parse_recurrence_rule
from .text_parser import parse_enum, parse_integer, parse_text_list, unescape_text

logger = logging.getLogger(__name__)

# Properties understood by the format but not represented on Event
IGNORED_PROPERTIES = frozenset(
    {
        "CLASS",
        "EXRULE",
        "URL",
        "GEO",
        "RESOURCES",
        "CONTACT",
        "RELATED-TO",
        "REQUEST-STATUS",
    }
)


class _FieldSpec(NamedTuple):
    property_name: str
    field: str
    parse: Callable[[str, Params], Any]
    repeated: bool = False


def _text(value: str, params: Params) -> str:
    return unescape_text(value)


class EventBuilder:
    """Builds typed events from raw calendar properties."""

    def __init__(self, settings: Optional[ConversionSettings] = None):
        """Initialize the builder.

        Args:
            settings: Conversion settings; defaults are used when omitted
        """
        self.settings = settings or ConversionSettings()
        self._fields = self._field_specs()

    def _field_specs(self) -> tuple[_FieldSpec, ...]:
        tz = self.settings.default_timezone

        def date_time(value: str, params: Params) -> CalendarDateTime:
            return parse_date_time(value, params, tz)

        return (
            _FieldSpec("DTSTAMP", "dtstamp", date_time),
            _FieldSpec("CREATED", "created", date_time),
            _FieldSpec("LAST-MODIFIED", "last_modified", date_time),
            _FieldSpec("SUMMARY", "summary", _text),
            _FieldSpec("DESCRIPTION", "description", _text),
            _FieldSpec("LOCATION", "location", _text),
            _FieldSpec("COMMENT", "comment", _text),
            _FieldSpec("DTSTART", "start", date_time),
            _FieldSpec("DTEND", "end", date_time),
            _FieldSpec("DURATION", "duration", lambda v, p: parse_duration(v)),
            _FieldSpec("RECURRENCE-ID", "recurrence_id", date_time),
            _FieldSpec("RRULE", "recurrence_rule", lambda v, p: parse_recurrence_rule(v, tz)),
            _FieldSpec(
                "RDATE",
                "recurrence_dates",
                lambda v, p: parse_date_time_list(v, p, tz),
                repeated=True,
            ),
            _FieldSpec(
                "EXDATE",
                "exception_dates",
                lambda v, p: parse_date_time_list(v, p, tz),
                repeated=True,
            ),
            _FieldSpec("STATUS", "status", lambda v, p: parse_enum(v, EventStatus)),
            _FieldSpec("TRANSP", "transparency", lambda v, p: parse_enum(v, EventTransparency)),
            _FieldSpec("PRIORITY", "priority", lambda v, p: parse_integer(v, 0, 9)),
            _FieldSpec("SEQUENCE", "sequence", lambda v, p: parse_integer(v, minimum=0)),
            _FieldSpec("CATEGORIES", "categories", lambda v, p: parse_text_list(v), repeated=True),
            _FieldSpec("ORGANIZER", "organizer", parse_participant),
            _FieldSpec("ATTENDEE", "attendees", lambda v, p: [parse_participant(v, p)], repeated=True),
            _FieldSpec("ATTACH", "attachments", lambda v, p: [v.strip()], repeated=True),
        )

    @property
    def known_properties(self) -> frozenset[str]:
        """Names the builder maps onto Event fields, plus UID."""
        return frozenset({"UID"} | {spec.property_name for spec in self._fields})

    def build(self, raw_properties: Iterable[Sequence[Any]]) -> Event:
        """Convert one event's raw properties into an Event.

        Args:
            raw_properties: (name, value, params) triples in source order

        Returns:
            Fully populated, immutable Event

        Raises:
            MissingUidError: UID absent or empty
            FieldParseError: a present property failed its parser
            UnknownPropertyError: strict mode and an unrecognized property was found
            InvalidTimeRangeError: the event ends before it starts
        """
        props = extract_properties(raw_properties)

        fields: dict[str, Any] = {"uid": self._parse_uid(props)}

        for spec in self._fields:
            occurrences = props.all(spec.property_name)
            if not occurrences:
                continue
            if spec.repeated:
                fields[spec.field] = tuple(self._parse_repeated(spec, occurrences))
            else:
                if len(occurrences) > 1:
                    logger.warning(
                        "Event %s has %d %s properties; using the first",
                        fields["uid"],
                        len(occurrences),
                        spec.property_name,
                    )
                fields[spec.field] = self._parse_occurrence(spec, occurrences[0])

        if self.settings.reject_unknown_properties:
            self._check_unknown(props)

        self._check_time_range(fields)

        event = Event(**fields)
        logger.debug("Converted event %s from %d property names", event.uid, len(props))
        return event

    def _parse_uid(self, props: PropertyMap) -> str:
        occurrence = props.first("UID")
        if occurrence is None:
            raise MissingUidError("Event has no UID", field="uid", property_name="UID")

        uid = unescape_text(occurrence.value)
        if not uid.strip():
            raise MissingUidError(
                "Event UID is empty",
                field="uid",
                property_name="UID",
                raw_value=occurrence.value,
            )
        if len(props.all("UID")) > 1:
            logger.warning("Event %s has several UID properties; using the first", uid)
        return uid

    def _parse_occurrence(self, spec: _FieldSpec, occurrence: PropertyOccurrence) -> Any:
        try:
            return spec.parse(occurrence.value, occurrence.params)
        except PropertyParseError as e:
            raise FieldParseError(
                f"Invalid {spec.property_name}: {e.detail}",
                parse_kind=e.kind,
                field=spec.field,
                property_name=spec.property_name,
                detail=e.detail,
                raw_value=occurrence.value,
            ) from e

    def _parse_repeated(
        self, spec: _FieldSpec, occurrences: Sequence[PropertyOccurrence]
    ) -> list[Any]:
        lenient = spec.property_name == "ATTENDEE" and self.settings.skip_malformed_attendees
        values: list[Any] = []
        for occurrence in occurrences:
            try:
                values.extend(self._parse_occurrence(spec, occurrence))
            except FieldParseError as e:
                if not lenient:
                    raise
                logger.warning(
                    "Skipping malformed %s at position %d: %s",
                    spec.property_name,
                    occurrence.position,
                    e.detail,
                )
        return values

    def _check_unknown(self, props: PropertyMap) -> None:
        known = self.known_properties
        for name in props:
            if name in known or name in IGNORED_PROPERTIES or name.startswith("X-"):
                continue
            raise UnknownPropertyError(
                f"Unknown property: {name}",
                property_name=name,
                raw_value=props[name][0].value,
            )

    def _check_time_range(self, fields: dict[str, Any]) -> None:
        start: Optional[CalendarDateTime] = fields.get("start")
        end: Optional[CalendarDateTime] = fields.get("end")
        duration = fields.get("duration")

        if start is not None and end is not None and end.to_datetime() < start.to_datetime():
            raise InvalidTimeRangeError(
                f"Event {fields['uid']} ends before it starts",
                field="end",
                property_name="DTEND",
                detail=f"start={start.value.isoformat()} end={end.value.isoformat()}",
            )

        if start is not None and duration is not None and duration.total_seconds() < 0:
            raise InvalidTimeRangeError(
                f"Event {fields['uid']} has a negative duration",
                field="duration",
                property_name="DURATION",
                detail=f"duration={duration}",
            )


def build_event(
    raw_properties: Iterable[Sequence[Any]],
    settings: Optional[ConversionSettings] = None,
) -> Event:
    """Convert one event's raw properties into an Event.

    See :meth:`EventBuilder.build` for the failure modes.
    """
    return EventBuilder(settings).build(raw_properties)
