"""Typed calendar event models."""

from datetime import UTC, date, datetime, time, timedelta
from enum import Enum
from typing import NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RawProperty(NamedTuple):
    """One property as handed over by the upstream calendar-format parser."""

    name: str
    value: str
    params: tuple[tuple[str, str], ...] = ()


class EventStatus(str, Enum):
    """Confirmation state of an event (STATUS)."""

    TENTATIVE = "TENTATIVE"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class EventTransparency(str, Enum):
    """Whether an event blocks time on a calendar (TRANSP)."""

    OPAQUE = "OPAQUE"
    TRANSPARENT = "TRANSPARENT"


class ParticipantRole(str, Enum):
    """Participation role of an attendee (ROLE parameter)."""

    CHAIR = "CHAIR"
    REQUIRED = "REQ-PARTICIPANT"
    OPTIONAL = "OPT-PARTICIPANT"
    NON_PARTICIPANT = "NON-PARTICIPANT"


class ParticipationStatus(str, Enum):
    """Reply state of an attendee (PARTSTAT parameter)."""

    NEEDS_ACTION = "NEEDS-ACTION"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    TENTATIVE = "TENTATIVE"
    DELEGATED = "DELEGATED"


class Frequency(str, Enum):
    """Recurrence frequency (FREQ)."""

    SECONDLY = "SECONDLY"
    MINUTELY = "MINUTELY"
    HOURLY = "HOURLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class Weekday(str, Enum):
    """Two-letter weekday codes used by BYDAY and WKST."""

    MONDAY = "MO"
    TUESDAY = "TU"
    WEDNESDAY = "WE"
    THURSDAY = "TH"
    FRIDAY = "FR"
    SATURDAY = "SA"
    SUNDAY = "SU"


class CalendarDateTime(BaseModel):
    """A DATE or DATE-TIME value.

    ``value`` is a plain ``date`` for all-day values and a ``datetime``
    otherwise. Date-times are aware when a UTC marker, explicit offset or a
    resolvable TZID was present, and naive (floating) otherwise.
    """

    model_config = ConfigDict(frozen=True)

    value: Union[datetime, date] = Field(..., description="Parsed date or date-time")
    all_day: bool = Field(default=False, description="True for DATE values")
    is_utc: bool = Field(default=False, description="Value carried a trailing Z")
    tzid: Optional[str] = Field(default=None, description="TZID parameter as given")
    utc_offset: Optional[timedelta] = Field(
        default=None, description="Explicit +HHMM/-HHMM offset from the value"
    )

    @model_validator(mode="after")
    def _check_all_day_matches_value(self) -> "CalendarDateTime":
        is_plain_date = not isinstance(self.value, datetime)
        if self.all_day != is_plain_date:
            raise ValueError("all_day must be set exactly when value is a date")
        return self

    @property
    def is_floating(self) -> bool:
        """True for date-times without any zone information."""
        return isinstance(self.value, datetime) and self.value.tzinfo is None

    def to_datetime(self) -> datetime:
        """Return an aware datetime suitable for ordering.

        Dates become midnight; naive values are treated as UTC.
        """
        value = self.value
        if not isinstance(value, datetime):
            value = datetime.combine(value, time.min)
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value

    def shifted(self, delta: timedelta) -> "CalendarDateTime":
        """Return a copy moved by ``delta``.

        All-day values stay all-day only when ``delta`` is a whole number of days.
        """
        if self.all_day:
            if delta % timedelta(days=1) == timedelta(0):
                return self.model_copy(update={"value": self.value + delta})
            moved = datetime.combine(self.value, time.min) + delta
            return CalendarDateTime(value=moved, all_day=False)
        return self.model_copy(update={"value": self.value + delta})


class WeekdayNum(BaseModel):
    """A BYDAY entry such as ``MO``, ``2TU`` or ``-1FR``."""

    model_config = ConfigDict(frozen=True)

    weekday: Weekday
    ordinal: Optional[int] = None


class RecurrenceRule(BaseModel):
    """Structured form of an RRULE value."""

    model_config = ConfigDict(frozen=True)

    frequency: Frequency
    interval: int = 1
    count: Optional[int] = None
    until: Optional[CalendarDateTime] = None
    by_second: tuple[int, ...] = ()
    by_minute: tuple[int, ...] = ()
    by_hour: tuple[int, ...] = ()
    by_day: tuple[WeekdayNum, ...] = ()
    by_month_day: tuple[int, ...] = ()
    by_year_day: tuple[int, ...] = ()
    by_week_no: tuple[int, ...] = ()
    by_month: tuple[int, ...] = ()
    by_set_pos: tuple[int, ...] = ()
    week_start: Optional[Weekday] = None

    @property
    def is_bounded(self) -> bool:
        """True when the rule ends by COUNT or UNTIL."""
        return self.count is not None or self.until is not None


class Participant(BaseModel):
    """An attendee or organizer."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Calendar user address without scheme")
    scheme: Optional[str] = Field(default=None, description="URI scheme, e.g. 'mailto'")
    common_name: Optional[str] = Field(default=None, description="CN parameter")
    role: Optional[ParticipantRole] = Field(default=None, description="ROLE parameter")
    participation_status: Optional[ParticipationStatus] = Field(
        default=None, description="PARTSTAT parameter"
    )
    rsvp: Optional[bool] = Field(default=None, description="RSVP parameter")

    @property
    def email(self) -> Optional[str]:
        """Email address when the scheme is mailto."""
        if self.scheme == "mailto":
            return self.address
        return None

    @property
    def display_name(self) -> str:
        """Common name, or the local part of the address."""
        if self.common_name:
            return self.common_name
        return self.address.split("@")[0]


class Event(BaseModel):
    """Typed calendar event."""

    model_config = ConfigDict(frozen=True)

    # Identity and text
    uid: str = Field(..., description="UID")
    summary: Optional[str] = Field(default=None, description="SUMMARY")
    description: Optional[str] = Field(default=None, description="DESCRIPTION")
    location: Optional[str] = Field(default=None, description="LOCATION")
    comment: Optional[str] = Field(default=None, description="COMMENT")

    # Time information
    start: Optional[CalendarDateTime] = Field(default=None, description="DTSTART")
    end: Optional[CalendarDateTime] = Field(default=None, description="DTEND")
    duration: Optional[timedelta] = Field(default=None, description="DURATION")

    # Metadata timestamps
    created: Optional[CalendarDateTime] = Field(default=None, description="CREATED")
    last_modified: Optional[CalendarDateTime] = Field(default=None, description="LAST-MODIFIED")
    dtstamp: Optional[CalendarDateTime] = Field(default=None, description="DTSTAMP")

    # Recurrence
    recurrence_id: Optional[CalendarDateTime] = Field(default=None, description="RECURRENCE-ID")
    recurrence_rule: Optional[RecurrenceRule] = Field(default=None, description="RRULE")
    recurrence_dates: tuple[CalendarDateTime, ...] = Field(default=(), description="RDATE")
    exception_dates: tuple[CalendarDateTime, ...] = Field(default=(), description="EXDATE")

    # People
    organizer: Optional[Participant] = Field(default=None, description="ORGANIZER")
    attendees: tuple[Participant, ...] = Field(default=(), description="ATTENDEE, source order")

    # Scheduling state
    sequence: Optional[int] = Field(default=None, description="SEQUENCE")
    priority: Optional[int] = Field(default=None, description="PRIORITY")
    status: Optional[EventStatus] = Field(default=None, description="STATUS")
    transparency: Optional[EventTransparency] = Field(default=None, description="TRANSP")

    categories: tuple[str, ...] = Field(default=(), description="CATEGORIES")
    attachments: tuple[str, ...] = Field(default=(), description="ATTACH")

    @property
    def is_all_day(self) -> bool:
        return self.start is not None and self.start.all_day

    @property
    def is_recurring(self) -> bool:
        return self.recurrence_rule is not None or bool(self.recurrence_dates)

    @property
    def is_cancelled(self) -> bool:
        return self.status == EventStatus.CANCELLED

    @property
    def revision(self) -> int:
        """SEQUENCE with the calendar default of 0."""
        return self.sequence or 0

    @property
    def effective_end(self) -> Optional[CalendarDateTime]:
        """DTEND if given, otherwise DTSTART + DURATION."""
        if self.end is not None:
            return self.end
        if self.start is not None and self.duration is not None:
            return self.start.shifted(self.duration)
        return None
