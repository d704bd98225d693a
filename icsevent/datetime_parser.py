"""DATE and DATE-TIME parsing for calendar properties.

Handles the two literal forms used by calendar files:

- ``YYYYMMDD`` for all-day values
- ``YYYYMMDDTHHMMSS`` with an optional ``Z`` (UTC) or ``+HHMM``/``-HHMM`` suffix

Zone information can also come from a ``TZID`` parameter. Windows zone names
produced by Outlook/Exchange are mapped to IANA identifiers before lookup.
"""

import logging
import re
from datetime import UTC, date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ParseFailureKind, PropertyParseError
from .models import CalendarDateTime
from .property_extractor import Params, get_param

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$", re.ASCII)
_DATE_TIME_RE = re.compile(
    r"^(\d{4})(\d{2})(\d{2})T(\d{2})(\d{2})(\d{2})(?P<suffix>Z|[+-]\d{4})?$",
    re.IGNORECASE | re.ASCII,
)

# Common Windows timezone names used in ICS files from Outlook/Exchange
WINDOWS_TZ_MAP: dict[str, str] = {
    "Pacific Standard Time": "America/Los_Angeles",
    "Mountain Standard Time": "America/Denver",
    "Central Standard Time": "America/Chicago",
    "Eastern Standard Time": "America/New_York",
    "Alaskan Standard Time": "America/Anchorage",
    "Hawaiian Standard Time": "Pacific/Honolulu",
    "Arizona Standard Time": "America/Phoenix",
    "GMT Standard Time": "Europe/London",
    "Central European Standard Time": "Europe/Paris",
    "W. Europe Standard Time": "Europe/Berlin",
    "Romance Standard Time": "Europe/Paris",
    "China Standard Time": "Asia/Shanghai",
    "Tokyo Standard Time": "Asia/Tokyo",
    "India Standard Time": "Asia/Kolkata",
    "AUS Eastern Standard Time": "Australia/Sydney",
}


def windows_tz_to_iana(windows_tz: str) -> Optional[str]:
    """Map a Windows timezone name to its IANA identifier, if known."""
    return WINDOWS_TZ_MAP.get(windows_tz)


def resolve_timezone(tzid: str) -> Optional[ZoneInfo]:
    """Look up a TZID in the tz database.

    Returns None when the identifier is unknown; calendars often reference
    custom VTIMEZONE definitions that have no tz database entry.
    """
    name = windows_tz_to_iana(tzid) or tzid
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.debug("TZID %r not found in tz database; value stays floating", tzid)
        return None


def _invalid(value: str, detail: str) -> PropertyParseError:
    return PropertyParseError(ParseFailureKind.INVALID_DATE_TIME, detail, raw_value=value)


def _parse_offset(suffix: str) -> timedelta:
    sign = -1 if suffix[0] == "-" else 1
    hours = int(suffix[1:3])
    minutes = int(suffix[3:5])
    if hours > 23 or minutes > 59:
        raise ValueError(f"offset out of range: {suffix}")
    return sign * timedelta(hours=hours, minutes=minutes)


def parse_date_time(
    value: str,
    params: Params = (),
    default_timezone: Optional[str] = None,
) -> CalendarDateTime:
    """Parse a DATE or DATE-TIME property value.

    Args:
        value: Raw value, e.g. ``20240115`` or ``20240115T090000Z``
        params: Property parameters (VALUE and TZID are honoured)
        default_timezone: IANA zone applied to floating date-times

    Returns:
        CalendarDateTime tagged as all-day or date-time

    Raises:
        PropertyParseError: InvalidDateTime on malformed or out-of-range input
    """
    text = value.strip()
    value_type = (get_param(params, "VALUE") or "").upper()
    tzid = get_param(params, "TZID")

    date_match = _DATE_RE.match(text)
    if date_match:
        if value_type == "DATE-TIME":
            raise _invalid(value, f"VALUE=DATE-TIME but got a date: {value!r}")
        year, month, day = (int(part) for part in date_match.groups())
        try:
            return CalendarDateTime(value=date(year, month, day), all_day=True)
        except ValueError as e:
            raise _invalid(value, f"Invalid date {value!r}: {e}") from e

    dt_match = _DATE_TIME_RE.match(text)
    if dt_match is None:
        raise _invalid(value, f"Unrecognized date/date-time format: {value!r}")
    if value_type == "DATE":
        raise _invalid(value, f"VALUE=DATE but got a date-time: {value!r}")

    year, month, day, hour, minute, second = (int(part) for part in dt_match.groups()[:6])
    suffix = dt_match.group("suffix")
    try:
        naive = datetime(year, month, day, hour, minute, second)
    except ValueError as e:
        raise _invalid(value, f"Invalid date-time {value!r}: {e}") from e

    if suffix and suffix.upper() == "Z":
        if tzid:
            logger.debug("Ignoring TZID=%s on UTC value %s", tzid, value)
        return CalendarDateTime(value=naive.replace(tzinfo=UTC), is_utc=True)

    if suffix:
        try:
            offset = _parse_offset(suffix)
        except ValueError as e:
            raise _invalid(value, f"Invalid UTC offset in {value!r}: {e}") from e
        return CalendarDateTime(
            value=naive.replace(tzinfo=timezone(offset)), utc_offset=offset, tzid=tzid
        )

    if tzid:
        zone = resolve_timezone(tzid)
        aware = naive.replace(tzinfo=zone) if zone is not None else naive
        return CalendarDateTime(value=aware, tzid=tzid)

    if default_timezone:
        return CalendarDateTime(value=naive.replace(tzinfo=ZoneInfo(default_timezone)))

    return CalendarDateTime(value=naive)


def parse_date_time_list(
    value: str,
    params: Params = (),
    default_timezone: Optional[str] = None,
) -> list[CalendarDateTime]:
    """Parse a comma-separated list of DATE or DATE-TIME values (EXDATE, RDATE).

    For ``VALUE=PERIOD`` lists only the start of each ``start/end`` or
    ``start/duration`` period is kept.
    """
    parts = [part for part in value.split(",") if part.strip()]
    if not parts:
        raise _invalid(value, "Empty date/date-time list")
    if (get_param(params, "VALUE") or "").upper() == "PERIOD":
        parts = [part.split("/", 1)[0] for part in parts]
    return [parse_date_time(part, params, default_timezone) for part in parts]
