"""RRULE parsing into a structured RecurrenceRule.

Only the rule grammar is interpreted here; expanding a rule into concrete
occurrences is left to callers.
"""

import logging
import re
from typing import Any, Optional

from .datetime_parser import parse_date_time
from .exceptions import ParseFailureKind, PropertyParseError
from .models import Frequency, RecurrenceRule, Weekday, WeekdayNum

logger = logging.getLogger(__name__)

_WEEKDAY_NUM_RE = re.compile(
    r"^(?P<ordinal>[+-]?\d{1,2})?(?P<day>MO|TU|WE|TH|FR|SA|SU)$", re.ASCII
)
_INTEGER_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
_POSITIVE_RE = re.compile(r"^\d+$", re.ASCII)

# key -> (model field, lowest absolute value, highest absolute value, negatives allowed)
_INTEGER_LISTS: dict[str, tuple[str, int, int, bool]] = {
    "BYSECOND": ("by_second", 0, 60, False),
    "BYMINUTE": ("by_minute", 0, 59, False),
    "BYHOUR": ("by_hour", 0, 23, False),
    "BYMONTHDAY": ("by_month_day", 1, 31, True),
    "BYYEARDAY": ("by_year_day", 1, 366, True),
    "BYWEEKNO": ("by_week_no", 1, 53, True),
    "BYMONTH": ("by_month", 1, 12, False),
    "BYSETPOS": ("by_set_pos", 1, 366, True),
}


def _invalid(value: str, detail: str) -> PropertyParseError:
    return PropertyParseError(ParseFailureKind.INVALID_RECURRENCE, detail, raw_value=value)


def _positive_int(rule: str, key: str, raw: str) -> int:
    if not _POSITIVE_RE.match(raw) or int(raw) < 1:
        raise _invalid(rule, f"{key} must be a positive integer, got {raw!r}")
    return int(raw)


def _int_list(rule: str, key: str, raw: str) -> tuple[int, ...]:
    _, low, high, signed = _INTEGER_LISTS[key]
    numbers = []
    for item in raw.split(","):
        item = item.strip()
        if not _INTEGER_RE.match(item):
            raise _invalid(rule, f"{key} contains a non-integer: {item!r}")
        number = int(item)
        if number < 0 and not signed:
            raise _invalid(rule, f"{key} does not allow negative values: {item!r}")
        if not low <= abs(number) <= high:
            raise _invalid(rule, f"{key} value out of range: {item!r}")
        numbers.append(number)
    return tuple(numbers)


def _weekday_list(rule: str, raw: str) -> tuple[WeekdayNum, ...]:
    days = []
    for item in raw.split(","):
        match = _WEEKDAY_NUM_RE.match(item.strip().upper())
        if match is None:
            raise _invalid(rule, f"Invalid BYDAY entry: {item!r}")
        ordinal = match.group("ordinal")
        if ordinal is not None and not 1 <= abs(int(ordinal)) <= 53:
            raise _invalid(rule, f"BYDAY ordinal out of range: {item!r}")
        days.append(
            WeekdayNum(
                weekday=Weekday(match.group("day")),
                ordinal=int(ordinal) if ordinal is not None else None,
            )
        )
    return tuple(days)


def _weekday(rule: str, raw: str) -> Weekday:
    try:
        return Weekday(raw.strip().upper())
    except ValueError as e:
        raise _invalid(rule, f"Invalid WKST: {raw!r}") from e


def _split_parts(value: str) -> dict[str, str]:
    parts: dict[str, str] = {}
    for part in value.split(";"):
        part = part.strip()
        if not part:
            continue
        if "=" not in part:
            logger.debug("Ignoring RRULE part without '=': %r", part)
            continue
        key, raw = part.split("=", 1)
        key = key.strip().upper()
        if key in parts:
            raise _invalid(value, f"RRULE repeats {key}")
        parts[key] = raw.strip()
    return parts


def parse_recurrence_rule(value: str, default_timezone: Optional[str] = None) -> RecurrenceRule:
    """Parse an RRULE value such as ``FREQ=WEEKLY;INTERVAL=2;COUNT=5``.

    Unknown keys are ignored. When both COUNT and UNTIL are present, UNTIL is
    kept and COUNT dropped.

    Args:
        value: The RRULE property value
        default_timezone: Zone applied to a floating UNTIL

    Returns:
        RecurrenceRule

    Raises:
        PropertyParseError: InvalidRecurrence for a missing/unknown FREQ,
            repeated keys or malformed values
    """
    if not value or not value.strip():
        raise _invalid(value, "Empty RRULE string")

    parts = _split_parts(value)

    freq = parts.get("FREQ")
    if not freq:
        raise _invalid(value, "RRULE missing required FREQ parameter")
    try:
        frequency = Frequency(freq.upper())
    except ValueError as e:
        raise _invalid(value, f"Unknown FREQ: {freq!r}") from e

    fields: dict[str, Any] = {"frequency": frequency}

    for key, raw in parts.items():
        if key == "FREQ":
            continue
        if key == "INTERVAL":
            fields["interval"] = _positive_int(value, key, raw)
        elif key == "COUNT":
            fields["count"] = _positive_int(value, key, raw)
        elif key == "UNTIL":
            try:
                fields["until"] = parse_date_time(raw, default_timezone=default_timezone)
            except PropertyParseError as e:
                raise _invalid(value, f"Invalid UNTIL: {e.detail}") from e
        elif key == "BYDAY":
            fields["by_day"] = _weekday_list(value, raw)
        elif key == "WKST":
            fields["week_start"] = _weekday(value, raw)
        elif key in _INTEGER_LISTS:
            fields[_INTEGER_LISTS[key][0]] = _int_list(value, key, raw)
        else:
            logger.debug("Ignoring unknown RRULE key %s", key)

    if "count" in fields and "until" in fields:
        logger.warning("RRULE %r has both COUNT and UNTIL; using UNTIL", value)
        del fields["count"]

    return RecurrenceRule(**fields)
