"""DURATION value parsing."""

import re
from datetime import timedelta

from .exceptions import ParseFailureKind, PropertyParseError

# [+-]P followed by either weeks alone, or days and/or a time part.
# A "T" must be followed by at least one time component.
_DURATION_RE = re.compile(
    r"^(?P<sign>[+-])?P"
    r"(?:(?P<weeks>\d+)W"
    r"|(?:(?P<days>\d+)D)?"
    r"(?:T(?=\d)(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?)$",
    re.IGNORECASE | re.ASCII,
)


def parse_duration(value: str) -> timedelta:
    """Parse an ISO-8601 style calendar duration such as ``-P1DT2H`` or ``P2W``.

    Raises:
        PropertyParseError: InvalidDuration when the grammar does not match or
            no component is present (``P``)
    """
    text = value.strip()
    match = _DURATION_RE.match(text)
    if match is None:
        raise PropertyParseError(
            ParseFailureKind.INVALID_DURATION, f"Invalid duration format: {value!r}", value
        )

    parts = {
        name: int(number)
        for name, number in match.groupdict().items()
        if name != "sign" and number is not None
    }
    if not parts:
        raise PropertyParseError(
            ParseFailureKind.INVALID_DURATION, f"Duration has no components: {value!r}", value
        )

    try:
        duration = timedelta(**parts)
    except OverflowError as e:
        raise PropertyParseError(
            ParseFailureKind.INVALID_DURATION, f"Duration out of range: {value!r}", value
        ) from e
    if match.group("sign") == "-":
        return -duration
    return duration
