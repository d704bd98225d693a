"""TEXT, INTEGER and enumerated value parsing."""

import re
from enum import Enum
from typing import Optional, TypeVar

from .exceptions import ParseFailureKind, PropertyParseError

E = TypeVar("E", bound=Enum)

_ESCAPE_RE = re.compile(r"\\([\\;,nN])")
_INTEGER_RE = re.compile(r"^[+-]?\d+$", re.ASCII)


def _unescape_char(match: re.Match[str]) -> str:
    char = match.group(1)
    if char in "nN":
        return "\n"
    return char


def unescape_text(value: str) -> str:
    """Undo TEXT escaping: ``\\n``/``\\N``, ``\\,``, ``\\;`` and ``\\\\``.

    Unknown escape sequences are left as they are. Never fails.
    """
    return _ESCAPE_RE.sub(_unescape_char, value)


def parse_text_list(value: str) -> list[str]:
    """Split a comma-separated TEXT list on unescaped commas and unescape each item.

    Empty items are dropped.
    """
    items = []
    current: list[str] = []
    escaped = False
    for char in value:
        if escaped:
            current.append("\\" + char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == ",":
            items.append("".join(current))
            current = []
        else:
            current.append(char)
    if escaped:
        current.append("\\")
    items.append("".join(current))

    return [unescape_text(item).strip() for item in items if item.strip()]


def parse_integer(value: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    """Parse a signed decimal integer, optionally bounded.

    Raises:
        PropertyParseError: InvalidInteger
    """
    text = value.strip()
    if not _INTEGER_RE.match(text):
        raise PropertyParseError(
            ParseFailureKind.INVALID_INTEGER, f"Not an integer: {value!r}", raw_value=value
        )
    number = int(text)
    if minimum is not None and number < minimum:
        raise PropertyParseError(
            ParseFailureKind.INVALID_INTEGER,
            f"{number} is below the minimum {minimum}",
            raw_value=value,
        )
    if maximum is not None and number > maximum:
        raise PropertyParseError(
            ParseFailureKind.INVALID_INTEGER,
            f"{number} is above the maximum {maximum}",
            raw_value=value,
        )
    return number


def parse_enum(value: str, enum_cls: type[E]) -> E:
    """Match ``value`` case-insensitively against the values of ``enum_cls``.

    Raises:
        PropertyParseError: UnrecognizedEnumValue when nothing matches
    """
    wanted = value.strip().upper()
    for member in enum_cls:
        if str(member.value).upper() == wanted:
            return member
    allowed = ", ".join(str(member.value) for member in enum_cls)
    raise PropertyParseError(
        ParseFailureKind.UNRECOGNIZED_ENUM_VALUE,
        f"{value!r} is not one of {allowed}",
        raw_value=value,
    )
