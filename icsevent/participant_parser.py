"""ATTENDEE and ORGANIZER parsing.

A participant value is a calendar user address, normally ``mailto:`` URI,
with CN/ROLE/PARTSTAT/RSVP parameters.
"""

import logging
import re
from enum import Enum
from typing import Optional, TypeVar

from .exceptions import ParseFailureKind, PropertyParseError
from .models import Participant, ParticipantRole, ParticipationStatus
from .property_extractor import Params, get_param

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]*):(?P<address>.*)$", re.DOTALL)

E = TypeVar("E", bound=Enum)


def _lookup(enum_cls: type[E], param: str, raw: Optional[str]) -> Optional[E]:
    if raw is None:
        return None
    try:
        return enum_cls(raw.strip().upper())
    except ValueError:
        logger.debug("Unrecognized %s value %r; leaving unset", param, raw)
        return None


def _parse_rsvp(raw: Optional[str]) -> Optional[bool]:
    if raw is None:
        return None
    flag = raw.strip().upper()
    if flag == "TRUE":
        return True
    if flag == "FALSE":
        return False
    logger.debug("Unrecognized RSVP value %r; leaving unset", raw)
    return None


def parse_participant(value: str, params: Params = ()) -> Participant:
    """Parse an ATTENDEE or ORGANIZER property.

    Args:
        value: Calendar user address, e.g. ``mailto:john.doe@example.com``
        params: Property parameters

    Returns:
        Participant

    Raises:
        PropertyParseError: InvalidParticipant when no address remains after
            removing the scheme prefix
    """
    text = value.strip()
    scheme = None
    address = text

    match = _SCHEME_RE.match(text)
    if match:
        scheme = match.group("scheme").lower()
        address = match.group("address").strip()

    if not address:
        raise PropertyParseError(
            ParseFailureKind.INVALID_PARTICIPANT,
            f"Participant has no address: {value!r}",
            raw_value=value,
        )

    common_name = get_param(params, "CN")

    return Participant(
        address=address,
        scheme=scheme,
        common_name=common_name or None,
        role=_lookup(ParticipantRole, "ROLE", get_param(params, "ROLE")),
        participation_status=_lookup(
            ParticipationStatus, "PARTSTAT", get_param(params, "PARTSTAT")
        ),
        rsvp=_parse_rsvp(get_param(params, "RSVP")),
    )
