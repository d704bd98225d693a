"""Bridge from icalendar components to raw property triples.

``icalendar`` already splits calendar text into components; this module walks
one VEVENT's properties in their stored order and hands them to the event
builder as (name, value, params) triples.
"""

import logging
from typing import Any, Optional

from icalendar import Event as ICalEvent

from .config_loader import ConversionSettings
from .event_builder import build_event
from .models import Event, RawProperty
from .property_extractor import normalize_params

logger = logging.getLogger(__name__)

_COMPONENT_MARKERS = frozenset({"BEGIN", "END"})


def _serialize(value: Any) -> str:
    """Return the calendar text form of an icalendar property value."""
    if hasattr(value, "to_ical"):
        value = value.to_ical()
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def raw_properties_from_component(component: ICalEvent) -> list[RawProperty]:
    """List a component's own properties as RawProperty triples.

    Sub-components (VALARM, ...) are not descended into. Repeated properties
    such as ATTENDEE come out once per occurrence.
    """
    properties = []
    for name, value in component.property_items(recursive=False, sorted=False):
        if name in _COMPONENT_MARKERS:
            continue
        params = normalize_params(getattr(value, "params", None))
        properties.append(RawProperty(name=name, value=_serialize(value), params=params))

    logger.debug("Collected %d properties from %s component", len(properties), component.name)
    return properties


def event_from_component(
    component: ICalEvent, settings: Optional[ConversionSettings] = None
) -> Event:
    """Convert an icalendar VEVENT component into an Event."""
    return build_event(raw_properties_from_component(component), settings)
