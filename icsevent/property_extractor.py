"""Property extraction for calendar event conversion.

Regroups one event's raw property list into a case-insensitive lookup from
property name to every occurrence of that property, keeping source order.
Cardinality is not enforced here; the event builder decides what to do with
repeated properties.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, NamedTuple, Optional

logger = logging.getLogger(__name__)

Params = tuple[tuple[str, str], ...]


class PropertyOccurrence(NamedTuple):
    """A single appearance of a property in the source list."""

    value: str
    params: Params
    position: int


def canonical_name(name: str) -> str:
    """Return the canonical (upper-cased) form of a property or parameter name."""
    return str(name).strip().upper()


def _param_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(_param_value(v) for v in value)
    text = str(value)
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        text = text[1:-1]
    return text


def normalize_params(params: Any) -> Params:
    """Normalize a parameter list or mapping into ordered (NAME, value) pairs.

    Accepts a sequence of pairs or any mapping (for example icalendar's
    ``Parameters``). Surrounding double quotes are removed from values and
    multi-valued parameters are joined with commas.
    """
    if not params:
        return ()
    items = params.items() if isinstance(params, Mapping) else params
    return tuple((canonical_name(name), _param_value(value)) for name, value in items)


def get_param(params: Params, name: str) -> Optional[str]:
    """Return the first value of parameter ``name`` (case-insensitive) or None."""
    wanted = canonical_name(name)
    for param_name, value in params:
        if canonical_name(param_name) == wanted:
            return value
    return None


class PropertyMap(Mapping[str, tuple[PropertyOccurrence, ...]]):
    """Read-only mapping from canonical property name to its occurrences.

    Lookups are case-insensitive. Iteration yields names in order of first
    appearance.
    """

    def __init__(self, grouped: dict[str, list[PropertyOccurrence]]):
        self._grouped = {name: tuple(occurrences) for name, occurrences in grouped.items()}

    def __getitem__(self, name: str) -> tuple[PropertyOccurrence, ...]:
        return self._grouped[canonical_name(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_name(name) in self._grouped

    def __iter__(self) -> Iterator[str]:
        return iter(self._grouped)

    def __len__(self) -> int:
        return len(self._grouped)

    def all(self, name: str) -> tuple[PropertyOccurrence, ...]:
        """Every occurrence of ``name`` in source order (empty when absent)."""
        return self._grouped.get(canonical_name(name), ())

    def first(self, name: str) -> Optional[PropertyOccurrence]:
        """The first occurrence of ``name`` or None."""
        occurrences = self.all(name)
        return occurrences[0] if occurrences else None

    def __repr__(self) -> str:
        counts = ", ".join(f"{name}={len(occ)}" for name, occ in self._grouped.items())
        return f"PropertyMap({counts})"


def extract_properties(raw_properties: Iterable[Sequence[Any]]) -> PropertyMap:
    """Group raw (name, value, params) triples by canonical property name.

    Args:
        raw_properties: One event's properties in source order. Each item is a
            ``RawProperty`` or any (name, value, params) sequence; params may be
            omitted.

    Returns:
        PropertyMap preserving multiplicity and order. Unknown names are kept.
    """
    grouped: dict[str, list[PropertyOccurrence]] = {}

    for position, raw in enumerate(raw_properties):
        name = raw[0]
        value = raw[1]
        params = raw[2] if len(raw) > 2 else ()

        if value is None:
            logger.debug("Dropping %s at position %d: no value", name, position)
            continue

        key = canonical_name(name)
        grouped.setdefault(key, []).append(
            PropertyOccurrence(value=str(value), params=normalize_params(params), position=position)
        )

    return PropertyMap(grouped)
