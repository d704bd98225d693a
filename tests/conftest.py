"""Shared fixtures for icsevent tests."""

import pytest

from icsevent import RawProperty


@pytest.fixture
def basic_properties() -> list[RawProperty]:
    """A small, valid event as an upstream parser would hand it over."""
    return [
        RawProperty("UID", "evt-1"),
        RawProperty("SUMMARY", "Team Meeting"),
        RawProperty("DTSTART", "20240115T090000Z"),
        RawProperty("DTEND", "20240115T100000Z"),
        RawProperty(
            "ATTENDEE",
            "mailto:alice@example.com",
            (("CN", "Alice"), ("ROLE", "REQ-PARTICIPANT"), ("PARTSTAT", "ACCEPTED")),
        ),
        RawProperty("ATTENDEE", "mailto:bob@example.com", (("CN", "Bob"),)),
    ]
