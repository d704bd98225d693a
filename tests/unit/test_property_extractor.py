"""Unit tests for icsevent.property_extractor."""

import pytest

from icsevent.models import RawProperty
from icsevent.property_extractor import extract_properties, get_param, normalize_params

pytestmark = pytest.mark.unit


class TestExtractProperties:
    """Tests for extract_properties."""

    def test_groups_repeated_names_in_order(self):
        props = extract_properties(
            [
                RawProperty("UID", "evt-1"),
                RawProperty("ATTENDEE", "mailto:a@example.com"),
                RawProperty("SUMMARY", "Standup"),
                RawProperty("ATTENDEE", "mailto:b@example.com"),
            ]
        )

        attendees = props.all("ATTENDEE")
        assert [occ.value for occ in attendees] == ["mailto:a@example.com", "mailto:b@example.com"]
        assert [occ.position for occ in attendees] == [1, 3]
        assert list(props) == ["UID", "ATTENDEE", "SUMMARY"]

    def test_names_are_case_insensitive(self):
        props = extract_properties([("uid", "evt-1", ()), ("Summary", "x", ())])

        assert "UID" in props
        assert "summary" in props
        assert props["Uid"][0].value == "evt-1"
        assert props.first("SUMMARY").value == "x"

    def test_unknown_names_are_retained(self):
        props = extract_properties([("X-WR-ALT", "1", ()), ("FOO", "bar", ())])

        assert props.first("X-WR-ALT").value == "1"
        assert props.first("FOO").value == "bar"
        assert len(props) == 2

    def test_missing_name_returns_empty(self):
        props = extract_properties([])

        assert props.all("UID") == ()
        assert props.first("UID") is None
        assert "UID" not in props

    def test_params_may_be_omitted_or_a_mapping(self):
        props = extract_properties([("UID", "evt-1"), ("ATTENDEE", "mailto:a@x", {"cn": "A"})])

        assert props.first("UID").params == ()
        assert props.first("ATTENDEE").params == (("CN", "A"),)

    def test_none_values_are_dropped(self):
        props = extract_properties([("UID", "evt-1", ()), ("SUMMARY", None, ())])

        assert "SUMMARY" not in props


class TestParams:
    """Tests for parameter helpers."""

    def test_normalize_strips_quotes_and_joins_lists(self):
        params = normalize_params(
            [("tzid", '"Europe/Berlin"'), ("DELEGATED-TO", ["mailto:a@x", "mailto:b@x"])]
        )

        assert params == (("TZID", "Europe/Berlin"), ("DELEGATED-TO", "mailto:a@x,mailto:b@x"))

    def test_get_param_first_match_case_insensitive(self):
        params = (("CN", "First"), ("cn", "Second"))

        assert get_param(params, "cn") == "First"
        assert get_param(params, "ROLE") is None
