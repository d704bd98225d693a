"""Unit tests for icsevent.participant_parser."""

import pytest

from icsevent.exceptions import ParseFailureKind, PropertyParseError
from icsevent.models import ParticipantRole, ParticipationStatus
from icsevent.participant_parser import parse_participant

pytestmark = pytest.mark.unit


class TestParseParticipant:
    """Tests for parse_participant."""

    def test_parse_participant_basic(self):
        """Test parsing a basic attendee."""
        result = parse_participant(
            "mailto:john.doe@example.com",
            (("CN", "John Doe"), ("ROLE", "REQ-PARTICIPANT"), ("PARTSTAT", "ACCEPTED")),
        )

        assert result.address == "john.doe@example.com"
        assert result.scheme == "mailto"
        assert result.email == "john.doe@example.com"
        assert result.common_name == "John Doe"
        assert result.role == ParticipantRole.REQUIRED
        assert result.participation_status == ParticipationStatus.ACCEPTED

    def test_parse_participant_optional_needs_action(self):
        result = parse_participant(
            "mailto:jane.smith@example.com",
            (("ROLE", "OPT-PARTICIPANT"), ("PARTSTAT", "NEEDS-ACTION"), ("RSVP", "TRUE")),
        )

        assert result.role == ParticipantRole.OPTIONAL
        assert result.participation_status == ParticipationStatus.NEEDS_ACTION
        assert result.rsvp is True

    def test_parse_participant_resource(self):
        result = parse_participant(
            "mailto:conference-room@example.com",
            (("CN", "Conference Room A"), ("ROLE", "NON-PARTICIPANT")),
        )

        assert result.role == ParticipantRole.NON_PARTICIPANT
        assert result.display_name == "Conference Room A"

    def test_scheme_is_case_insensitive(self):
        result = parse_participant("MAILTO:bob@example.com")

        assert result.scheme == "mailto"
        assert result.address == "bob@example.com"

    def test_address_without_scheme(self):
        result = parse_participant("bob@example.com")

        assert result.scheme is None
        assert result.address == "bob@example.com"
        assert result.email is None

    def test_non_mailto_scheme(self):
        result = parse_participant("urn:uuid:1234-5678")

        assert result.scheme == "urn"
        assert result.address == "uuid:1234-5678"
        assert result.email is None

    def test_parameter_names_are_case_insensitive(self):
        result = parse_participant("mailto:a@example.com", (("cn", "Alice"), ("partstat", "declined")))

        assert result.common_name == "Alice"
        assert result.participation_status == ParticipationStatus.DECLINED

    def test_display_name_falls_back_to_local_part(self):
        result = parse_participant("mailto:alice@example.com")

        assert result.common_name is None
        assert result.display_name == "alice"

    def test_unrecognized_parameter_values_are_left_unset(self):
        result = parse_participant(
            "mailto:a@example.com",
            (("ROLE", "X-OBSERVER"), ("PARTSTAT", "MAYBE"), ("RSVP", "perhaps")),
        )

        assert result.role is None
        assert result.participation_status is None
        assert result.rsvp is None

    @pytest.mark.parametrize("value", ["", "   ", "mailto:", "mailto:   "])
    def test_missing_address_fails(self, value):
        with pytest.raises(PropertyParseError) as exc_info:
            parse_participant(value, (("CN", "Nobody"),))

        assert exc_info.value.kind == ParseFailureKind.INVALID_PARTICIPANT
