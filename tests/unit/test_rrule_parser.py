"""Unit tests for icsevent.rrule_parser."""

import logging
from datetime import UTC, date, datetime

import pytest

from icsevent.exceptions import ParseFailureKind, PropertyParseError
from icsevent.models import Frequency, Weekday, WeekdayNum
from icsevent.rrule_parser import parse_recurrence_rule

pytestmark = pytest.mark.unit


class TestParseRecurrenceRule:
    """Tests for parse_recurrence_rule."""

    def test_weekly_with_interval_and_count(self):
        rule = parse_recurrence_rule("FREQ=WEEKLY;INTERVAL=2;COUNT=5")

        assert rule.frequency == Frequency.WEEKLY
        assert rule.interval == 2
        assert rule.count == 5
        assert rule.until is None
        assert rule.is_bounded is True

    def test_defaults(self):
        rule = parse_recurrence_rule("FREQ=DAILY")

        assert rule.interval == 1
        assert rule.count is None
        assert rule.by_day == ()
        assert rule.is_bounded is False

    def test_keys_and_values_are_case_insensitive(self):
        rule = parse_recurrence_rule("freq=monthly;byday=mo,-1fr")

        assert rule.frequency == Frequency.MONTHLY
        assert rule.by_day == (
            WeekdayNum(weekday=Weekday.MONDAY),
            WeekdayNum(weekday=Weekday.FRIDAY, ordinal=-1),
        )

    def test_by_day_with_ordinals(self):
        rule = parse_recurrence_rule("FREQ=MONTHLY;BYDAY=2TU,+3WE")

        assert rule.by_day[0].ordinal == 2
        assert rule.by_day[0].weekday == Weekday.TUESDAY
        assert rule.by_day[1].ordinal == 3

    def test_integer_lists(self):
        rule = parse_recurrence_rule(
            "FREQ=YEARLY;BYMONTH=1,7;BYMONTHDAY=1,-1;BYSETPOS=-1;BYHOUR=9;BYMINUTE=0,30"
        )

        assert rule.by_month == (1, 7)
        assert rule.by_month_day == (1, -1)
        assert rule.by_set_pos == (-1,)
        assert rule.by_hour == (9,)
        assert rule.by_minute == (0, 30)

    def test_until_date_time(self):
        rule = parse_recurrence_rule("FREQ=DAILY;UNTIL=20240131T235959Z")

        assert rule.until is not None
        assert rule.until.value == datetime(2024, 1, 31, 23, 59, 59, tzinfo=UTC)

    def test_until_date(self):
        rule = parse_recurrence_rule("FREQ=DAILY;UNTIL=20240131")

        assert rule.until.value == date(2024, 1, 31)
        assert rule.until.all_day is True

    def test_until_wins_over_count(self, caplog):
        with caplog.at_level(logging.WARNING, logger="icsevent.rrule_parser"):
            rule = parse_recurrence_rule("FREQ=DAILY;COUNT=10;UNTIL=20240131")

        assert rule.count is None
        assert rule.until is not None
        assert "COUNT and UNTIL" in caplog.text

    def test_week_start(self):
        rule = parse_recurrence_rule("FREQ=WEEKLY;WKST=SU")

        assert rule.week_start == Weekday.SUNDAY

    def test_unknown_keys_and_bare_parts_are_ignored(self):
        rule = parse_recurrence_rule("FREQ=DAILY;X-NAME=foo;RSCALE=GREGORIAN;JUNK;")

        assert rule.frequency == Frequency.DAILY

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "INTERVAL=2;COUNT=5",
            "FREQ=",
            "FREQ=FORTNIGHTLY",
            "FREQ=DAILY;INTERVAL=0",
            "FREQ=DAILY;INTERVAL=two",
            "FREQ=DAILY;COUNT=-1",
            "FREQ=DAILY;COUNT=²",
            "FREQ=DAILY;INTERVAL=²",
            "FREQ=DAILY;INTERVAL=٣",
            "FREQ=MONTHLY;BYMONTHDAY=٣",
            "FREQ=DAILY;FREQ=WEEKLY",
            "FREQ=WEEKLY;BYDAY=XX",
            "FREQ=MONTHLY;BYDAY=60MO",
            "FREQ=MONTHLY;BYMONTHDAY=0",
            "FREQ=MONTHLY;BYMONTHDAY=32",
            "FREQ=YEARLY;BYMONTH=13",
            "FREQ=DAILY;BYHOUR=-1",
            "FREQ=DAILY;UNTIL=yesterday",
            "FREQ=WEEKLY;WKST=XY",
        ],
    )
    def test_invalid_rules_fail(self, value):
        with pytest.raises(PropertyParseError) as exc_info:
            parse_recurrence_rule(value)

        assert exc_info.value.kind == ParseFailureKind.INVALID_RECURRENCE
