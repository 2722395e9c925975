"""Tests for the calendar fact aggregator."""

import pytest

from briefing_canvas.content.calendar import MAX_ITEMS, UNPARSEABLE, aggregate, parse_time


class TestParseTime:
    @pytest.mark.parametrize(
        "value,minutes",
        [
            ("9PM", 21 * 60),
            ("9:00 PM", 21 * 60),
            ("09:30 am", 9 * 60 + 30),
            ("21:00", 21 * 60),
            ("12:00 AM", 0),
            ("12:30 PM", 12 * 60 + 30),
        ],
    )
    def test_formats(self, value, minutes):
        assert parse_time(value) == minutes

    def test_garbage_sorts_last(self):
        assert parse_time("soon") == UNPARSEABLE
        assert parse_time("25:00") == UNPARSEABLE


class TestAggregate:
    def test_ekadashi_is_chronological(self, today):
        """The ritual schedule is merged in and everything is time-ordered."""
        items = aggregate("ekadashi fasting schedule", today)
        minutes = [parse_time(i.time) for i in items]
        assert minutes == sorted(minutes)
        assert parse_time(items[0].time) <= parse_time(items[-1].time)
        assert items[0].time == "05:00 AM"
        assert "Ekadashi" in items[0].description

    def test_truncated_to_five(self, today):
        assert len(aggregate("vip visit at 7 pm with ritual and festival event", today)) == MAX_ITEMS

    def test_deterministic_for_fixed_date(self, today):
        assert aggregate("approval meeting", today) == aggregate("approval meeting", today)

    def test_visit_time_taken_from_query(self, today):
        """A visit query puts the walkthrough at the time it names."""
        items = aggregate("minister visit at 6 am", today)
        walkthrough = [i for i in items if "walkthrough" in i.description]
        assert walkthrough and walkthrough[0].time == "6:00 AM"

    def test_sources_labelled(self, today):
        assert {i.source for i in aggregate("", today)} <= {"executive", "manager", "factory"}
