"""Tests for visit parsing."""

from datetime import date

import pytest
from pydantic import ValidationError

from briefing_canvas.content.visits import ParsedVisit, parse_visit, visit_planner_actions


class TestParseVisit:
    def test_named_supplier(self, today):
        visit = parse_visit("Supplier visit from Mr Sharma on Friday at 3 pm", today)
        assert visit.visitor == "Sharma"
        assert visit.title == "Supplier"
        assert visit.date == date(2026, 1, 16)
        assert visit.time == "15:00"
        assert visit.display_time == "3:00 PM"
        assert visit.protocol_level == "standard"
        assert visit.confidence == pytest.approx(1.0)

    def test_role_only(self, today):
        visit = parse_visit("district collector visiting tomorrow at the cane yard", today)
        assert visit.visitor == "District Collector"
        assert visit.title is None
        assert visit.date == date(2026, 1, 15)
        assert visit.time == "10:00"
        assert visit.location == "Cane Yard"
        assert visit.protocol_level == "high"

    def test_no_visitor(self, today):
        assert parse_visit("nothing to see here", today) is None

    def test_past_month_day_rolls_to_next_year(self, today):
        assert parse_visit("buyer arriving 5th Jan", today).date == date(2027, 1, 5)
        assert parse_visit("buyer arriving Dec 3", today).date == date(2026, 12, 3)

    def test_same_weekday_means_next_week(self, today):
        """'Wednesday' on a Wednesday is a week out, not today."""
        assert parse_visit("auditor on wednesday", today).date == date(2026, 1, 21)

    def test_display_date(self, today):
        assert parse_visit("farmer meeting today", today).display_date == "Wednesday, January 14, 2026"


class TestParsedVisitModel:
    def test_unknown_protocol_level_rejected(self, today):
        with pytest.raises(ValidationError):
            ParsedVisit(visitor="X", date=today, protocol_level="extreme")

    def test_level_normalised(self, today):
        assert ParsedVisit(visitor="X", date=today, protocol_level=" High ").protocol_level == "high"


class TestVisitPlannerActions:
    def test_scales_with_protocol(self, today):
        standard = visit_planner_actions(ParsedVisit(visitor="X", date=today, protocol_level="standard"))
        maximum = visit_planner_actions(ParsedVisit(visitor="X", date=today, protocol_level="maximum"))
        assert len(standard) == 3
        assert len(maximum) == 8
        assert maximum[-1] == "[·] Escalate to the Managing Director for the welcome"

    def test_first_item_names_arrival(self, today):
        visit = ParsedVisit(visitor="Sharma", date=today, time="15:00", location="Cane Yard")
        assert visit_planner_actions(visit)[0] == "[·] Confirm Sharma arrival at Cane Yard (3:00 PM)"
