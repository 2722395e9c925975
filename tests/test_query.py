"""Tests for query normalization and the intent predicates."""

import pytest

from briefing_canvas.core.query import (
    REC_MARKER,
    extract_subject,
    is_info_query,
    is_informational_query,
    is_planner_request,
    is_summary_query,
    normalize,
    parse_actions_from_query,
    simple_intent,
)


class TestNormalize:
    def test_strips_marker(self):
        clean, is_rec = normalize(f"{REC_MARKER}Is parking reserved?")
        assert clean == "Is parking reserved?"
        assert is_rec is True

    def test_plain_query_untouched(self):
        assert normalize("Show pending approvals") == ("Show pending approvals", False)

    def test_marker_only_at_start(self):
        """The marker in the middle of a query is just text."""
        assert normalize(f"note {REC_MARKER}x").is_recommendation is False


class TestPredicates:
    def test_info_keywords(self):
        assert is_info_query("who is the chief chemist")
        assert is_info_query("tell me about the boiler")

    def test_factory_subject_is_info_unless_action(self):
        assert is_info_query("mill")
        assert not is_info_query("schedule mill cleaning")

    def test_summary(self):
        assert is_summary_query("season progress")
        assert is_summary_query("how is the preparation going")
        assert not is_summary_query("call transporters")

    def test_planner_request(self):
        assert is_planner_request("create tasks for the night shift")
        assert is_planner_request("add this to the board")
        assert not is_planner_request("hello there")

    def test_informational(self):
        assert is_informational_query("should we delay the crushing?")
        assert is_informational_query("Is the boiler running")
        assert not is_informational_query("boiler running")

    def test_predicates_can_overlap(self):
        """No predicate excludes another."""
        q = "what is the status of the plan?"
        assert is_info_query(q) and is_summary_query(q) and is_planner_request(q) and is_informational_query(q)


class TestSimpleIntent:
    @pytest.mark.parametrize(
        "query,intent",
        [
            ("plan", "plan"),
            ("Plan for crushing season", "plan"),
            ("summary of cane intake", "summary"),
            ("summarize yesterday", "summary"),
            ("complete information about the boiler", "complete"),
            ("what's next", "next"),
            ("next steps for the audit", "next"),
        ],
    )
    def test_anchored_forms(self, query, intent):
        assert simple_intent(query) == intent

    def test_unanchored_does_not_match(self):
        assert simple_intent("show me the plan") is None
        assert simple_intent("the summary please") is None

    def test_subject(self):
        assert extract_subject("Plan for crushing season", "plan") == "crushing season"
        assert extract_subject("what's next for the audit", "next") == "the audit"
        assert extract_subject("summary", "summary") is None


class TestParseActions:
    def test_numbered(self):
        assert parse_actions_from_query("create tasks 1. call transporters 2. clean molasses tank") == [
            "call transporters",
            "clean molasses tank",
        ]

    def test_bulleted(self):
        assert parse_actions_from_query("create tasks - call transporters - clean tank") == [
            "call transporters",
            "clean tank",
        ]

    def test_comma_after_prefix(self):
        """The action prefix and a trailing colon are dropped."""
        assert parse_actions_from_query("create tasks: call transporters, clean tank, pay farmers") == [
            "call transporters",
            "clean tank",
            "pay farmers",
        ]

    def test_conjunction(self):
        assert parse_actions_from_query("call transporters then clean tank") == ["call transporters", "clean tank"]

    def test_single(self):
        assert parse_actions_from_query("call transporters") == ["call transporters"]

    def test_empty(self):
        assert parse_actions_from_query("add task") == []
