"""Tests for the record registry lookup."""

from briefing_canvas.content.records import (
    NOT_FOUND,
    SearchResult,
    SystemRecord,
    describe,
    has_lookup_terms,
    search,
)


class TestSearch:
    def test_name_match(self):
        result = search("Ravi Kulkarni")
        assert result.found
        assert result.record.id == "EMP-001"
        assert "name" in result.matched_fields

    def test_unknown_is_sentinel(self):
        """Below the confidence floor the result carries no record."""
        result = search("Xyzzy Corp")
        assert result is NOT_FOUND
        assert not result.found

    def test_custom_registry(self):
        records = [
            SystemRecord("T-1", "task", title="Tank cleaning", location="Warehouse", keywords=["tank"]),
            SystemRecord("T-2", "task", title="Boiler check", location="Boiler House"),
        ]
        result = search("tank cleaning at the warehouse", records)
        assert result.record.id == "T-1"
        assert set(result.matched_fields) >= {"location", "keyword"}

    def test_date_terms_use_today(self):
        """'today' matches records dated today."""
        result = search("Cane Payment today pending")
        assert result.record.id == "PAY-550"
        assert "date" in result.matched_fields


class TestDescribe:
    def test_not_found_reads_unregistered(self):
        assert describe(NOT_FOUND) == "Record type: New / Unregistered. Status: Not yet created."

    def test_found_sentence(self):
        record = SystemRecord("V-1", "visit", title="Buyer visit", date="2026-01-15", time="11:00 AM",
                              location="Main Office", status="scheduled", assigned_roles="Sales Head")
        text = describe(SearchResult(record, 0.8, "exact"))
        assert text.startswith("Buyer visit is a visit record with status scheduled.")
        assert "It is set for 2026-01-15 at 11:00 AM." in text
        assert "Assigned to: Sales Head." in text

    def test_missing_fields_flagged(self):
        record = SystemRecord("T-9", "task", title="Molasses tank cleaning", status="pending")
        assert "Missing: No assignee." in describe(SearchResult(record, 0.5, "fuzzy"))


class TestLookupTerms:
    def test_terms_present(self):
        assert has_lookup_terms("batch at the mill")
        assert has_lookup_terms("Meena")

    def test_no_terms(self):
        assert not has_lookup_terms("hello there")
