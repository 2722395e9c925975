"""Tests for the section merge transforms."""

from briefing_canvas.core.models import (
    PLANNER_TITLE,
    Checklist,
    HighlightCard,
    make_planner_section,
    make_section,
)
from briefing_canvas.core.sections import (
    add_sections,
    find_focus_section,
    find_planner_section,
    is_focus_card,
    merge_planner_sections,
    remove_planner,
    replace_focus_cards,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _planner(items, section_id="planner-p", revealed=True):
    section = make_planner_section(items, section_id=section_id)
    if revealed:
        section.visible_content = section.content
        section.is_visible = True
    return section


def _planner_count(sections):
    return sum(1 for s in sections if s.title == PLANNER_TITLE)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

class TestFocusCards:
    def test_focus_prefix(self):
        assert is_focus_card(make_section("focus-x", "Anything", "body"))

    def test_title_marker(self):
        """Display-category titles count as focus cards without the prefix."""
        assert is_focus_card(make_section("s1", "Today's Approvals", "body"))
        assert is_focus_card(make_section("s2", "VIP Arrival", "body"))

    def test_ordinary_section(self):
        assert not is_focus_card(make_section("notes", "Shift notes", "body"))

    def test_find_prefers_prefixed_section(self):
        sections = [make_section("s1", "Finance Summary", "a"), make_section("focus-b", "Brief", "b")]
        assert find_focus_section(sections).id == "focus-b"


# ---------------------------------------------------------------------------
# merge_planner_sections
# ---------------------------------------------------------------------------

class TestMergePlanner:
    def test_concatenates_and_keeps_visible_prefix(self):
        """New items append; what was already shown stays shown."""
        existing = _planner(["A"])
        incoming = _planner(["Buy flowers"], section_id="planner-new", revealed=False)
        merged = merge_planner_sections(existing, incoming)
        assert merged.id == "planner-p"
        assert merged.content == "[·] A\n[·] Buy flowers"
        assert merged.visible_content == "[·] A"
        assert merged.is_visible

    def test_empty_incoming_changes_nothing(self):
        """Merging an empty checklist does not duplicate content."""
        existing = _planner(["A", "B"])
        merged = merge_planner_sections(existing, make_planner_section([]))
        assert merged.content == existing.content

    def test_prefers_incoming_subtitle(self):
        existing = make_planner_section(["A"], sub_title="Old")
        incoming = make_planner_section(["B"], sub_title="New")
        assert merge_planner_sections(existing, incoming).sub_title == "New"
        assert merge_planner_sections(existing, make_planner_section(["C"])).sub_title == "Old"

    def test_missing_side_returns_other(self):
        p = _planner(["A"])
        assert merge_planner_sections(None, p) is p
        assert merge_planner_sections(p, None) is p
        assert merge_planner_sections(None, None) is None

    def test_merged_payload_is_checklist(self):
        merged = merge_planner_sections(_planner(["A"]), _planner(["B"], revealed=False))
        assert isinstance(merged.payload, Checklist)
        assert merged.payload.items == ["A", "B"]


# ---------------------------------------------------------------------------
# replace_focus_cards / add_sections
# ---------------------------------------------------------------------------

class TestReplaceFocusCards:
    def test_replaces_focus_keeps_planner_and_ordinary(self):
        """[focus-A, planner-P, ordinary-O] + [focus-B] drops only focus-A."""
        planner = _planner(["A"])
        existing = [
            make_section("focus-A", "Old brief", HighlightCard(title="A")),
            planner,
            make_section("ordinary-O", "Notes", "o"),
        ]
        result = replace_focus_cards(existing, [make_section("focus-B", "New brief", HighlightCard(title="B"))])
        ids = [s.id for s in result]
        assert "focus-A" not in ids
        assert {"focus-B", "planner-p", "ordinary-O"} <= set(ids)
        assert ids[0] == "focus-B"
        assert find_planner_section(result).content == planner.content

    def test_incoming_planner_merges(self):
        existing = [_planner(["A"])]
        incoming = [make_section("focus-B", "Brief", "b"), make_planner_section(["B"])]
        result = replace_focus_cards(existing, incoming)
        assert _planner_count(result) == 1
        assert find_planner_section(result).content == "[·] A\n[·] B"

    def test_planner_inserted_when_absent(self):
        result = replace_focus_cards([], [make_section("focus-B", "Brief", "b"), make_planner_section(["B"])])
        assert [s.id for s in result][0] == "focus-B"
        assert _planner_count(result) == 1


class TestAddSections:
    def test_appends_without_removing(self):
        existing = [make_section("focus-A", "Brief", "a")]
        result = add_sections(existing, [make_section("notes", "Notes", "n")])
        assert [s.id for s in result] == ["focus-A", "notes"]

    def test_at_most_one_planner_over_many_merges(self):
        """Repeated planner additions always fold into one section."""
        sections = []
        for i in range(5):
            sections = add_sections(sections, [make_planner_section([f"item {i}"])])
            sections = replace_focus_cards(sections, [make_section(f"focus-{i}", "Brief", "b"), make_planner_section(["x"])])
        assert _planner_count(sections) == 1
        assert len(find_planner_section(sections).payload.items) == 10

    def test_remove_planner(self):
        sections = [make_section("focus-A", "Brief", "a"), _planner(["A"])]
        assert [s.id for s in remove_planner(sections)] == ["focus-A"]
