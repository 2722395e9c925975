"""Tests for the decision-level action generators and procurement snapshot."""

import random

import pytest

from briefing_canvas.content.actions import (
    APPROVAL_ACTIONS,
    GENERAL_ACTIONS,
    MAX_ACTIONS,
    VISIT_ACTIONS,
    ProcurementSnapshot,
    generate_actions,
    generate_follow_up_actions,
    generate_procurement_snapshot,
    procurement_actions,
)


class TestGenerateActions:
    def test_visit_bundle(self):
        actions = generate_actions("minister visit tomorrow")
        assert actions == [f"[·] {a}" for a in VISIT_ACTIONS][:MAX_ACTIONS]

    def test_cascade_order(self):
        """Visit wins over approval when both words appear."""
        assert generate_actions("approve the vip visit")[0] == f"[·] {VISIT_ACTIONS[0]}"
        assert generate_actions("approve the invoice")[0] == f"[·] {APPROVAL_ACTIONS[0]}"

    def test_fallback(self):
        assert generate_actions("hello")[0] == f"[·] {GENERAL_ACTIONS[0]}"

    @pytest.mark.parametrize("query", ["visit", "plan", "summary", "approval", "schedule", "anything"])
    def test_shape(self, query):
        actions = generate_actions(query)
        assert 0 < len(actions) <= MAX_ACTIONS
        assert all(a.startswith("[·] ") for a in actions)


class TestFollowUpActions:
    def test_info_staff(self):
        assert generate_follow_up_actions("who is on shift", "info")[0] == "[·] Review staff assignments and shift availability"

    def test_summary_progress(self):
        actions = generate_follow_up_actions("season progress", "summary")
        assert actions[0] == "[·] Review current progress and status"
        assert len(actions) == 3

    def test_check_and_show_extras(self):
        """Verb-specific extras are appended after the main items."""
        actions = generate_follow_up_actions("show and check the stock", "info")
        assert "[·] Verify the information is accurate" in actions
        assert actions[-1] == "[·] Take action based on the findings"


class TestProcurement:
    def test_seeded_snapshot_is_reproducible(self):
        a = generate_procurement_snapshot(random.Random(3))
        b = generate_procurement_snapshot(random.Random(3))
        assert a == b

    @pytest.mark.parametrize("seed", range(20))
    def test_snapshot_within_band(self, seed):
        snap = generate_procurement_snapshot(random.Random(seed))
        low, high = {"Low": (75, 85), "Medium": (60, 74), "High": (45, 59)}[snap.risk_level]
        assert low <= snap.procured_percentage <= high
        assert 50_000 <= snap.target_tons < 75_000
        assert snap.procured_tons + snap.remaining_tons == snap.target_tons

    def test_low_risk_actions(self):
        actions = procurement_actions(ProcurementSnapshot("Low", 80, 60_000))
        assert "[·] Coordinate with quality control team on incoming cane inspection protocols" in actions
        assert "[·] Update procurement forecast based on current delivery trends" in actions
        assert not any("contingency" in a for a in actions)

    def test_medium_risk_with_large_gap_escalates(self):
        """More than 30% outstanding escalates even below High risk."""
        actions = procurement_actions(ProcurementSnapshot("Medium", 65, 60_000))
        assert "[·] Escalate procurement shortfall status to factory management" in actions
        assert "[·] Prepare risk mitigation report for management review" in actions

    def test_high_risk_actions(self):
        actions = procurement_actions(ProcurementSnapshot("High", 50, 60_000))
        assert "[·] Activate contingency procurement plan and engage backup suppliers" in actions
        assert len(actions) == 10

    def test_snapshot_lines(self):
        lines = ProcurementSnapshot("Low", 80, 60_000).lines()
        assert lines[0] == "Season procurement target: 60,000 tons"
        assert lines[-1] == "Remaining procurement required: 12,000 tons (20%)"
