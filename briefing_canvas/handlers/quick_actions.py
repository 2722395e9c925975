"""Quick actions: "show/view/list/check" + a known dashboard subtopic.

Each subtopic replaces the focus card with a status card. Appointments
are a component view with no card payload. A query that starts with a
quick-action verb but names no known subtopic is left to later handlers.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from briefing_canvas.content.briefs import status_card
from briefing_canvas.core.models import Section, make_planner_section, make_section
from briefing_canvas.handlers.base import HandlerResult, QueryContext

logger = logging.getLogger(__name__)

FUTURE_WORDS = ("tomorrow", "next week", "future", "upcoming")


def is_quick_action(q: str) -> bool:
    return q.startswith("show") or "view" in q or "list" in q or "check" in q


def _date_prefix(q: str) -> str:
    return "Tomorrow's" if any(w in q for w in FUTURE_WORDS) else "Today's"


Built = Tuple[List[Section], str]


def _cane_intake(q: str) -> Built:
    card = status_card(
        "Cane Intake Status",
        "Current Status: Active | Today's Intake: 450 tons",
        "INTAKE | HIGHLIGHTS",
        [
            ("06:00 AM", "Morning intake started. 5 trucks arrived."),
            ("10:00 AM", "Peak intake period. 15 trucks in queue."),
            ("02:00 PM", "Afternoon intake. 8 trucks processed."),
            ("06:00 PM", "Evening intake complete. Total: 450 tons."),
        ],
    )
    return [make_section("focus-cane-intake", "Cane Intake Status", card)], "Showing current cane intake status."


def _production_batch(q: str) -> Built:
    card = status_card(
        "Production Batch Status",
        "Current Batch: #B-2024-045 | Status: Processing",
        "BATCH | HIGHLIGHTS",
        [
            ("07:00 AM", "Batch started. Crushing unit operational."),
            ("09:00 AM", "Quality check completed. All parameters normal."),
            ("12:00 PM", "Mid-batch review. Production on track."),
            ("04:00 PM", "Batch completion expected at 6:00 PM."),
        ],
    )
    return (
        [make_section("focus-production-batch", "Production Batch Status", card)],
        "Showing current production batch status.",
    )


def _quality_reports(q: str) -> Built:
    card = status_card(
        "Quality Control Reports",
        "Last Updated: Today 2:00 PM | Status: All Clear",
        "QUALITY | HIGHLIGHTS",
        [
            ("08:00 AM", "Morning quality check: Passed"),
            ("12:00 PM", "Midday quality check: Passed"),
            ("02:00 PM", "Afternoon quality check: Passed"),
            ("06:00 PM", "Evening quality check: Pending"),
        ],
    )
    return [make_section("focus-quality", "Quality Control Reports", card)], "Showing quality control reports."


def _supplier_visits(q: str) -> Built:
    prefix = _date_prefix(q)
    card = status_card(
        "Supplier Visits",
        f"{prefix} Schedule | Total: 3 visits",
        "VISITS | HIGHLIGHTS",
        [
            ("09:00 AM", "Supplier A - Cane delivery inspection"),
            ("11:00 AM", "Supplier B - Quality audit"),
            ("03:00 PM", "Supplier C - Contract review"),
        ],
    )
    return (
        [make_section("focus-supplier", f"{prefix} Supplier Visits", card)],
        f"Showing {prefix.lower()} supplier visits.",
    )


def _appointments(q: str) -> Built:
    prefix = _date_prefix(q)
    section = make_section("focus-appointments", f"{prefix} Appointments", "Loading...", type="components")
    return [section], f"Showing {prefix.lower()} appointments and schedule."


def _approvals(q: str) -> Built:
    prefix = _date_prefix(q)
    card = status_card(
        "Pending Approvals",
        f"{prefix} | Total: 3 pending",
        "APPROVALS | HIGHLIGHTS",
        [
            ("Equipment Purchase", "Rs 5,00,000 - High Priority"),
            ("Maintenance Request", "Crushing Unit - Medium Priority"),
            ("Supplier Contract", "Supplier A - Low Priority"),
        ],
    )
    return (
        [make_section("focus-approvals", f"{prefix} Approvals", card)],
        f"Showing {prefix.lower()} pending approvals.",
    )


def _alerts(q: str) -> Built:
    prefix = _date_prefix(q)
    card = status_card(
        "Alerts & Reminders",
        f"{prefix} | Total: 4 alerts",
        "ALERTS | HIGHLIGHTS",
        [
            ("08:00 AM", "Quality check due in 1 hour"),
            ("12:00 PM", "Production batch review meeting"),
            ("03:00 PM", "Supplier visit scheduled"),
            ("05:00 PM", "Daily report submission"),
        ],
    )
    return (
        [make_section("focus-alert", f"{prefix} Alerts", card)],
        f"Showing {prefix.lower()} alerts and reminders.",
    )


def _finance(q: str) -> Built:
    actionable = any(w in q for w in ("approve", "pay", "transfer", "create"))
    if actionable:
        card = status_card(
            "Finance Action Required",
            "Pending Approval | Amount: Rs 2,50,000",
            "FINANCE | HIGHLIGHTS",
            [
                ("Status", "Payment approval pending"),
                ("Amount", "Rs 2,50,000"),
                ("Department", "Production"),
                ("Priority", "High"),
            ],
        )
        sections = [
            make_section("focus-finance", "Finance Action Required", card),
            make_planner_section(
                ["Release cane payment for fortnight 12", "Audit weighbridge slip reconciliation"],
                "Finance Actions",
                section_id="finance-actions",
            ),
        ]
        return sections, "Processing your finance request..."

    prefix = _date_prefix(q)
    card = status_card(
        "Financial Summary",
        f"{prefix} Overview | Revenue: Rs 15,00,000",
        "FINANCE | HIGHLIGHTS",
        [
            ("Revenue", "Rs 15,00,000"),
            ("Expenses", "Rs 8,50,000"),
            ("Profit", "Rs 6,50,000"),
            ("Status", "On track"),
        ],
    )
    return (
        [make_section("focus-finance", f"{prefix} Finance Summary", card)],
        f"Showing {prefix.lower()} financial summary.",
    )


# Checked in order; supplier visits come before appointments so
# "show supplier visits schedule" stays a supplier card.
SUBTOPICS: List[Tuple[str, Callable[[str], bool], Callable[[str], Built]]] = [
    ("cane_intake", lambda q: "cane" in q and ("intake" in q or "status" in q), _cane_intake),
    ("production_batch", lambda q: "production" in q and "batch" in q, _production_batch),
    ("quality_reports", lambda q: "quality" in q and "report" in q, _quality_reports),
    ("supplier_visits", lambda q: "supplier" in q and "visit" in q, _supplier_visits),
    ("appointments", lambda q: any(w in q for w in ("appointment", "calendar", "schedule")), _appointments),
    ("approvals", lambda q: "approval" in q, _approvals),
    ("alerts", lambda q: any(w in q for w in ("alert", "reminder", "notification")), _alerts),
    ("finance", lambda q: any(w in q for w in ("finance", "summary", "collection", "payment", "revenue")), _finance),
]


def _subtopic(q: str) -> Optional[Tuple[str, Callable[[str], Built]]]:
    for name, test, build in SUBTOPICS:
        if test(q):
            return name, build
    return None


def matches(ctx: QueryContext) -> bool:
    q = ctx.lowered
    return is_quick_action(q) and _subtopic(q) is not None


def produce(ctx: QueryContext) -> HandlerResult:
    name, build = _subtopic(ctx.lowered)
    logger.debug("Quick action: %s", name)
    sections, message = build(ctx.lowered)
    return HandlerResult(handled=True, sections=sections, message=message, needs_async_processing=True)
