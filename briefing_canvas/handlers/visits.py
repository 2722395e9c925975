"""Generic visit handler: suppliers, auditors, inspections.

Parses a visit record out of the query and reports it through
``on_vip_visit_parsed`` before the brief lands on the canvas.
"""

from __future__ import annotations

import logging

from briefing_canvas.content.briefs import protocol_card
from briefing_canvas.content.visits import parse_visit, visit_planner_actions
from briefing_canvas.core.models import make_planner_section, make_section
from briefing_canvas.handlers.base import HandlerResult, QueryContext

logger = logging.getLogger(__name__)

TRIGGERS = ("supplier", "auditor", "inspection", "visit")

FALLBACK_ACTIONS = [
    "Reserve main entrance parking",
    "Brief quality control staff",
    "Arrange quality reports for 5 guests",
]


def matches(ctx: QueryContext) -> bool:
    q = ctx.lowered
    if q.startswith("show") and "supplier" in q and "visit" in q:
        return False
    return any(t in q for t in TRIGGERS)


def produce(ctx: QueryContext) -> HandlerResult:
    visit = parse_visit(ctx.query, ctx.today)
    if visit is None:
        logger.debug("No visitor parsed from %r, using quality inspector brief", ctx.query)
        card = protocol_card(
            visitor="Quality Inspector",
            title="Quality Inspector Visit",
            date_time="Today at 10:00 AM",
            location="Main Factory Entrance",
            protocol_level="medium",
            delegation="~5 persons",
            rows=[
                ("09:30 AM", "Reception desk briefed on arrival."),
                ("10:00 AM", "Arrival and plant walk-through."),
                ("11:30 AM", "Review of quality reports in the lab."),
            ],
        )
        return HandlerResult(
            handled=True,
            sections=[
                make_section("focus-supplier", "Supplier Inspection Brief", card),
                make_planner_section(FALLBACK_ACTIONS, "Inspection Plan", section_id="supplier-checklist"),
            ],
            message="I've prepared the inspection brief and checklist.",
            needs_async_processing=True,
        )

    logger.debug("Parsed visit: %s on %s at %s", visit.visitor, visit.date, visit.time)
    card = protocol_card(
        visitor=visit.visitor,
        title=visit.title or f"{visit.visitor} Visit",
        date_time=f"{visit.display_date} at {visit.display_time}",
        location=visit.location,
        protocol_level=visit.protocol_level,
        delegation="To be confirmed",
        rows=[
            (visit.display_time, f"Arrival at {visit.location}."),
            ("+30 min", "Plant walk-through with department heads."),
            ("+90 min", "Debrief in the executive conference room."),
        ],
        highlight_title=f"{visit.date.strftime('%B %d').upper()} | HIGHLIGHTS",
    )
    return HandlerResult(
        handled=True,
        sections=[
            make_section("focus-supplier", "Supplier Inspection Brief", card),
            make_planner_section(visit_planner_actions(visit), "Inspection Plan", section_id="supplier-checklist"),
        ],
        message=f"I've prepared the inspection brief for {visit.visitor}'s visit on {visit.display_date}.",
        vip_visit=visit,
        needs_async_processing=True,
    )
