"""Recurring named scenarios: the Factory Manager inspection, the Managing
Director's visit and the special production batch on Feb 3.

These fire before the generic handlers because their trigger words
("manager", "visit", "batch") overlap with several later ones.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from briefing_canvas.content.briefs import protocol_card
from briefing_canvas.content.visits import ParsedVisit
from briefing_canvas.core.models import make_planner_section, make_section
from briefing_canvas.handlers.base import HandlerResult, QueryContext

logger = logging.getLogger(__name__)


def _is_manager_visit(q: str) -> bool:
    return "factory manager" in q or "quality inspector" in q


def _is_md_visit(ctx: QueryContext) -> bool:
    return ctx.is_recommendation and "managing director" in ctx.lowered


def _is_special_batch(q: str) -> bool:
    return "batch" in q and ("special" in q or "priority" in q)


def matches(ctx: QueryContext) -> bool:
    q = ctx.lowered
    return _is_manager_visit(q) or _is_md_visit(ctx) or _is_special_batch(q)


def produce(ctx: QueryContext) -> HandlerResult:
    q = ctx.lowered
    if _is_manager_visit(q):
        return _manager_visit(ctx)
    if _is_md_visit(ctx):
        return _md_visit(ctx)
    return _special_batch(ctx)


# ── Factory Manager / Quality Inspector ─────────────────────────

FIELD_INSPECTION_PLAN = [
    "Confirm Factory Manager arrival & reception protocol",
    "Align factory coordination & travel readiness",
    "Prepare inspection route & movement path inside factory",
    "Confirm quality control team availability",
    "Prepare inspection checklist & sampling equipment",
    "Inform factory supervisors & senior staff",
    "Activate safety protocols & volunteer arrangement",
    "Coordinate sugar product preparation (sample batch)",
    "Ensure protocol & security alignment",
    "Conduct pre-arrival safety readiness check (3:30 PM)",
]

FACTORY_TOUR_PLAN = [
    "Arrange factory tour at main entrance",
    "Coordinate production line inspection",
    "Ensure quality clearance for production areas",
    "Prepare production reports for review",
]


def _manager_visit(ctx: QueryContext) -> HandlerResult:
    q = ctx.lowered
    field_visit = "field" in q or "farm" in q
    visit = ParsedVisit(
        visitor="Factory Manager",
        title="Operations Manager & Quality Inspector",
        date=ctx.today if field_visit else ctx.today + timedelta(days=1),
        time="16:00" if field_visit else "17:00",
        location="Cane Field" if field_visit else "Main Factory Entrance",
        protocol_level="maximum",
        confidence=1.0,
    )
    if field_visit:
        rows = [
            ("03:30 PM", "Pre-inspection readiness check and safety briefing."),
            ("04:00 PM", "Arrival at cane field and quality assessment."),
            ("04:30 PM", "Cane quality inspection and sampling."),
            ("05:30 PM", "Review meeting with suppliers and farmers."),
        ]
    else:
        rows = [
            ("05:00 PM", "Arrival at main factory entrance."),
            ("05:30 PM", "Factory tour and production review."),
            ("06:30 PM", "Operations briefing and planning session."),
        ]
    card = protocol_card(
        visitor=visit.visitor,
        title=visit.title,
        date_time="Today at 4:00 PM" if field_visit else "Tomorrow at 5:00 PM",
        location=visit.location,
        protocol_level=visit.protocol_level,
        delegation="~20 persons" if field_visit else "~10 persons",
        rows=rows,
    )
    kind = "field inspection" if field_visit else "factory tour"
    logger.debug("Factory Manager %s", kind)
    return HandlerResult(
        handled=True,
        sections=[
            make_section("focus-inspection", "Quality Inspection Brief", card),
            make_planner_section(
                FIELD_INSPECTION_PLAN if field_visit else FACTORY_TOUR_PLAN,
                "Field Inspection Plan" if field_visit else "Factory Tour Plan",
                section_id="planner-manager",
            ),
        ],
        message=f"I've prepared the {kind} briefing and planner actions for the Factory Manager.",
        vip_visit=visit,
        needs_async_processing=True,
    )


# ── Managing Director visit (recommendation follow-up) ──────────

MD_FARM_PLAN = [
    "Confirm Managing Director arrival & reception at the demonstration farm",
    "Align cane development team & travel readiness",
    "Prepare walking route through the trial plots",
    "Confirm agronomist availability for the briefing",
    "Prepare yield and variety trial summaries",
    "Inform farmer group leaders",
    "Arrange shaded seating and drinking water",
    "Coordinate sample cuttings for brix testing",
    "Ensure protocol & security alignment",
    "Conduct pre-arrival readiness check (3:30 PM)",
]

MD_FACTORY_PLAN = [
    "Arrange welcome at the main factory entrance",
    "Coordinate walkthrough of the mill house and boiler house",
    "Ensure safety clearance for production areas",
    "Prepare season performance presentation for the board room",
]


def _md_visit(ctx: QueryContext) -> HandlerResult:
    farm_visit = "farm" in ctx.lowered
    visit = ParsedVisit(
        visitor="Managing Director",
        title="Managing Director, Sugar Cooperative",
        date=ctx.today if farm_visit else ctx.today + timedelta(days=1),
        time="16:00" if farm_visit else "17:00",
        location="Demonstration Farm" if farm_visit else "Main Factory Entrance",
        protocol_level="maximum",
        confidence=1.0,
    )
    if farm_visit:
        rows = [
            ("03:30 PM", "Pre-arrival readiness check at the farm gate."),
            ("04:00 PM", "Arrival at the demonstration farm and welcome by farmer groups."),
            ("04:30 PM", "Walkthrough of variety trial plots."),
            ("05:30 PM", "Interaction with cane growers on the coming season."),
        ]
    else:
        rows = [
            ("05:00 PM", "Arrival at the main factory entrance."),
            ("05:30 PM", "Walkthrough of the mill house and boiler house."),
            ("06:30 PM", "Season performance review in the board room."),
        ]
    card = protocol_card(
        visitor=visit.visitor,
        title=visit.title,
        date_time="Today at 4:00 PM" if farm_visit else "Tomorrow at 5:00 PM",
        location=visit.location,
        protocol_level=visit.protocol_level,
        delegation="~20 persons" if farm_visit else "~10 persons",
        rows=rows,
    )
    where = "farm visit" if farm_visit else "factory arrival"
    return HandlerResult(
        handled=True,
        sections=[
            make_section("focus-vip", "VIP Protocol Brief", card),
            make_planner_section(
                MD_FARM_PLAN if farm_visit else MD_FACTORY_PLAN,
                "Farm Visit Plan" if farm_visit else "Factory Welcome Plan",
                section_id="planner-md",
            ),
        ],
        message=f"I've prepared the {where} briefing and planner actions for the Managing Director.",
        vip_visit=visit,
        needs_async_processing=True,
    )


# ── Special production batch ────────────────────────────────────

SPECIAL_BATCH_ROWS = [
    ("07:00 AM", "Commencement of special production batch with quality checks."),
    ("09:00 AM", "Crushing operation start and initial sampling."),
    ("11:00 AM", "Quality inspection and batch testing."),
    ("12:30 PM", "Final quality approval and batch completion."),
]

SPECIAL_BATCH_PLAN = [
    "Confirm staffing for production line",
    "Secure production area for quality inspection",
    "Arrange for specialized quality testing equipment",
    "Coordinate with inventory department for sugar product distribution",
]


def _special_batch(ctx: QueryContext) -> HandlerResult:
    card = protocol_card(
        visitor="Production Team & Quality Inspectors",
        title="Special Production Batch",
        date_time="3rd Feb (7:00 AM - 1:00 PM)",
        location="Main Crushing Unit / Production Floor",
        protocol_level="high",
        delegation="Multiple Quality Teams",
        rows=SPECIAL_BATCH_ROWS,
        highlight_title="FEBRUARY 3 | HIGHLIGHTS",
    )
    return HandlerResult(
        handled=True,
        sections=[
            make_section("focus-batch", "Production Batch Protocol", card),
            make_planner_section(SPECIAL_BATCH_PLAN, "Batch Preparation Plan", section_id="planner-batch"),
        ],
        message="I've generated the special production batch protocol briefing and planning steps for Feb 3rd.",
        needs_async_processing=True,
    )
