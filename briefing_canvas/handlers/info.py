"""Lookup-backed fallbacks: info/summary questions, record lookup, and the
catch-all acknowledgement at the end of the chain."""

from __future__ import annotations

import logging

from briefing_canvas.content.actions import generate_actions, generate_follow_up_actions
from briefing_canvas.content.briefs import info_card
from briefing_canvas.content.records import describe, has_lookup_terms, search
from briefing_canvas.core.models import make_planner_section, make_section, new_id
from briefing_canvas.core.query import is_info_query, is_summary_query
from briefing_canvas.handlers.base import HandlerResult, QueryContext

logger = logging.getLogger(__name__)

NOT_FOUND_HELP = (
    "I couldn't find a matching record. Try naming a person, a date such as "
    '"tomorrow", a location like "mill" or "boiler", or a record type such as "batch" or "inspection".'
)

NOOP_MESSAGE = "I'm processing your query. Please try rephrasing or asking about specific data."


# ── info_query ───────────────────────────────────────────────────

def info_matches(ctx: QueryContext) -> bool:
    return is_info_query(ctx.query) or is_summary_query(ctx.query)


def _is_season_summary(q: str) -> bool:
    return ("season" in q or "crushing" in q) and ("summary" in q or "progress" in q)


def info_produce(ctx: QueryContext) -> HandlerResult:
    result = search(ctx.query)
    summary = is_summary_query(ctx.query)
    sections = []

    if summary and _is_season_summary(ctx.lowered):
        sections.append(make_section(
            "focus-summary",
            "Crushing Season Summary",
            "Crushing is at 68% of the seasonal plan. Average daily crush is 4,200 tons against a "
            "target of 4,500. Recovery is steady at 10.4%. Two mill stoppages this week totalled 3 hours.",
        ))

    follow_up = generate_follow_up_actions(ctx.query, "summary" if summary else "info")
    sections.append(make_planner_section(follow_up, "Query Follow-up"))

    if result.found:
        message = describe(result, ctx.query)
    elif summary:
        message = "Here's the current summary. I've added follow-up actions to your planner."
    else:
        message = f"{describe(result, ctx.query)} I've added follow-up actions to your planner."
    return HandlerResult(handled=True, sections=sections, message=message, needs_async_processing=True)


# ── data_lookup ──────────────────────────────────────────────────

def lookup_matches(ctx: QueryContext) -> bool:
    return has_lookup_terms(ctx.query)


def lookup_produce(ctx: QueryContext) -> HandlerResult:
    result = search(ctx.query)
    logger.debug("Record lookup for %r: %s", ctx.query, result.match_type)
    if not result.found:
        return HandlerResult(handled=True, message=NOT_FOUND_HELP, needs_async_processing=True)

    card = info_card(ctx.query, ctx.today)
    card.title = result.record.label
    card.subtitle = describe(result, ctx.query)
    return HandlerResult(
        handled=True,
        sections=[
            make_section("focus-info-lookup", result.record.label, card),
            make_planner_section(generate_actions(ctx.query), "Query Follow-up", section_id=new_id("planner-actions")),
        ],
        message=f"Found {result.record.label} ({result.match_type} match).",
        needs_async_processing=True,
    )


# ── noop ─────────────────────────────────────────────────────────

def noop_matches(ctx: QueryContext) -> bool:
    return True


def noop_produce(ctx: QueryContext) -> HandlerResult:
    return HandlerResult(handled=True, message=NOOP_MESSAGE, needs_async_processing=True)
