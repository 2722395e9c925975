"""Planner handlers: explicit "add X to plan", free-form planner requests,
and the follow-up checklist for question-shaped queries.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from briefing_canvas.content.actions import generate_follow_up_actions
from briefing_canvas.core.models import make_planner_section, new_id
from briefing_canvas.core.query import is_informational_query, is_planner_request, parse_actions_from_query
from briefing_canvas.handlers.base import HandlerResult, QueryContext

logger = logging.getLogger(__name__)

_PLAN = r"(?:the\s+)?plan(?:ner)?"

# Order matters: the "this/that ... [task]" form must be tried first.
ADD_PATTERNS = [
    re.compile(rf"\badd\s+(?:this|that)\s+(?:to|in)\s+{_PLAN}\s+(.+)"),
    re.compile(rf"\badd\s+(.+?)\s+(?:to|in)\s+{_PLAN}\b"),
    re.compile(rf"\badd\s+(?:to|in)\s+{_PLAN}\s+(.+)"),
    re.compile(rf"(.+?)(?:[-–—,.]+)?\s*\b(?:please\s+)?add\s+(?:to|in)\s+{_PLAN}\b"),
    re.compile(rf"(.+?)(?:[-–—,.]+)?\s*\b(?:should\s+be\s+)?added\s+(?:to|in)\s+{_PLAN}\b"),
    re.compile(r"(.+?)\s+is\s+missing\s+add\s+that\s+(?:to|in)\s+plan"),
    re.compile(r"add\s+that\s+(?:to|in)\s+plan"),
    re.compile(r"\b(?:add|new|create|include)\b\s+step(?::|\s+)?\s*(.+)"),
    re.compile(r"(.+?)\s+add\s+(?:it\s+)?as\s+(?:a\s+)?step"),
]

_BEFORE_ADD_THAT = re.compile(r"(.+?)\s+(?:is\s+missing|add\s+that)", re.IGNORECASE)
_AFTER_PLAN = re.compile(r"\b(?:to|in)\s+(?:the\s+)?plan(?:ner)?\s+(.+)", re.IGNORECASE)
_FILLER = re.compile(r"^(?:ok\s+|please\s+|can\s+you\s+)", re.IGNORECASE)


def extract_planner_item(query: str) -> Optional[str]:
    """The item named by an "add ... to plan" request, capitalised, or None."""
    lowered = query.lower()
    item = None
    for pattern in ADD_PATTERNS:
        m = pattern.search(lowered)
        if not m:
            continue
        captured = m.group(1).strip() if m.groups() and m.group(1) else None
        if captured is None:
            before = _BEFORE_ADD_THAT.search(query)
            if before:
                item = _FILLER.sub("", before.group(1)).strip()
        elif captured in ("this", "that"):
            after = _AFTER_PLAN.search(query)
            if after:
                item = after.group(1).strip()
        else:
            item = captured
        break

    if not item:
        return None
    return item[0].upper() + item[1:]


# ── planner_add ──────────────────────────────────────────────────

def add_matches(ctx: QueryContext) -> bool:
    return extract_planner_item(ctx.query) is not None


def add_produce(ctx: QueryContext) -> HandlerResult:
    item = extract_planner_item(ctx.query)
    logger.debug("Adding %r to planner", item)
    return HandlerResult(
        handled=True,
        sections=[make_planner_section([item], section_id=new_id("planner-actions"))],
        message=f'Adding "{item}" to your plan...',
    )


# ── planner_request ──────────────────────────────────────────────

def request_matches(ctx: QueryContext) -> bool:
    return is_planner_request(ctx.query)


def request_produce(ctx: QueryContext) -> HandlerResult:
    actions = parse_actions_from_query(ctx.query)
    if actions:
        section = make_planner_section(actions, "Factory Operations Plan", section_id=new_id("planner-actions"))
        message = "I've added these actions to your planner. You can edit, assign, or add more items."
    else:
        section = make_planner_section([ctx.query], section_id=new_id("planner-actions"))
        message = "I've added this action to your planner."
    return HandlerResult(handled=True, sections=[section], message=message)


# ── informational ────────────────────────────────────────────────

def informational_matches(ctx: QueryContext) -> bool:
    return is_informational_query(ctx.query)


def informational_produce(ctx: QueryContext) -> HandlerResult:
    actions = generate_follow_up_actions(ctx.query, "general")
    return HandlerResult(
        handled=True,
        sections=[make_planner_section(actions, "Query Follow-up")],
        message="I've added follow-up actions for this question to your planner.",
        needs_async_processing=True,
    )
