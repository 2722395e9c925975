"""Anchored simple queries: "plan", "summary of X", "complete information", "what's next"."""

from __future__ import annotations

import logging

from briefing_canvas.content.actions import generate_actions
from briefing_canvas.content.briefs import info_card
from briefing_canvas.core.models import make_planner_section, make_section, new_id
from briefing_canvas.core.query import extract_subject, simple_intent
from briefing_canvas.handlers.base import HandlerResult, QueryContext

logger = logging.getLogger(__name__)

# intent -> (id stem, planner subtitle, chat line)
INTENTS = {
    "plan": ("plan", "Plan Actions", "Here's your plan"),
    "summary": ("summary", "Summary Actions", "Here's the summary"),
    "complete": ("complete", "Complete Information Actions", "Here's the complete information"),
    "next": ("next", "Next Information Actions", "Here's what's next"),
}


def matches(ctx: QueryContext) -> bool:
    return simple_intent(ctx.query) is not None


def produce(ctx: QueryContext) -> HandlerResult:
    intent = simple_intent(ctx.query)
    stem, planner_title, message = INTENTS[intent]
    subject = extract_subject(ctx.query, intent)
    logger.debug("Simple query %s (subject=%r)", intent, subject)

    card = info_card(ctx.query, ctx.today)
    if subject:
        card.title = subject[:1].upper() + subject[1:]
        message = f"{message} for {subject}"

    return HandlerResult(
        handled=True,
        sections=[
            make_section(new_id(f"focus-info-{stem}"), card.highlight_title, card),
            make_planner_section(generate_actions(ctx.query), planner_title),
        ],
        message=message,
        needs_async_processing=True,
    )
