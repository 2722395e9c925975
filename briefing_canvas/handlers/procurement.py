"""Procurement progress against the season target.

The only handler with randomised output; it draws from ``ctx.rng``.
"""

from __future__ import annotations

import logging

from briefing_canvas.content.actions import generate_procurement_snapshot, procurement_actions
from briefing_canvas.core.models import make_planner_section, make_section, new_id
from briefing_canvas.handlers.base import HandlerResult, QueryContext

logger = logging.getLogger(__name__)


def matches(ctx: QueryContext) -> bool:
    q = ctx.lowered
    return "procurement" in q and any(w in q for w in ("season", "target", "progress", "risk"))


def produce(ctx: QueryContext) -> HandlerResult:
    snapshot = generate_procurement_snapshot(ctx.rng)
    logger.debug("Procurement risk=%s procured=%d%%", snapshot.risk_level, snapshot.procured_percentage)
    return HandlerResult(
        handled=True,
        sections=[
            make_section(new_id("focus-procurement"), "Procurement Progress", "\n".join(snapshot.lines()), type="list"),
            make_planner_section(
                procurement_actions(snapshot),
                "Procurement Action Plan",
                section_id=new_id("planner-procurement"),
            ),
        ],
        message="Procurement progress summary displayed.",
        needs_async_processing=True,
    )
