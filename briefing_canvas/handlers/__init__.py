"""The dispatch chain.

Handlers are tried top to bottom and the first whose predicate matches
answers the query. Trigger keywords overlap heavily ("visit", "plan",
"schedule" recur), so the order below decides which brief a query gets.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from briefing_canvas.handlers import (
    info,
    inventory,
    modules,
    planner,
    procurement,
    quick_actions,
    recommendation,
    scenarios,
    simple,
    topics,
    visits,
)
from briefing_canvas.handlers.base import DECLINED, Handler, HandlerResult, QueryContext

logger = logging.getLogger(__name__)

DEFAULT_CHAIN: List[Handler] = [
    Handler("module_switch", modules.matches, modules.produce, "module_delay"),
    Handler("simple_query", simple.matches, simple.produce),
    Handler("named_scenario", scenarios.matches, scenarios.produce),
    Handler("quick_action", quick_actions.matches, quick_actions.produce),
    Handler("inventory_check", inventory.matches, inventory.produce, "inventory_delay"),
    Handler("planner_add", planner.add_matches, planner.add_produce, None),
    Handler("procurement_progress", procurement.matches, procurement.produce),
    Handler("domain_topic", topics.matches, topics.produce),
    Handler("recommendation", recommendation.matches, recommendation.produce, "lookup_delay"),
    Handler("visit", visits.matches, visits.produce),
    Handler("info_query", info.info_matches, info.info_produce),
    Handler("planner_request", planner.request_matches, planner.request_produce, None),
    Handler("informational", planner.informational_matches, planner.informational_produce),
    Handler("data_lookup", info.lookup_matches, info.lookup_produce, "lookup_delay"),
    Handler("noop", info.noop_matches, info.noop_produce, "lookup_delay"),
]


def route(ctx: QueryContext, chain: Optional[Sequence[Handler]] = None) -> Tuple[Optional[Handler], HandlerResult]:
    """First handler in ``chain`` that claims the query, and its result."""
    for handler in chain if chain is not None else DEFAULT_CHAIN:
        if not handler.matches(ctx):
            continue
        result = handler.produce(ctx)
        if result.handled:
            logger.debug("Routed %r -> %s", ctx.query, handler.name)
            return handler, result
    return None, DECLINED


__all__ = ["DEFAULT_CHAIN", "Handler", "HandlerResult", "QueryContext", "route"]
