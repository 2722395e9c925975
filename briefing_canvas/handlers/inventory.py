"""Inventory check: a chat answer only, the canvas is left alone."""

from __future__ import annotations

from briefing_canvas.handlers.base import HandlerResult, QueryContext

ANSWERS = [
    (("cane", "sugarcane"),
     "Yes, verified. We have 40 tons of fresh sugarcane delivered this morning. Storage yard is optimal."),
    (("equipment", "machinery"),
     "Inventory check confirms 200 units of processing equipment are available in the Maintenance Shed. "
     "50 more are currently in use at the Production Floor."),
    (("sugar", "product"),
     "Production reports 5,000 bags of sugar packed and ready for dispatch. "
     "Raw material stock is sufficient for another 15,000 bags."),
    (("quality", "inspection"),
     "Staffing logs show 12 quality control staff currently on duty at Main Gate. "
     "4 relief inspectors are available in the quality lab."),
]

DEFAULT_ANSWER = (
    "I've checked the inventory database. The requested resources are marked as "
    "'Available' and can be allocated to your plan."
)


def matches(ctx: QueryContext) -> bool:
    q = ctx.lowered
    return (
        "check stock" in q
        or "check inventory" in q
        or "do we have" in q
        or ("available" in q and "?" in q)
    )


def produce(ctx: QueryContext) -> HandlerResult:
    q = ctx.lowered
    for keywords, answer in ANSWERS:
        if any(k in q for k in keywords):
            return HandlerResult(handled=True, message=answer, needs_async_processing=True)
    return HandlerResult(handled=True, message=DEFAULT_ANSWER, needs_async_processing=True)
