"""Recommendation follow-ups: the user picked a suggested question.

These answer in chat only; the canvas already shows the brief the
suggestion was made for.
"""

from __future__ import annotations

from briefing_canvas.handlers.base import HandlerResult, QueryContext

ANSWERS = [
    (("parking",),
     "Parking has been reserved at the main entrance for up to 5 vehicles. "
     "Security will direct the convoy on arrival."),
    (("escort",),
     "The Factory Admin will lead the escort. Two protocol officers will accompany the delegation "
     "from the gate to the conference room."),
    (("security briefing",),
     "The security briefing is set for 30 minutes before arrival at the main gate post. "
     "All shift supervisors have been notified."),
    (("samples", "prasadam"),
     "Sugar samples and prasadam packs for 15 guests will be ready at the reception desk by 10:30 AM."),
    (("approval workflow",),
     "Approvals route through the Department Head, then Finance, then the Managing Director. "
     "Items over Rs 5,00,000 need board sign-off."),
    (("notified",),
     "Department heads for Production, Quality Control and Security have been notified. "
     "Acknowledgements are tracked on your planner."),
    (("budget", "financial report"),
     "The current quarter budget is 82% utilised. The detailed financial report will be shared "
     "with the Finance team before the review."),
    (("deadline", "when should"),
     "Based on the current schedule, completion by end of day tomorrow keeps all downstream tasks on track."),
]

DEFAULT_ANSWER = "I've noted this requirement. I'll flag any potential conflicts with the existing schedule."


def answer_for(query: str) -> str:
    q = query.lower()
    for keywords, answer in ANSWERS:
        if any(k in q for k in keywords):
            return answer
    return DEFAULT_ANSWER


def matches(ctx: QueryContext) -> bool:
    return ctx.is_recommendation


def produce(ctx: QueryContext) -> HandlerResult:
    return HandlerResult(handled=True, message=answer_for(ctx.query), needs_async_processing=True)
