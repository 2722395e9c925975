"""Highlight-card builders shared by the handlers."""

from __future__ import annotations

from datetime import date as Date
from typing import Dict, List, Optional, Sequence, Tuple

from briefing_canvas.content.calendar import aggregate
from briefing_canvas.core.models import Highlight, HighlightCard


def highlights(rows: Sequence[Tuple[str, str]]) -> List[Highlight]:
    return [Highlight(time=t, description=d) for t, d in rows]


def query_type(query: str) -> str:
    q = query.lower()
    if "vip" in q or "minister" in q or "visit" in q:
        return "VISIT"
    if "plan" in q:
        return "PLAN"
    if "summary" in q or "status" in q:
        return "SUMMARY"
    if "approval" in q or "approve" in q:
        return "APPROVAL"
    if "schedule" in q or "when" in q or "time" in q:
        return "SCHEDULE"
    return "FACTORY"


def info_card(query: str, date: Optional[Date] = None) -> HighlightCard:
    """Calendar-backed information card: up to five chronological highlights."""
    items = aggregate(query, date)
    return HighlightCard(
        highlight_title=f"{query_type(query)} | INFORMATION",
        highlights=[Highlight(time=i.time, description=i.description) for i in items],
    )


def protocol_card(
    visitor: str,
    title: str,
    date_time: str,
    location: str,
    protocol_level: str,
    delegation: str,
    rows: Sequence[Tuple[str, str]],
    highlight_title: str = "TODAY | HIGHLIGHTS",
    lead_escort: Optional[str] = None,
    security: Optional[str] = None,
) -> HighlightCard:
    facts: Dict[str, str] = {
        "Date & Time": date_time,
        "Location": location,
        "Protocol Level": protocol_level,
        "Delegation": delegation,
    }
    if lead_escort:
        facts["Lead Escort"] = lead_escort
    if security:
        facts["Security"] = security
    return HighlightCard(
        title=visitor,
        subtitle=title,
        facts=facts,
        highlight_title=highlight_title,
        highlights=highlights(rows),
    )


def status_card(title: str, subtitle: str, highlight_title: str, rows: Sequence[Tuple[str, str]]) -> HighlightCard:
    return HighlightCard(title=title, subtitle=subtitle, highlight_title=highlight_title, highlights=highlights(rows))
