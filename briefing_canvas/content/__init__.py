from briefing_canvas.content.actions import (
    generate_actions,
    generate_follow_up_actions,
    generate_procurement_snapshot,
    procurement_actions,
)
from briefing_canvas.content.calendar import CalendarItem, aggregate, parse_time
from briefing_canvas.content.records import SearchResult, SystemRecord, describe, search
from briefing_canvas.content.visits import ParsedVisit, parse_visit

__all__ = [
    "CalendarItem",
    "aggregate",
    "parse_time",
    "generate_actions",
    "generate_follow_up_actions",
    "generate_procurement_snapshot",
    "procurement_actions",
    "SystemRecord",
    "SearchResult",
    "search",
    "describe",
    "ParsedVisit",
    "parse_visit",
]
