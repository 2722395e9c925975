from briefing_canvas.core.clock import ManualClock, RealtimeClock, Timer
from briefing_canvas.core.models import (
    PLANNER_TITLE,
    CanvasState,
    ChatMessage,
    Checklist,
    HighlightCard,
    PlainText,
    Section,
    make_planner_section,
    make_section,
)
from briefing_canvas.core.query import normalize
from briefing_canvas.core.sections import add_sections, merge_planner_sections, replace_focus_cards

__all__ = [
    "ManualClock",
    "RealtimeClock",
    "Timer",
    "PLANNER_TITLE",
    "CanvasState",
    "ChatMessage",
    "Checklist",
    "HighlightCard",
    "PlainText",
    "Section",
    "make_section",
    "make_planner_section",
    "normalize",
    "add_sections",
    "merge_planner_sections",
    "replace_focus_cards",
]
