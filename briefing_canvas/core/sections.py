"""Section merge engine.

Pure transforms over ``(existing, incoming)`` section lists. Focus cards
are replaced wholesale, the planner checklist accumulates, everything
else is kept in place.
"""

from __future__ import annotations

import dataclasses
from typing import List, Optional

from briefing_canvas.core.models import FOCUS_PREFIX, Checklist, Section

# Title fragments that mark a section as a highlighted brief even without
# the focus- id prefix.
FOCUS_TITLE_MARKERS = [
    "Protocol Brief",
    "Appointment",
    "Approval",
    "Alert",
    "Reminder",
    "Notification",
    "Finance",
    "Revenue",
    "VIP",
    "Calendar",
    "Schedule",
    "Today's",
    "Tomorrow's",
]


def is_focus_card(section: Section) -> bool:
    if section.id.startswith(FOCUS_PREFIX) or section.id == "objective":
        return True
    return any(marker in section.title for marker in FOCUS_TITLE_MARKERS)


def filter_focus_cards(sections: List[Section]) -> List[Section]:
    """Drop focus cards, always keeping the planner."""
    return [s for s in sections if s.is_planner or not is_focus_card(s)]


def find_focus_section(sections: List[Section]) -> Optional[Section]:
    for s in sections:
        if s.id.startswith(FOCUS_PREFIX):
            return s
    return next((s for s in sections if is_focus_card(s)), None)


def find_planner_section(sections: List[Section]) -> Optional[Section]:
    return next((s for s in sections if s.is_planner), None)


def merge_planner_sections(
    existing: Optional[Section],
    incoming: Optional[Section],
) -> Optional[Section]:
    """Fold ``incoming`` checklist items into ``existing``.

    The existing section keeps its id, ``visible_content`` and
    ``is_visible`` so a reveal in progress carries on from where it was
    rather than restarting.
    """
    if existing is None:
        return incoming
    if incoming is None:
        return existing

    merged_payload = Checklist(items=_items(existing) + _items(incoming))
    return dataclasses.replace(
        existing,
        payload=merged_payload,
        sub_title=incoming.sub_title or existing.sub_title,
        visible_content=existing.visible_content,
        is_visible=existing.is_visible,
    )


def _items(section: Section) -> List[str]:
    if isinstance(section.payload, Checklist):
        return list(section.payload.items)
    return Checklist.from_text(section.content).items


def _fold_planners(sections: List[Section]) -> Optional[Section]:
    merged = None
    for s in sections:
        if s.is_planner:
            merged = merge_planner_sections(merged, s)
    return merged


def _place_planner(
    updated: List[Section],
    existing: List[Section],
    incoming: List[Section],
) -> List[Section]:
    merged = merge_planner_sections(find_planner_section(existing), _fold_planners(incoming))
    if merged is None:
        return updated
    for i, s in enumerate(updated):
        if s.is_planner:
            updated[i] = merged
            return updated
    updated.append(merged)
    return updated


def replace_focus_cards(existing: List[Section], incoming: List[Section]) -> List[Section]:
    """New focus sections first, then new ordinary ones, then the survivors."""
    new_focus = [s for s in incoming if not s.is_planner and is_focus_card(s)]
    new_other = [s for s in incoming if not s.is_planner and not is_focus_card(s)]
    updated = new_focus + new_other + filter_focus_cards(existing)
    return _place_planner(updated, existing, incoming)


def add_sections(existing: List[Section], incoming: List[Section]) -> List[Section]:
    updated = list(existing) + [s for s in incoming if not s.is_planner]
    return _place_planner(updated, existing, incoming)


def remove_planner(sections: List[Section]) -> List[Section]:
    return [s for s in sections if not s.is_planner]
