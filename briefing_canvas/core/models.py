"""Core data model shared by the handlers, the merge engine and the scheduler.

A ``Section`` is one block on the canvas. Its ``payload`` is decided when
the section is built (plain text, a highlight card, or a checklist) and
``content`` is the payload's rendered text, which is what the reveal
scheduler exposes through ``visible_content``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

PLANNER_TITLE = "Your Planner Actions"
FOCUS_PREFIX = "focus-"
BULLET = "[·]"

IDLE = "idle"
GENERATING = "generating"
COMPLETE = "complete"

SECTION_TYPES = ("text", "list", "steps", "components")


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


# ══════════════════════════════════════════════════════════════════
# Payloads
# ══════════════════════════════════════════════════════════════════

class PlainText(BaseModel):
    kind: Literal["text"] = "text"
    text: str = ""

    def render(self) -> str:
        return self.text


class Highlight(BaseModel):
    """One row of a highlight card: a time (or short label) and a sentence."""
    time: str
    description: str


class HighlightCard(BaseModel):
    """Structured brief shown in the focus slot."""
    kind: Literal["card"] = "card"
    title: str = ""
    subtitle: str = ""
    facts: dict[str, str] = Field(default_factory=dict)
    highlight_title: str = ""
    highlights: list[Highlight] = Field(default_factory=list)

    def render(self) -> str:
        return self.model_dump_json()


class Checklist(BaseModel):
    """Planner checklist. Items are stored without the bullet marker."""
    kind: Literal["checklist"] = "checklist"
    items: list[str] = Field(default_factory=list)

    def render(self) -> str:
        return "\n".join(f"{BULLET} {item}" for item in self.items)

    @classmethod
    def from_text(cls, text: str) -> "Checklist":
        items = []
        for line in text.splitlines():
            line = line.strip()
            if not line:
                continue
            if line.startswith(BULLET):
                line = line[len(BULLET):].strip()
            items.append(line)
        return cls(items=items)


Payload = Annotated[Union[PlainText, HighlightCard, Checklist], Field(discriminator="kind")]


# ══════════════════════════════════════════════════════════════════
# Canvas state
# ══════════════════════════════════════════════════════════════════

@dataclass
class Section:
    """One displayable block on the canvas.

    ``visible_content`` is always a prefix of ``content`` while the
    section is under character reveal. ``is_visible`` turns on the moment
    the section becomes the reveal target.
    """

    id: str
    title: str
    payload: Payload
    type: str = "text"
    sub_title: Optional[str] = None
    visible_content: str = ""
    is_visible: bool = False
    content: str = field(init=False)

    def __post_init__(self):
        if self.type not in SECTION_TYPES:
            raise ValueError(f"Unknown section type: {self.type!r}")
        self.content = self.payload.render()

    @property
    def is_planner(self) -> bool:
        return self.title == PLANNER_TITLE

    @property
    def is_atomic(self) -> bool:
        """Focus and component sections are revealed in one step."""
        return self.id.startswith(FOCUS_PREFIX) or self.type == "components"

    @property
    def is_fully_revealed(self) -> bool:
        return self.is_visible and self.visible_content == self.content


@dataclass
class ChatMessage:
    id: str
    role: str  # "user" | "assistant" | "system"
    text: str
    full_text: Optional[str] = None
    is_typing: bool = False


@dataclass
class CanvasState:
    """Everything the renderers read. Mutated only by the engine."""
    sections: List[Section] = field(default_factory=list)
    messages: List[ChatMessage] = field(default_factory=list)
    status: str = IDLE
    current_section_index: int = -1
    typing_index: int = 0


def make_section(
    section_id: str,
    title: str,
    payload: Union[str, PlainText, HighlightCard, Checklist],
    type: str = "text",
    sub_title: Optional[str] = None,
) -> Section:
    if isinstance(payload, str):
        payload = PlainText(text=payload)
    return Section(id=section_id, title=title, payload=payload, type=type, sub_title=sub_title)


def make_planner_section(
    items: Union[str, List[str], Checklist],
    sub_title: Optional[str] = None,
    section_id: Optional[str] = None,
) -> Section:
    """Build a planner checklist section.

    ``items`` may be bare item strings, a ``[·]``-bulleted block of text,
    or a ready ``Checklist``.
    """
    if isinstance(items, str):
        checklist = Checklist.from_text(items)
    elif isinstance(items, Checklist):
        checklist = items
    else:
        checklist = Checklist.from_text("\n".join(items))
    return Section(
        id=section_id or new_id("planner"),
        title=PLANNER_TITLE,
        payload=checklist,
        type="list",
        sub_title=sub_title,
    )
