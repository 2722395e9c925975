"""Rich renderables for the canvas and the chat log.

Renderers only read engine state. A card is drawn from its payload once
its section is fully revealed; anything else shows ``visible_content``
as text.
"""

from __future__ import annotations

from typing import List

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from briefing_canvas.core.models import BULLET, Checklist, ChatMessage, HighlightCard, Section

ROLE_STYLES = {
    "user": ("You", "bold cyan"),
    "assistant": ("Assistant", "bold green"),
    "system": ("•", "dim"),
}


def render_card(card: HighlightCard) -> Group:
    parts = []
    if card.title or card.subtitle:
        heading = Text(card.title, style="bold")
        if card.subtitle:
            heading.append(f"\n{card.subtitle}", style="italic")
        parts.append(heading)

    if card.facts:
        facts = Table.grid(padding=(0, 2))
        facts.add_column(style="dim")
        facts.add_column()
        for key, value in card.facts.items():
            facts.add_row(key, value)
        parts.append(facts)

    if card.highlights:
        table = Table(title=card.highlight_title or None, show_header=False, box=None, padding=(0, 2))
        table.add_column(style="cyan", no_wrap=True)
        table.add_column()
        for h in card.highlights:
            table.add_row(h.time, h.description)
        parts.append(table)
    return Group(*parts)


def render_checklist(text: str) -> Text:
    out = Text()
    for i, line in enumerate(text.split("\n")):
        if i:
            out.append("\n")
        if line.startswith(BULLET):
            out.append(BULLET, style="yellow")
            out.append(line[len(BULLET):])
        else:
            out.append(line)
    return out


def render_section(section: Section) -> Panel:
    payload = section.payload
    if isinstance(payload, HighlightCard) and section.is_fully_revealed:
        body = render_card(payload)
    elif isinstance(payload, Checklist):
        body = render_checklist(section.visible_content)
    else:
        body = Text(section.visible_content)

    title = f"[bold]{section.title}[/bold]"
    style = "magenta" if section.is_planner else ("green" if section.is_atomic else "blue")
    return Panel(body, title=title, subtitle=section.sub_title, border_style=style, title_align="left")


def render_messages(messages: List[ChatMessage]) -> Text:
    out = Text()
    for m in messages:
        label, style = ROLE_STYLES.get(m.role, (m.role, ""))
        out.append(f"{label}: ", style=style)
        out.append(m.text, style="dim" if m.role == "system" else "")
        if m.is_typing:
            out.append("▌", style="green")
        out.append("\n")
    return out


def render_canvas(sections: List[Section], messages: List[ChatMessage]) -> Group:
    visible = [render_section(s) for s in sections if s.is_visible]
    return Group(render_messages(messages), *visible)
