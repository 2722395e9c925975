"""The canvas engine: one instance owns the sections, the chat log and the
reveal loops.

``dispatch`` returns as soon as the query is routed. The handler's result
lands after the handler's delay, and the reveal runs on the clock from
there, so callers (the CLI, the tests) drive progress by advancing the
clock.

A new dispatch supersedes the previous one: pending result application
and reveal steps from the older dispatch are dropped.
"""

from __future__ import annotations

import dataclasses
import logging
import random
from datetime import date as Date
from typing import Any, Callable, Dict, List, Optional, Sequence

from briefing_canvas.config import EngineSettings
from briefing_canvas.content.visits import ParsedVisit
from briefing_canvas.core.clock import ManualClock, Timer
from briefing_canvas.core.models import COMPLETE, GENERATING, IDLE, CanvasState, ChatMessage, Section
from briefing_canvas.core.query import normalize
from briefing_canvas.core.reveal import ChatTypewriter, RevealScheduler, first_pending_index
from briefing_canvas.core.sections import add_sections, find_focus_section, remove_planner, replace_focus_cards
from briefing_canvas.handlers import DEFAULT_CHAIN, route
from briefing_canvas.handlers.base import Handler, HandlerResult, QueryContext

logger = logging.getLogger(__name__)


class CanvasEngine:
    """Dispatches queries and reveals their results on a clock.

    Args:
        clock: Timeline for every delay. Defaults to a ``ManualClock``,
            which only moves when advanced.
        settings: Reveal timings and notice text.
        rng: Random source handed to handlers; seed it to pin outcomes.
        today: Date handlers treat as "today". Defaults to the real date
            at dispatch time.
        chain: Ordered handlers. Defaults to ``DEFAULT_CHAIN``.
    """

    def __init__(
        self,
        clock: Optional[ManualClock] = None,
        settings: Optional[EngineSettings] = None,
        rng: Optional[random.Random] = None,
        today: Optional[Date] = None,
        chain: Optional[Sequence[Handler]] = None,
    ):
        self.clock = clock if clock is not None else ManualClock()
        self.settings = settings or EngineSettings()
        self.rng = rng or random.Random()
        self.today = today
        self.chain = list(chain) if chain is not None else list(DEFAULT_CHAIN)

        self.state = CanvasState()
        self.chat = ChatTypewriter(self.state, self.clock, self.settings)
        self.reveal = RevealScheduler(self.state, self.clock, self.settings, notify=self._notice)
        self._generation = 0
        self._pending: Optional[Timer] = None

    # ── Read access ──────────────────────────────────────────────

    @property
    def sections(self) -> List[Section]:
        return self.state.sections

    @property
    def messages(self) -> List[ChatMessage]:
        return self.state.messages

    @property
    def status(self) -> str:
        return self.state.status

    def section(self, section_id: str) -> Optional[Section]:
        return next((s for s in self.state.sections if s.id == section_id), None)

    @property
    def is_busy(self) -> bool:
        return self.state.status == GENERATING or any(m.is_typing for m in self.state.messages)

    # ── Dispatch ─────────────────────────────────────────────────

    def dispatch(
        self,
        query: str,
        is_recommendation: bool = False,
        display_query: Optional[str] = None,
        on_vip_visit_parsed: Optional[Callable[[ParsedVisit], None]] = None,
        on_module_detected: Optional[Callable[[str], None]] = None,
    ) -> Optional[str]:
        """Route ``query`` and schedule its effects.

        Returns the name of the handler that claimed the query.
        """
        clean, marked = normalize(query)
        generation = self._supersede()
        self.state.status = GENERATING
        self.chat.post("user", display_query or clean, typewriter=False)

        ctx = QueryContext(
            query=clean,
            is_recommendation=is_recommendation or marked,
            sections=list(self.state.sections),
            rng=self.rng,
            today=self.today or Date.today(),
        )
        handler, result = route(ctx, self.chain)
        if handler is None:
            logger.info("No handler claimed %r", clean)
            self._resume_or_complete()
            return None

        logger.info("Dispatch %r -> %s (generation %d)", clean, handler.name, generation)
        if result.module and on_module_detected is not None:
            on_module_detected(result.module)
        if result.vip_visit is not None and on_vip_visit_parsed is not None:
            on_vip_visit_parsed(result.vip_visit)

        if handler.delay is None and not result.needs_async_processing:
            self._apply(generation, result)
        else:
            delay = getattr(self.settings, handler.delay or "thinking_delay")
            self._pending = self.clock.call_later(delay, lambda: self._apply(generation, result))
        return handler.name

    def _supersede(self) -> int:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.reveal.stop()
        return self._generation

    def _apply(self, generation: int, result: HandlerResult) -> None:
        if generation != self._generation:
            logger.debug("Dropping result of superseded dispatch %d", generation)
            return
        self._pending = None

        if result.message:
            self.chat.post("assistant", result.message)

        if not result.sections:
            self._resume_or_complete()
            return

        if find_focus_section(result.sections) is not None:
            self.state.sections = replace_focus_cards(self.state.sections, result.sections)
        else:
            self.state.sections = add_sections(self.state.sections, result.sections)
        self.reveal.start(self.settings.reveal_start_delay)

    def _resume_or_complete(self) -> None:
        """Finish sections an earlier reveal left partway, else mark complete."""
        if first_pending_index(self.state) < len(self.state.sections):
            self.reveal.start()
        else:
            self.state.status = COMPLETE

    def _notice(self, text: str) -> None:
        self.chat.post("system", text, typewriter=False)

    # ── Housekeeping ─────────────────────────────────────────────

    def reset(self) -> None:
        """Clear everything back to the idle state."""
        self._supersede()
        self.chat.cancel()
        self.state.sections = []
        self.state.messages = []
        self.state.status = IDLE
        self.state.current_section_index = -1
        self.state.typing_index = 0
        logger.info("Canvas reset")

    def clear_planner(self) -> None:
        """Drop the planner checklist; an in-flight reveal carries on."""
        self.state.sections = remove_planner(self.state.sections)
        if self.state.status == GENERATING and self._pending is None:
            self.reveal.stop(rearm_notice=False)
            self.reveal.start()

    def run_until_idle(self) -> int:
        """Drain the clock. Only meaningful with a ``ManualClock``."""
        return self.clock.run_until_idle()

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict copy of the canvas for renderers and assertions."""
        return {
            "status": self.state.status,
            "current_section_index": self.state.current_section_index,
            "typing_index": self.state.typing_index,
            "sections": [
                {
                    "id": s.id,
                    "title": s.title,
                    "sub_title": s.sub_title,
                    "type": s.type,
                    "content": s.content,
                    "visible_content": s.visible_content,
                    "is_visible": s.is_visible,
                    "payload": s.payload.model_dump(),
                }
                for s in self.state.sections
            ],
            "messages": [dataclasses.asdict(m) for m in self.state.messages],
        }
