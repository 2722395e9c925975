"""Progressive reveal loops.

``RevealScheduler`` walks the canvas sections in order, showing focus and
component sections in one step and typing everything else out one
character per tick. ``ChatTypewriter`` types the newest assistant message
the same way, on its own timer.

Both loops only ever act through the injected clock. Every callback
carries the token it was scheduled under and does nothing once that
token is no longer current.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, List, Optional

from briefing_canvas.config import EngineSettings
from briefing_canvas.core.clock import ManualClock, Timer
from briefing_canvas.core.models import COMPLETE, CanvasState, ChatMessage

logger = logging.getLogger(__name__)


def first_pending_index(state: CanvasState) -> int:
    """Index of the first section not yet fully revealed, or len(sections)."""
    for i, section in enumerate(state.sections):
        if not section.is_fully_revealed:
            return i
    return len(state.sections)


class RevealScheduler:
    """Drives ``current_section_index`` / ``typing_index`` over the sections."""

    def __init__(
        self,
        state: CanvasState,
        clock: ManualClock,
        settings: EngineSettings,
        notify: Callable[[str], None],
    ):
        self.state = state
        self.clock = clock
        self.settings = settings
        self._notify = notify
        self._token = 0
        self._timer: Optional[Timer] = None
        self._announced = False
        self._typed = False

    def stop(self, rearm_notice: bool = True) -> None:
        """Invalidate every scheduled step. ``rearm_notice`` lets the next
        section that becomes visible announce the planning notice again."""
        self._token += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if rearm_notice:
            self._announced = False

    def start(self, delay: float = 0.0) -> None:
        """Reveal from the first section that is not fully shown yet."""
        self.stop(rearm_notice=False)
        token = self._token
        index = first_pending_index(self.state)
        self.state.current_section_index = index
        self._later(delay, lambda: self._enter(token, index))

    def _later(self, delay: float, fn: Callable[[], None]) -> None:
        self._timer = self.clock.call_later(delay, fn)

    def _stale(self, token: int, index: int) -> bool:
        if token != self._token or index != self.state.current_section_index:
            logger.debug("Ignoring stale reveal step (token %d, index %d)", token, index)
            return True
        return index >= len(self.state.sections)

    def _enter(self, token: int, index: int) -> None:
        if token != self._token:
            logger.debug("Ignoring stale reveal step (token %d)", token)
            return

        sections = self.state.sections
        self.state.current_section_index = index
        if index >= len(sections):
            self.state.status = COMPLETE
            self._timer = None
            return

        section = sections[index]
        if not section.content.startswith(section.visible_content):
            section.visible_content = ""
        self.state.typing_index = len(section.visible_content)
        self._typed = False

        if not section.is_visible:
            section.is_visible = True
            if not self._announced:
                self._announced = True
                self._notify(self.settings.planning_notice)

        if section.is_atomic:
            section.visible_content = section.content
            self.state.typing_index = len(section.content)
            self._enter(token, index + 1)
            return
        self._step(token, index)

    def _step(self, token: int, index: int) -> None:
        section = self.state.sections[index]
        if self.state.typing_index < len(section.content):
            self._later(self.settings.reveal_tick, lambda: self._type_char(token, index))
        elif self._typed:
            self._later(self.settings.settle_delay, lambda: self._enter(token, index + 1))
        else:
            self._enter(token, index + 1)

    def _type_char(self, token: int, index: int) -> None:
        if self._stale(token, index):
            return
        section = self.state.sections[index]
        self.state.typing_index += 1
        section.visible_content = section.content[: self.state.typing_index]
        self._typed = True
        self._step(token, index)


class ChatTypewriter:
    """Types out the newest assistant message one character per tick.

    Posting a new message finishes any older one that is still typing,
    except for system notices, which slot in above a message that is
    mid-type and leave it running.
    """

    def __init__(self, state: CanvasState, clock: ManualClock, settings: EngineSettings):
        self.state = state
        self.clock = clock
        self.settings = settings
        self._timer: Optional[Timer] = None

    @property
    def messages(self) -> List[ChatMessage]:
        return self.state.messages

    def post(self, role: str, text: str, typewriter: bool = True) -> ChatMessage:
        msgs = self.messages
        if role == "system" and msgs and msgs[-1].is_typing:
            message = ChatMessage(id=_message_id(), role=role, text=text)
            msgs.insert(len(msgs) - 1, message)
            return message

        self.flush()
        if typewriter:
            message = ChatMessage(id=_message_id(), role=role, text="", full_text=text, is_typing=True)
            msgs.append(message)
            self._timer = self.clock.call_later(self.settings.chat_tick, lambda: self._tick(message.id))
        else:
            message = ChatMessage(id=_message_id(), role=role, text=text)
            msgs.append(message)
        return message

    def flush(self) -> None:
        """Finish every message that is still typing."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        for m in self.messages:
            if m.is_typing:
                m.text = m.full_text or m.text
                m.is_typing = False

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _tick(self, message_id: str) -> None:
        msgs = self.messages
        if not msgs or msgs[-1].id != message_id or not msgs[-1].is_typing:
            logger.debug("Ignoring stale typewriter tick for %s", message_id)
            return
        message = msgs[-1]
        full = message.full_text or ""
        if len(message.text) < len(full):
            message.text = full[: len(message.text) + 1]
        if message.text == full:
            message.is_typing = False
            self._timer = None
            return
        self._timer = self.clock.call_later(self.settings.chat_tick, lambda: self._tick(message_id))


def _message_id() -> str:
    return uuid.uuid4().hex[:9]
