"""Tests for the chat typewriter."""

import pytest

from briefing_canvas.core.models import CanvasState
from briefing_canvas.core.reveal import ChatTypewriter


@pytest.fixture
def state():
    return CanvasState()


@pytest.fixture
def chat(state, clock, settings):
    return ChatTypewriter(state, clock, settings)


class TestTypewriter:
    def test_types_one_character_per_tick(self, chat, clock, settings):
        message = chat.post("assistant", "Hi")
        assert message.text == ""
        assert message.is_typing
        clock.advance(settings.chat_tick)
        assert message.text == "H"
        clock.advance(settings.chat_tick)
        assert message.text == "Hi"
        assert not message.is_typing
        assert clock.pending == 0

    def test_empty_message_finishes_on_first_tick(self, chat, clock, settings):
        message = chat.post("assistant", "")
        assert message.is_typing
        clock.advance(settings.chat_tick)
        assert not message.is_typing

    def test_plain_post_is_immediate(self, chat):
        message = chat.post("user", "hello", typewriter=False)
        assert message.text == "hello"
        assert not message.is_typing

    def test_new_message_flushes_older(self, chat, clock, settings):
        """Only the newest message is ever mid-type."""
        first = chat.post("assistant", "Hello there")
        clock.advance(settings.chat_tick)
        second = chat.post("assistant", "Next")
        assert first.text == "Hello there"
        assert not first.is_typing
        assert second.is_typing
        clock.run_until_idle()
        assert second.text == "Next"

    def test_system_notice_slots_above_typing_message(self, chat, state, clock):
        typing = chat.post("assistant", "Hello")
        chat.post("system", "Planning...", typewriter=False)
        assert [m.role for m in state.messages] == ["system", "assistant"]
        assert typing.is_typing
        clock.run_until_idle()
        assert typing.text == "Hello"

    def test_cancel_stops_typing(self, chat, clock):
        message = chat.post("assistant", "Hello")
        chat.cancel()
        clock.run_until_idle()
        assert message.text == ""

    def test_ids_are_unique(self, chat):
        ids = {chat.post("user", str(i), typewriter=False).id for i in range(50)}
        assert len(ids) == 50
