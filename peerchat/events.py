"""Keyboard handling for the chat screen."""

from __future__ import annotations

import asyncio
import enum
from dataclasses import dataclass

from .message import Message
from .state import UiState

PAGE_SCROLL = 5


class KeyCode(enum.Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ESC = "esc"
    UP = "up"
    DOWN = "down"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    OTHER = "other"


@dataclass(frozen=True)
class KeyEvent:
    """A key press; `char` is set for KeyCode.CHAR."""

    code: KeyCode
    char: str = ""
    ctrl: bool = False


class UiEventKind(enum.Enum):
    SEND_MESSAGE = "send_message"
    QUIT = "quit"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    SCROLL_TO_BOTTOM = "scroll_to_bottom"


@dataclass(frozen=True)
class UiEvent:
    kind: UiEventKind
    message: Message | None = None


class EventHandler:
    """Turns key presses into edits of the UI state and outgoing messages."""

    def process_key_event(self, key_event: KeyEvent, state: UiState) -> UiEvent | None:
        """Apply direct edits to the state and return the event to act on, if any."""
        code = key_event.code
        if code is KeyCode.CHAR:
            if key_event.ctrl:
                return self._control_char(key_event.char, state)
            state.push_char(key_event.char)
            return None
        if code is KeyCode.BACKSPACE:
            state.pop_char()
            return None
        if code is KeyCode.ENTER:
            if state.input:
                return UiEvent(UiEventKind.SEND_MESSAGE, state.create_message())
            return None
        if code is KeyCode.PAGE_UP:
            for _ in range(PAGE_SCROLL):
                state.scroll_up()
            return None
        if code is KeyCode.PAGE_DOWN:
            for _ in range(PAGE_SCROLL):
                state.scroll_down()
            return None
        simple = {
            KeyCode.ESC: UiEventKind.QUIT,
            KeyCode.UP: UiEventKind.SCROLL_UP,
            KeyCode.DOWN: UiEventKind.SCROLL_DOWN,
            KeyCode.END: UiEventKind.SCROLL_TO_BOTTOM,
        }
        kind = simple.get(code)
        return UiEvent(kind) if kind is not None else None

    @staticmethod
    def _control_char(char: str, state: UiState) -> UiEvent | None:
        if char == "c":
            return UiEvent(UiEventKind.QUIT)
        if char == "l":
            return UiEvent(UiEventKind.SCROLL_TO_BOTTOM)
        if char == "u":
            state.clear_input()
        return None

    async def handle_key_event(
        self, key_event: KeyEvent, state: UiState, net_queue: asyncio.Queue
    ) -> UiEvent | None:
        """Process a key press fully, queueing outgoing messages for the network."""
        event = self.process_key_event(key_event, state)
        if event is None:
            return None
        if event.kind is UiEventKind.SEND_MESSAGE:
            await net_queue.put(event.message)
            state.add_message(event.message)
            state.clear_input()
        elif event.kind is UiEventKind.QUIT:
            state.quit()
        elif event.kind is UiEventKind.SCROLL_UP:
            state.scroll_up()
        elif event.kind is UiEventKind.SCROLL_DOWN:
            state.scroll_down()
        elif event.kind is UiEventKind.SCROLL_TO_BOTTOM:
            state.scroll_to_bottom()
        return event