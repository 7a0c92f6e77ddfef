"""Drawing of the chat screen onto a curses-like window."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from email.utils import parsedate_to_datetime
from typing import Any

from .message import Message
from .state import UiState

UNKNOWN_TIME = "??:??:??"
INPUT_TITLE = "Type a message (ESC - quit, \u2191\u2193 - scroll)"

# Share of the screen height given to messages, input box and status bar.
_LAYOUT_PERCENTAGES = (75, 20, 5)

Span = tuple[str, str, bool]
StyleFn = Callable[[str, bool], int]


def format_timestamp(timestamp: str) -> str:
    """Render an RFC 2822 timestamp as HH:MM:SS, or a placeholder if it is not one."""
    try:
        moment = parsedate_to_datetime(timestamp)
    except (TypeError, ValueError, IndexError):
        return UNKNOWN_TIME
    if moment is None:
        return UNKNOWN_TIME
    return moment.strftime("%H:%M:%S")


def message_line(message: Message, current_user: str) -> list[Span]:
    """Spans of (text, colour, bold) for one line of the message list."""
    own = message.sender == current_user
    return [
        (f"[{format_timestamp(message.timestamp)}] ", "dark_gray", False),
        (f"{message.sender}: ", "green" if own else "yellow", True),
        (message.content, "white" if own else "gray", False),
    ]


def _no_style(colour: str, bold: bool) -> int:
    return 0


@dataclass
class _Canvas:
    window: Any
    height: int
    width: int

    def put(self, y: int, x: int, text: str, attr: int, right: int | None = None) -> None:
        """Write text clipped to the row, never touching the bottom-right cell."""
        if not (0 <= y < self.height) or x < 0:
            return
        limit = self.width if right is None else min(right, self.width)
        if y == self.height - 1:
            limit = min(limit, self.width - 1)
        room = limit - x
        if room <= 0 or not text:
            return
        self.window.addnstr(y, x, text, min(len(text), room), attr)


class UiRenderer:
    """Draws the message list, the input box and the status bar."""

    def __init__(self, style: StyleFn | None = None) -> None:
        self._style = style or _no_style

    def create_layout(self, height: int) -> list[tuple[int, int]]:
        """Split `height` rows into (top, rows) areas for messages, input and status."""
        height = max(height, 0)
        first = (height * _LAYOUT_PERCENTAGES[0] + 50) // 100
        second = min((height * _LAYOUT_PERCENTAGES[1] + 50) // 100, height - first)
        third = height - first - second
        return [(0, first), (first, second), (first + second, third)]

    def render(self, window: Any, state: UiState) -> None:
        """Draw the whole screen for the given state."""
        height, width = window.getmaxyx()
        canvas = _Canvas(window, height, width)
        window.erase()
        messages_area, input_area, status_area = self.create_layout(height)
        self._render_messages(canvas, messages_area, state)
        self._render_input(canvas, input_area, state)
        self._render_status_bar(canvas, status_area, state)
        window.refresh()

    def _box(self, canvas: _Canvas, area: tuple[int, int], colour: str, title: str) -> None:
        top, rows = area
        if rows <= 0 or canvas.width <= 0:
            return
        attr = self._style(colour, False)
        inner = max(canvas.width - 2, 0)
        canvas.put(top, 0, "\u250c" + "\u2500" * inner + "\u2510", attr)
        for y in range(top + 1, top + rows - 1):
            canvas.put(y, 0, "\u2502", attr)
            canvas.put(y, canvas.width - 1, "\u2502", attr)
        if rows >= 2:
            canvas.put(top + rows - 1, 0, "\u2514" + "\u2500" * inner + "\u2518", attr)
        canvas.put(top, 1, title, attr, right=canvas.width - 1)

    def _render_messages(self, canvas: _Canvas, area: tuple[int, int], state: UiState) -> None:
        top, rows = area
        title = f"Chat ({len(state.messages)} messages)"
        self._box(canvas, area, "cyan", title)
        visible_height = max(rows - 2, 0)
        for row, message in enumerate(state.visible_messages(visible_height)):
            x = 1
            for text, colour, bold in message_line(message, state.username):
                canvas.put(top + 1 + row, x, text, self._style(colour, bold), right=canvas.width - 1)
                x += len(text)

    def _render_input(self, canvas: _Canvas, area: tuple[int, int], state: UiState) -> None:
        top, rows = area
        self._box(canvas, area, "green", INPUT_TITLE)
        if rows > 2:
            canvas.put(top + 1, 1, state.input, self._style("white", False), right=canvas.width - 1)

    def _render_status_bar(self, canvas: _Canvas, area: tuple[int, int], state: UiState) -> None:
        top, rows = area
        if rows <= 0:
            return
        text = f"User: {state.username} | Messages: {len(state.messages)} | Ctrl+C - quit"
        canvas.put(top, 0, text.ljust(canvas.width), self._style("status", False))