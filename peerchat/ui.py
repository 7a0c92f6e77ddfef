"""Terminal chat screen driven by curses."""

from __future__ import annotations

import asyncio
import curses
import sys
from typing import Any

from .events import EventHandler, KeyCode, KeyEvent
from .renderer import UiRenderer
from .state import UiState

POLL_INTERVAL = 0.1

_SPECIAL_KEYS = {
    curses.KEY_BACKSPACE: KeyCode.BACKSPACE,
    curses.KEY_ENTER: KeyCode.ENTER,
    curses.KEY_UP: KeyCode.UP,
    curses.KEY_DOWN: KeyCode.DOWN,
    curses.KEY_END: KeyCode.END,
    curses.KEY_PPAGE: KeyCode.PAGE_UP,
    curses.KEY_NPAGE: KeyCode.PAGE_DOWN,
}

_COLOURS = {
    "cyan": curses.COLOR_CYAN,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "white": curses.COLOR_WHITE,
    "gray": curses.COLOR_WHITE,
    "dark_gray": curses.COLOR_BLACK,
}


def translate_key(key: str | int) -> KeyEvent | None:
    """Turn a curses key (character or key code) into a key event."""
    if isinstance(key, int):
        if key == curses.KEY_RESIZE:
            return None
        return KeyEvent(_SPECIAL_KEYS.get(key, KeyCode.OTHER))
    if key in ("\n", "\r"):
        return KeyEvent(KeyCode.ENTER)
    if key in ("\x7f", "\x08"):
        return KeyEvent(KeyCode.BACKSPACE)
    if key == "\x1b":
        return KeyEvent(KeyCode.ESC)
    if len(key) == 1 and "\x01" <= key <= "\x1a":
        return KeyEvent(KeyCode.CHAR, chr(ord(key) + 96), ctrl=True)
    if key.isprintable():
        return KeyEvent(KeyCode.CHAR, key)
    return KeyEvent(KeyCode.OTHER)


def _make_style() -> Any:
    """Build a (colour, bold) -> attribute function for the current terminal."""
    pairs: dict[str, int] = {}
    if curses.has_colors():
        curses.start_color()
        background = -1
        try:
            curses.use_default_colors()
        except curses.error:
            background = curses.COLOR_BLACK
        for number, (name, colour) in enumerate(_COLOURS.items(), start=1):
            curses.init_pair(number, colour, background)
            pairs[name] = number
        status = len(pairs) + 1
        curses.init_pair(status, curses.COLOR_WHITE, curses.COLOR_BLACK)
        pairs["status"] = status

    def style(colour: str, bold: bool) -> int:
        attr = curses.color_pair(pairs[colour]) if colour in pairs else 0
        if colour == "status" and not pairs:
            attr |= curses.A_REVERSE
        if bold or colour == "dark_gray":
            attr |= curses.A_BOLD
        return attr

    return style


def _read_key(window: Any) -> str | int | None:
    try:
        return window.get_wch()
    except curses.error:
        return None


async def run_ui(
    user_queue: asyncio.Queue, net_queue: asyncio.Queue, username: str, token: str
) -> None:
    """Run the chat screen until the user quits."""
    window = curses.initscr()
    try:
        curses.noecho()
        curses.raw()
        curses.set_escdelay(25)
        window.keypad(True)
        window.nodelay(True)
        renderer = UiRenderer(_make_style())
        state = UiState(username=username, token=token)
        handler = EventHandler()

        while True:
            renderer.render(window, state)

            key = _read_key(window)
            if key is None:
                await asyncio.sleep(POLL_INTERVAL)
            else:
                key_event = translate_key(key)
                if key_event is not None:
                    try:
                        await handler.handle_key_event(key_event, state, net_queue)
                    except Exception as exc:  # keep the screen alive on handler failures
                        print(f"Failed to handle event: {exc}", file=sys.stderr)

            if state.should_quit():
                break

            while not user_queue.empty():
                state.add_message(user_queue.get_nowait())
    finally:
        window.keypad(False)
        curses.noraw()
        curses.echo()
        curses.endwin()