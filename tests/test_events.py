import asyncio

import pytest

from peerchat.events import EventHandler, KeyCode, KeyEvent, UiEventKind
from peerchat.message import Message
from peerchat.state import UiState


def new_state(count=0):
    state = UiState(username="alice", token="token")
    for number in range(count):
        state.add_message(Message(sender="bob", content=str(number), timestamp="t", token="token"))
    return state


def char(c, ctrl=False):
    return KeyEvent(KeyCode.CHAR, c, ctrl)


def test_typing_and_backspace():
    handler, state = EventHandler(), new_state()
    for c in "hey":
        assert handler.process_key_event(char(c), state) is None
    handler.process_key_event(KeyEvent(KeyCode.BACKSPACE), state)
    assert state.input == "he"


def test_enter_on_empty_input_does_nothing():
    assert EventHandler().process_key_event(KeyEvent(KeyCode.ENTER), new_state()) is None


def test_enter_builds_message():
    handler, state = EventHandler(), new_state()
    handler.process_key_event(char("x"), state)
    event = handler.process_key_event(KeyEvent(KeyCode.ENTER), state)
    assert event.kind is UiEventKind.SEND_MESSAGE
    assert (event.message.sender, event.message.content) == ("alice", "x")


@pytest.mark.parametrize(
    "key, kind",
    [
        (KeyEvent(KeyCode.ESC), UiEventKind.QUIT),
        (KeyEvent(KeyCode.UP), UiEventKind.SCROLL_UP),
        (KeyEvent(KeyCode.DOWN), UiEventKind.SCROLL_DOWN),
        (KeyEvent(KeyCode.END), UiEventKind.SCROLL_TO_BOTTOM),
        (KeyEvent(KeyCode.CHAR, "c", True), UiEventKind.QUIT),
        (KeyEvent(KeyCode.CHAR, "l", True), UiEventKind.SCROLL_TO_BOTTOM),
    ],
)
def test_key_to_event(key, kind):
    assert EventHandler().process_key_event(key, new_state()).kind is kind


def test_ctrl_u_clears_input():
    handler, state = EventHandler(), new_state()
    handler.process_key_event(char("a"), state)
    assert handler.process_key_event(char("u", ctrl=True), state) is None
    assert state.input == ""


def test_unknown_ctrl_and_other_keys_ignored():
    handler, state = EventHandler(), new_state()
    assert handler.process_key_event(char("z", ctrl=True), state) is None
    assert handler.process_key_event(KeyEvent(KeyCode.OTHER), state) is None
    assert state.input == ""


def test_page_keys_move_five():
    handler, state = EventHandler(), new_state(20)
    bottom = state.scroll_offset
    handler.process_key_event(KeyEvent(KeyCode.PAGE_UP), state)
    assert state.scroll_offset == bottom - 5
    handler.process_key_event(KeyEvent(KeyCode.PAGE_DOWN), state)
    assert state.scroll_offset == bottom


@pytest.mark.asyncio
async def test_handle_enter_queues_and_records():
    handler, state = EventHandler(), new_state()
    queue = asyncio.Queue()
    handler.process_key_event(char("h"), state)
    event = await handler.handle_key_event(KeyEvent(KeyCode.ENTER), state, queue)
    assert queue.get_nowait() == event.message
    assert state.messages == [event.message]
    assert state.input == ""


@pytest.mark.asyncio
async def test_handle_escape_quits():
    state = new_state()
    await EventHandler().handle_key_event(KeyEvent(KeyCode.ESC), state, asyncio.Queue())
    assert state.should_quit()


@pytest.mark.asyncio
async def test_handle_scroll_events():
    handler, state = EventHandler(), new_state(5)
    queue = asyncio.Queue()
    bottom = state.scroll_offset
    await handler.handle_key_event(KeyEvent(KeyCode.UP), state, queue)
    assert state.scroll_offset == bottom - 1
    await handler.handle_key_event(KeyEvent(KeyCode.DOWN), state, queue)
    assert state.scroll_offset == bottom
    state.scroll_offset = 0
    await handler.handle_key_event(KeyEvent(KeyCode.END), state, queue)
    assert state.scroll_offset == bottom
    assert queue.empty()