"""State of the chat screen: history, input line and scrolling."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import format_datetime

from .message import Message

MAX_MESSAGES = 1000


class InputMode(enum.Enum):
    NORMAL = "normal"
    EDITING = "editing"


class AppState(enum.Enum):
    RUNNING = "running"
    QUITTING = "quitting"


@dataclass
class UiState:
    """Everything the chat screen shows and edits."""

    username: str
    token: str
    messages: list[Message] = field(default_factory=list)
    input: str = ""
    input_mode: InputMode = InputMode.NORMAL
    app_state: AppState = AppState.RUNNING
    scroll_offset: int = 0
    max_messages: int = MAX_MESSAGES

    def add_message(self, message: Message) -> None:
        """Append a message, drop the oldest beyond the limit, follow the bottom."""
        self.messages.append(message)
        if len(self.messages) > self.max_messages:
            del self.messages[0]
        self.scroll_to_bottom()

    def clear_input(self) -> None:
        self.input = ""

    def push_char(self, char: str) -> None:
        self.input += char

    def pop_char(self) -> None:
        self.input = self.input[:-1]

    def create_message(self) -> Message:
        """Build an outgoing message from the current input line."""
        return Message(
            sender=self.username,
            content=self.input,
            timestamp=format_datetime(datetime.now(timezone.utc)),
            token=self.token,
        )

    def scroll_up(self) -> None:
        if self.scroll_offset > 0:
            self.scroll_offset -= 1

    def scroll_down(self) -> None:
        if self.scroll_offset < max(len(self.messages) - 1, 0):
            self.scroll_offset += 1

    def scroll_to_bottom(self) -> None:
        self.scroll_offset = max(len(self.messages) - 1, 0)

    def quit(self) -> None:
        self.app_state = AppState.QUITTING

    def should_quit(self) -> bool:
        return self.app_state is AppState.QUITTING

    def visible_messages(self, height: int) -> list[Message]:
        """Messages that fit in `height` rows, ending at the scroll position."""
        start = max(self.scroll_offset - max(height - 1, 0), 0)
        end = min(start + height, len(self.messages))
        return self.messages[start:end]