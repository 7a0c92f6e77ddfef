"""Sending and receiving chat messages over a WebSocket."""

from __future__ import annotations

import asyncio
import sys
from typing import Any

from websockets.exceptions import ConnectionClosed, WebSocketException

from .message import Message, decode_message, encode_message


async def send_message(websocket: Any, message: Message) -> None:
    """Send a message as a text frame; failures are reported, not raised."""
    try:
        await websocket.send(encode_message(message))
    except (WebSocketException, OSError) as exc:
        print(f"Failed to send message: {exc}", file=sys.stderr)


async def receive_messages(websocket: Any, queue: asyncio.Queue) -> None:
    """Forward every valid text message to the queue until the socket closes."""
    try:
        async for frame in websocket:
            if not isinstance(frame, str):
                continue
            try:
                message = decode_message(frame)
            except ValueError:
                continue
            await queue.put(message)
    except (ConnectionClosed, OSError):
        pass
    try:
        await websocket.close()
    except (WebSocketException, OSError) as exc:
        print(f"Failed to close connection: {exc}", file=sys.stderr)