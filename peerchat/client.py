"""Connecting side of a chat peer: sends the user's messages to the other peer."""

from __future__ import annotations

import asyncio
import dataclasses
import sys
from datetime import datetime, timezone
from typing import Any

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from .config import Config
from .message import Message, decode_message
from .wire import send_message

RETRY_DELAY = 5.0


class PeerClient:
    """Keeps a connection to the peer, reconnecting after failures."""

    def __init__(
        self,
        config: Config,
        user_queue: asyncio.Queue,
        net_queue: asyncio.Queue,
        ready: asyncio.Event | None = None,
        retry_delay: float = RETRY_DELAY,
    ) -> None:
        self.config = config
        self.user_queue = user_queue
        self.net_queue = net_queue
        self.ready = ready if ready is not None else asyncio.Event()
        self.retry_delay = retry_delay

    async def run(self) -> None:
        """Connect to the peer and relay messages until cancelled."""
        address = self.config.peer_addr
        uri = f"ws://{address}"
        while True:
            try:
                websocket = await websockets.connect(uri)
            except (OSError, WebSocketException, asyncio.TimeoutError, ValueError) as exc:
                print(
                    f"Connection to {address} failed: {exc}. "
                    f"Retrying in {self.retry_delay:g} s",
                    file=sys.stderr,
                )
                await asyncio.sleep(self.retry_delay)
                continue

            self.ready.set()
            try:
                await self._handle_connection(websocket)
            except (WebSocketException, OSError) as exc:
                print(f"Connection handling failed: {exc}", file=sys.stderr)

    async def _handle_connection(self, websocket: Any) -> None:
        token = self.config.token
        auth = Message(
            sender="system",
            content="auth",
            timestamp=datetime.now(timezone.utc).isoformat(),
            token=token,
        )
        await send_message(websocket, auth)

        incoming = asyncio.create_task(self._forward_incoming(websocket))
        try:
            while True:
                message = await self.net_queue.get()
                await send_message(websocket, dataclasses.replace(message, token=token))
        finally:
            incoming.cancel()
            await websocket.close()

    async def _forward_incoming(self, websocket: Any) -> None:
        try:
            async for frame in websocket:
                if not isinstance(frame, str):
                    continue
                try:
                    message = decode_message(frame)
                except ValueError:
                    continue
                await self.user_queue.put(message)
        except (ConnectionClosed, OSError):
            pass
        print(f"Connection to {self.config.peer_addr} closed", file=sys.stderr)