"""Listening side of a chat peer: authenticates incoming WebSocket clients."""

from __future__ import annotations

import asyncio
import sys
from typing import Any

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from .config import Config
from .message import decode_message
from .wire import receive_messages

INVALID_TOKEN_REPLY = "Invalid token"


def _split_address(address: str) -> tuple[str, int]:
    """Split "host:port" into its parts; raise ValueError if it is malformed."""
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"invalid address {address!r}, expected host:port")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, int(port)


class WebSocketServer:
    """Accepts peers that present the shared token and forwards their messages."""

    def __init__(
        self,
        config: Config,
        user_queue: asyncio.Queue,
        ready: asyncio.Event | None = None,
    ) -> None:
        self.config = config
        self.user_queue = user_queue
        self.ready = ready if ready is not None else asyncio.Event()
        self.bound_address: tuple[str, int] | None = None

    async def run(self) -> None:
        """Listen on the configured address until cancelled; return if binding fails."""
        address = self.config.server_addr
        try:
            host, port = _split_address(address)
            server = await websockets.serve(self._handle_connection, host, port)
        except (OSError, ValueError) as exc:
            print(f"Failed to bind address {address}: {exc}", file=sys.stderr)
            return

        sockname = next(iter(server.sockets)).getsockname()
        self.bound_address = (sockname[0], sockname[1])
        self.ready.set()
        try:
            await server.wait_closed()
        finally:
            server.close()

    async def _handle_connection(self, websocket: Any) -> None:
        peer = websocket.remote_address
        try:
            frame = await websocket.recv()
        except (ConnectionClosed, OSError):
            print(f"Client {peer} did not send a token", file=sys.stderr)
            return

        try:
            if not isinstance(frame, str):
                raise ValueError("authentication frame is not text")
            auth = decode_message(frame)
        except ValueError:
            print(f"Invalid authentication message from {peer}", file=sys.stderr)
            return

        if auth.token != self.config.token:
            print(f"Invalid token from {peer}: {auth.token}", file=sys.stderr)
            try:
                await websocket.send(INVALID_TOKEN_REPLY)
            except (WebSocketException, OSError):
                pass
            return

        await receive_messages(websocket, self.user_queue)