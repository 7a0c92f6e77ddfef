"""Command-line entry point: starts the listener, the peer connection and the screen."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence

from .client import RETRY_DELAY, PeerClient
from .config import Config, parse_args
from .server import WebSocketServer
from .ui import run_ui

QUEUE_SIZE = 100

UiFn = Callable[[asyncio.Queue, asyncio.Queue, str, str], Awaitable[None]]


async def _wait_ready(event: asyncio.Event, task: asyncio.Task) -> None:
    """Wait until the event is set or the task that would set it has ended."""
    waiter = asyncio.create_task(event.wait())
    try:
        await asyncio.wait({waiter, task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()


async def _run(config: Config, ui: UiFn = run_ui, retry_delay: float = RETRY_DELAY) -> None:
    net_queue: asyncio.Queue = asyncio.Queue(maxsize=QUEUE_SIZE)
    user_queue: asyncio.Queue = asyncio.Queue(maxsize=QUEUE_SIZE)
    server = WebSocketServer(config, user_queue)
    client = PeerClient(config, user_queue, net_queue, retry_delay=retry_delay)
    server_task = asyncio.create_task(server.run())
    client_task = asyncio.create_task(client.run())
    tasks = (server_task, client_task)
    try:
        await _wait_ready(server.ready, server_task)
        await _wait_ready(client.ready, client_task)
        await ui(user_queue, net_queue, config.username, config.token)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the chat peer with the given command-line arguments."""
    config = Config.from_args(parse_args(argv))
    asyncio.run(_run(config))
    return 0