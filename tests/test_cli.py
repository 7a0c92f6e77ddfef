import asyncio
import socket

import pytest

from peerchat.cli import _run, main
from peerchat.config import Config
from peerchat.message import Message, decode_message, encode_message


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0
    assert "peerchat" in capsys.readouterr().out


def test_too_many_arguments_is_an_error():
    with pytest.raises(SystemExit) as info:
        main(["a:1", "b:2", "alice", "token", "extra"])
    assert info.value.code == 2


@pytest.mark.asyncio
async def test_two_peers_exchange_messages():
    first_port, second_port = _free_port(), _free_port()
    alice = Config(
        server_addr=f"127.0.0.1:{first_port}",
        token="token",
        peer_addr=f"127.0.0.1:{second_port}",
        username="alice",
    )
    bob = Config(
        server_addr=f"127.0.0.1:{second_port}",
        token="token",
        peer_addr=f"127.0.0.1:{first_port}",
        username="bob",
    )
    received = {}
    seen_tokens = {}

    async def fake_ui(user_queue, net_queue, username, token):
        seen_tokens[username] = token
        await net_queue.put(
            Message(sender=username, content=f"hi from {username}", timestamp="", token="placeholder")
        )
        received[username] = await asyncio.wait_for(user_queue.get(), 5)

    results = await asyncio.wait_for(
        asyncio.gather(
            _run(alice, ui=fake_ui, retry_delay=0.05),
            _run(bob, ui=fake_ui, retry_delay=0.05),
        ),
        10,
    )

    assert results == [None, None]
    assert received["alice"].content == "hi from bob"
    assert received["alice"].sender == "bob"
    assert received["bob"].content == "hi from alice"
    assert received["bob"].token == "token"
    assert seen_tokens == {"alice": "token", "bob": "token"}

    round_tripped = decode_message(encode_message(received["alice"]))
    assert (round_tripped.sender, round_tripped.content) == ("bob", "hi from bob")


@pytest.mark.asyncio
async def test_ui_still_runs_when_server_cannot_bind():
    with socket.socket() as occupied:
        occupied.bind(("127.0.0.1", 0))
        occupied.listen()
        busy_port = occupied.getsockname()[1]
        peer_port = _free_port()

        config = Config(
            server_addr=f"127.0.0.1:{busy_port}",
            token="token",
            peer_addr=f"127.0.0.1:{busy_port}",
            username="alice",
        )
        calls = []

        async def fake_ui(user_queue, net_queue, username, token):
            calls.append((username, token, net_queue.maxsize))

        outcome = await asyncio.wait_for(_run(config, ui=fake_ui, retry_delay=0.05), 10)

    assert peer_port > 0
    assert outcome is None
    assert calls == [("alice", "token", 100)]