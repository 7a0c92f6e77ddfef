# peerchat

A small terminal chat for two people. Each side runs a WebSocket server that
receives the other side's messages and a client that connects to the other
side's server and sends what you type. Both sides must share the same token;
a client that presents the wrong token is answered with `Invalid token` and
turned away.

The screen is drawn with `curses`, so a terminal with curses support (a
POSIX system) is needed.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Running

```
peerchat [SERVER_ADDR] [PEER_ADDR] [USERNAME] [TOKEN]
```

All four arguments are positional and optional:

| Argument      | Meaning                                    | Default          |
|---------------|--------------------------------------------|------------------|
| `SERVER_ADDR` | `host:port` this side listens on           | `127.0.0.1:8080` |
| `PEER_ADDR`   | `host:port` of the other side's server     | `127.0.0.1:8081` |
| `USERNAME`    | name shown next to your messages           | `Anonymous`      |
| `TOKEN`       | shared token both sides must agree on      | `token`          |

To try it on one machine, open two terminals:

```
peerchat 127.0.0.1:8080 127.0.0.1:8081 alice token
```

```
peerchat 127.0.0.1:8081 127.0.0.1:8080 bob token
```

The client retries every five seconds until the other side's server is up,
so the order in which you start the two does not matter. The chat window
opens once this side's server is listening (or has failed to bind, which is
reported on standard error) and its client has connected.

## Keys

| Key                  | Action                              |
|----------------------|-------------------------------------|
| typing               | edit the message line               |
| Backspace            | delete the last character           |
| Enter                | send the message                    |
| Up / Down            | scroll one message                  |
| Page Up / Page Down  | scroll five messages                |
| End, Ctrl+L          | jump to the newest message          |
| Ctrl+U               | clear the message line              |
| Esc, Ctrl+C          | quit                                |

The screen is split into the message list (75% of the height), the input box
(20%) and a status bar with your name and the message count. The window keeps
the latest 1000 messages. Your own messages are shown in green, the other
side's in yellow, each with the time it was sent as `HH:MM:SS`; a timestamp
that is not in RFC 2822 form is shown as `??:??:??`.

## Wire format

Every chat message is a JSON text frame with the string fields `id`,
`sender`, `content`, `timestamp` and `token`; `id` is a random UUID. The first
frame a client sends after connecting is an authentication message from
`system` with the content `auth` and an ISO 8601 timestamp; the server checks
its `token` before forwarding anything else. Outgoing chat messages carry the
configured token and an RFC 2822 timestamp. Frames that are not text or do
not decode as a message are ignored.

## Using it as a library

- `peerchat.config`: `parse_args(argv)` and the frozen dataclass `Config`
  (`server_addr`, `token`, `peer_addr`, `username`) with `Config.from_args`.
- `peerchat.message`: the `Message` dataclass, `encode_message` and
  `decode_message` (raises `ValueError` on anything that is not a message).
- `peerchat.state`: `UiState` with the message history, input line and scroll
  position, plus the `InputMode` and `AppState` enums.
- `peerchat.events`: `KeyEvent`, `KeyCode`, `UiEvent`, `UiEventKind` and
  `EventHandler`, whose `handle_key_event` applies a key press to a `UiState`
  and puts sent messages on an `asyncio.Queue`.
- `peerchat.renderer`: `UiRenderer` (draws onto any curses-like window),
  `format_timestamp` and `message_line`.
- `peerchat.ui`: `translate_key` and the coroutine `run_ui`.
- `peerchat.wire`: `send_message` and `receive_messages` over a WebSocket.
- `peerchat.server`: `WebSocketServer(config, user_queue, ready=None)`; after
  binding it sets `ready` and records `bound_address`.
- `peerchat.client`: `PeerClient(config, user_queue, net_queue, ready=None,
  retry_delay=5.0)`.
- `peerchat.cli`: `main(argv=None)`, behind the `peerchat` command.

## What it does not do

- Connections are plain `ws://`; there is no TLS.
- The token is only checked on the first frame of a connection.
- History lives in memory only and is lost when the program quits.
- It talks to exactly one peer; there are no rooms or group chats.