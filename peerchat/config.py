"""Runtime configuration and command-line parsing."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass

DEFAULT_SERVER_ADDR = "127.0.0.1:8080"
DEFAULT_PEER_ADDR = "127.0.0.1:8081"
DEFAULT_USERNAME = "Anonymous"
DEFAULT_TOKEN = "token"


@dataclass(frozen=True)
class Config:
    """Addresses, identity and shared token of one chat peer."""

    server_addr: str
    token: str
    peer_addr: str
    username: str

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> Config:
        """Build a configuration from parsed command-line arguments."""
        return cls(
            server_addr=args.server_addr,
            token=args.token,
            peer_addr=args.peer_addr,
            username=args.username,
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="peerchat",
        description="Peer-to-peer terminal chat over WebSockets.",
    )
    parser.add_argument(
        "server_addr",
        nargs="?",
        default=DEFAULT_SERVER_ADDR,
        help="address this peer listens on",
    )
    parser.add_argument(
        "peer_addr",
        nargs="?",
        default=DEFAULT_PEER_ADDR,
        help="address of the other peer",
    )
    parser.add_argument(
        "username",
        nargs="?",
        default=DEFAULT_USERNAME,
        help="name shown next to your messages",
    )
    parser.add_argument(
        "token",
        nargs="?",
        default=DEFAULT_TOKEN,
        help="shared token both peers must agree on",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse positional arguments: server address, peer address, username, token."""
    return _build_parser().parse_args(argv)