"""Two-peer terminal chat over WebSockets with a shared-token handshake."""

__version__ = "0.1.0"