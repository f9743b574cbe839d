"""
deluge-rpc - Control a Deluge daemon through its Web JSON-RPC API.

Provides an authenticated, cookie-tracking session for the Deluge Web
JSON endpoint and a client exposing the core torrent procedures as typed
Python methods.
"""

from .config import Config
from .deluge_client import DelugeClient
from .exceptions import (
    AuthenticationFailed,
    DelugeError,
    HTTPStatusError,
    ProtocolError,
    RemoteError,
    SerializationError,
    TransportError,
    UnexpectedResultShape,
)
from .session import DelugeSession

__version__ = "0.1.0"
__all__ = [
    "DelugeClient",
    "DelugeSession",
    "Config",
    "DelugeError",
    "SerializationError",
    "TransportError",
    "HTTPStatusError",
    "ProtocolError",
    "RemoteError",
    "AuthenticationFailed",
    "UnexpectedResultShape",
]
