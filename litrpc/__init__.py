"""Asynchronous JSON-RPC client for LIT nodes.

Calls are multiplexed over one WebSocket connection and matched to their
replies by request id, so replies may arrive in any order.
"""

from litrpc.state import ConnectionState
from litrpc.protocol.codec import json_decoder, object_decoder
from litrpc.client import ConnectionManager, open_connection
from litrpc.errors import (
    RpcError,
    DecodeError,
    RemoteError,
    ProtocolError,
    DuplicateIdError,
    ConnectionStateError,
    ConnectionClosedError,
    ConnectionFailedError,
)

__version__ = "0.1.0"

__all__ = [
    "ConnectionClosedError",
    "ConnectionFailedError",
    "ConnectionManager",
    "ConnectionState",
    "ConnectionStateError",
    "DecodeError",
    "DuplicateIdError",
    "ProtocolError",
    "RemoteError",
    "RpcError",
    "json_decoder",
    "object_decoder",
    "open_connection",
]
