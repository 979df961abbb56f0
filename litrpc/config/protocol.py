"""Wire envelope configuration and constants."""

from __future__ import annotations

# Envelope keys
RPC_KEY_ID = "id"
RPC_KEY_METHOD = "method"
RPC_KEY_PARAMS = "params"
RPC_KEY_RESULT = "result"
RPC_KEY_ERROR = "error"

# Id 0 never addresses a call; the daemon uses it for unsolicited messages.
RPC_UNADDRESSED_ID = 0
RPC_FIRST_ID = 1

# Handed to decoders when a reply carries no result at all.
RPC_ABSENT_RESULT = b"null"

__all__ = [
    "RPC_KEY_ID",
    "RPC_KEY_METHOD",
    "RPC_KEY_PARAMS",
    "RPC_KEY_RESULT",
    "RPC_KEY_ERROR",
    "RPC_UNADDRESSED_ID",
    "RPC_FIRST_ID",
    "RPC_ABSENT_RESULT",
]
