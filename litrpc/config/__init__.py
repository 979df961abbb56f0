"""Configuration module exports (env names, defaults and protocol constants only)."""

from .protocol import (
    RPC_FIRST_ID,
    RPC_UNADDRESSED_ID,
)
from .connection import (
    DEFAULT_LIT_HOST,
    DEFAULT_LIT_PORT,
    DEFAULT_LIT_ORIGIN,
    DEFAULT_LIT_WS_PATH,
)

__all__ = [
    "DEFAULT_LIT_HOST",
    "DEFAULT_LIT_ORIGIN",
    "DEFAULT_LIT_PORT",
    "DEFAULT_LIT_WS_PATH",
    "RPC_FIRST_ID",
    "RPC_UNADDRESSED_ID",
]
