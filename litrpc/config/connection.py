"""Connection configuration (env names and defaults only)."""

from __future__ import annotations

# Daemon endpoint
ENV_LIT_HOST = "LIT_HOST"
ENV_LIT_PORT = "LIT_PORT"
ENV_LIT_WS_PATH = "LIT_WS_PATH"
ENV_LIT_SECURE = "LIT_SECURE"
ENV_LIT_ORIGIN = "LIT_ORIGIN"

DEFAULT_LIT_HOST = "localhost"
DEFAULT_LIT_PORT = 8001
DEFAULT_LIT_WS_PATH = "/ws"
DEFAULT_LIT_SECURE = False
# The daemon rejects upgrades without an Origin it recognizes.
DEFAULT_LIT_ORIGIN = "http://localhost/"

# Transport tuning
ENV_LIT_CONNECT_TIMEOUT_S = "LIT_CONNECT_TIMEOUT_S"
ENV_LIT_CLOSE_TIMEOUT_S = "LIT_CLOSE_TIMEOUT_S"
ENV_LIT_WS_MAX_MESSAGE_BYTES = "LIT_WS_MAX_MESSAGE_BYTES"
ENV_LIT_WS_PING_INTERVAL_S = "LIT_WS_PING_INTERVAL_S"
ENV_LIT_WS_PING_TIMEOUT_S = "LIT_WS_PING_TIMEOUT_S"

DEFAULT_LIT_CONNECT_TIMEOUT_S = 10.0
DEFAULT_LIT_CLOSE_TIMEOUT_S = 5.0
DEFAULT_LIT_WS_MAX_MESSAGE_BYTES = 16 * 1024 * 1024
DEFAULT_LIT_WS_PING_INTERVAL_S = 20.0
DEFAULT_LIT_WS_PING_TIMEOUT_S = 20.0

# Close codes
WS_CLOSE_CLIENT_REQUEST_CODE = 1000
WS_CLOSE_CLIENT_REQUEST_REASON = ""

__all__ = [
    "ENV_LIT_HOST",
    "ENV_LIT_PORT",
    "ENV_LIT_WS_PATH",
    "ENV_LIT_SECURE",
    "ENV_LIT_ORIGIN",
    "DEFAULT_LIT_HOST",
    "DEFAULT_LIT_PORT",
    "DEFAULT_LIT_WS_PATH",
    "DEFAULT_LIT_SECURE",
    "DEFAULT_LIT_ORIGIN",
    "ENV_LIT_CONNECT_TIMEOUT_S",
    "ENV_LIT_CLOSE_TIMEOUT_S",
    "ENV_LIT_WS_MAX_MESSAGE_BYTES",
    "ENV_LIT_WS_PING_INTERVAL_S",
    "ENV_LIT_WS_PING_TIMEOUT_S",
    "DEFAULT_LIT_CONNECT_TIMEOUT_S",
    "DEFAULT_LIT_CLOSE_TIMEOUT_S",
    "DEFAULT_LIT_WS_MAX_MESSAGE_BYTES",
    "DEFAULT_LIT_WS_PING_INTERVAL_S",
    "DEFAULT_LIT_WS_PING_TIMEOUT_S",
    "WS_CLOSE_CLIENT_REQUEST_CODE",
    "WS_CLOSE_CLIENT_REQUEST_REASON",
]
