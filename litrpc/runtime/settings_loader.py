"""Environment parsing for client settings."""

from __future__ import annotations

import os

from litrpc.state.settings import ClientSettings, EndpointSettings, TransportSettings
from litrpc.config.connection import (
    ENV_LIT_HOST,
    ENV_LIT_PORT,
    ENV_LIT_ORIGIN,
    ENV_LIT_SECURE,
    ENV_LIT_WS_PATH,
    DEFAULT_LIT_HOST,
    DEFAULT_LIT_PORT,
    DEFAULT_LIT_ORIGIN,
    DEFAULT_LIT_SECURE,
    DEFAULT_LIT_WS_PATH,
    ENV_LIT_CLOSE_TIMEOUT_S,
    ENV_LIT_CONNECT_TIMEOUT_S,
    ENV_LIT_WS_PING_TIMEOUT_S,
    ENV_LIT_WS_PING_INTERVAL_S,
    DEFAULT_LIT_CLOSE_TIMEOUT_S,
    ENV_LIT_WS_MAX_MESSAGE_BYTES,
    DEFAULT_LIT_CONNECT_TIMEOUT_S,
    DEFAULT_LIT_WS_PING_TIMEOUT_S,
    DEFAULT_LIT_WS_PING_INTERVAL_S,
    DEFAULT_LIT_WS_MAX_MESSAGE_BYTES,
)

PORT_MIN = 1
PORT_MAX = 65535


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _validate_port(port: int) -> int:
    if port < PORT_MIN or port > PORT_MAX:
        raise ValueError(f"{ENV_LIT_PORT} must be between {PORT_MIN} and {PORT_MAX}")
    return port


def _normalize_path(path: str) -> str:
    path = path.strip()
    return path if path.startswith("/") else f"/{path}"


def _load_endpoint_settings() -> EndpointSettings:
    return EndpointSettings(
        host=_str_env(ENV_LIT_HOST, DEFAULT_LIT_HOST),
        port=_validate_port(_int_env(ENV_LIT_PORT, DEFAULT_LIT_PORT)),
        path=_normalize_path(_str_env(ENV_LIT_WS_PATH, DEFAULT_LIT_WS_PATH)),
        secure=_bool_env(ENV_LIT_SECURE, DEFAULT_LIT_SECURE),
        origin=_str_env(ENV_LIT_ORIGIN, DEFAULT_LIT_ORIGIN),
    )


def _load_transport_settings() -> TransportSettings:
    connect_timeout = _float_env(ENV_LIT_CONNECT_TIMEOUT_S, DEFAULT_LIT_CONNECT_TIMEOUT_S)
    if connect_timeout <= 0:
        connect_timeout = DEFAULT_LIT_CONNECT_TIMEOUT_S
    close_timeout = _float_env(ENV_LIT_CLOSE_TIMEOUT_S, DEFAULT_LIT_CLOSE_TIMEOUT_S)
    if close_timeout <= 0:
        close_timeout = DEFAULT_LIT_CLOSE_TIMEOUT_S
    max_message_bytes = max(1, _int_env(ENV_LIT_WS_MAX_MESSAGE_BYTES, DEFAULT_LIT_WS_MAX_MESSAGE_BYTES))

    return TransportSettings(
        connect_timeout_s=connect_timeout,
        close_timeout_s=close_timeout,
        max_message_bytes=max_message_bytes,
        ping_interval_s=_float_env(ENV_LIT_WS_PING_INTERVAL_S, DEFAULT_LIT_WS_PING_INTERVAL_S),
        ping_timeout_s=_float_env(ENV_LIT_WS_PING_TIMEOUT_S, DEFAULT_LIT_WS_PING_TIMEOUT_S),
    )


def load_settings() -> ClientSettings:
    return ClientSettings(
        endpoint=_load_endpoint_settings(),
        transport=_load_transport_settings(),
    )


__all__ = ["load_settings"]
