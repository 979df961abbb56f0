"""Connection lifecycle states."""

from __future__ import annotations

import enum


class ConnectionState(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


__all__ = ["ConnectionState"]
