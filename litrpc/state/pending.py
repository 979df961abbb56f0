"""Per-call bookkeeping for in-flight requests."""

from __future__ import annotations

import asyncio
from typing import Any
from dataclasses import dataclass
from collections.abc import Callable

Decoder = Callable[[bytes], Any]


@dataclass(slots=True)
class PendingRequest:
    id: int
    method: str
    decode: Decoder
    future: asyncio.Future[Any]


__all__ = ["Decoder", "PendingRequest"]
