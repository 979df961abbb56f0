"""Wire envelope records (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class OutgoingEnvelope:
    id: int
    method: str
    params: tuple[Any]


@dataclass(frozen=True, slots=True)
class IncomingEnvelope:
    id: int
    # Raw JSON text of the ``result`` member, or None when the member is absent.
    result: bytes | None
    error: str = ""

    @property
    def is_error(self) -> bool:
        return bool(self.error)


__all__ = ["IncomingEnvelope", "OutgoingEnvelope"]
