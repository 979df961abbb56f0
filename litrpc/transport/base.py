"""Transport primitive consumed by the connection engine."""

from __future__ import annotations

from typing import Protocol
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Fragment:
    data: bytes
    final: bool


class Transport(Protocol):
    """A message-oriented duplex channel.

    ``send`` delivers one complete message. ``recv_fragment`` returns the next
    piece of an incoming message and flags the last piece as final; it raises
    ``ConnectionClosedError`` once the stream has ended.
    """

    @property
    def endpoint(self) -> str: ...

    async def send(self, data: bytes) -> None: ...

    async def recv_fragment(self) -> Fragment: ...

    async def close(self) -> None: ...


__all__ = ["Fragment", "Transport"]
