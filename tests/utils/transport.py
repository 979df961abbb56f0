"""In-memory transport double for exercising the connection engine."""

from __future__ import annotations

import asyncio
from typing import Any

import orjson

from litrpc.transport.base import Fragment
from litrpc.errors import ConnectionClosedError
from litrpc.state.settings import TransportSettings


def _to_bytes(message: bytes | str | dict[str, Any]) -> bytes:
    if isinstance(message, bytes):
        return message
    if isinstance(message, str):
        return message.encode("utf-8")
    return orjson.dumps(message)


def split_bytes(data: bytes, parts: int) -> list[bytes]:
    """Split ``data`` into ``parts`` contiguous chunks (the last one may be empty)."""
    parts = max(1, parts)
    size = max(1, -(-len(data) // parts))
    chunks = [data[i : i + size] for i in range(0, len(data), size)]
    while len(chunks) < parts:
        chunks.append(b"")
    return chunks


class FakeTransport:
    def __init__(self, endpoint: str = "ws://fake:8001/ws") -> None:
        self._endpoint = endpoint
        self._incoming: asyncio.Queue[Fragment | BaseException] = asyncio.Queue()
        self.sent: list[bytes] = []
        self.closed = False
        self.close_calls = 0
        self.fail_sends: BaseException | None = None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def send(self, data: bytes) -> None:
        if self.fail_sends is not None:
            raise self.fail_sends
        if self.closed:
            raise ConnectionClosedError("fake transport closed")
        self.sent.append(data)

    async def recv_fragment(self) -> Fragment:
        item = await self._incoming.get()
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        self.close_calls += 1
        if not self.closed:
            self.closed = True
            self._incoming.put_nowait(ConnectionClosedError("fake transport closed"))

    # Test helpers

    def push(self, message: bytes | str | dict[str, Any], *, fragments: int = 1) -> None:
        chunks = split_bytes(_to_bytes(message), fragments)
        for index, chunk in enumerate(chunks):
            self._incoming.put_nowait(Fragment(chunk, final=index == len(chunks) - 1))

    def push_chunks(self, chunks: list[bytes]) -> None:
        for index, chunk in enumerate(chunks):
            self._incoming.put_nowait(Fragment(chunk, final=index == len(chunks) - 1))

    def end_stream(self, error: BaseException | None = None) -> None:
        self._incoming.put_nowait(error or ConnectionClosedError("stream ended"))

    def sent_messages(self) -> list[dict[str, Any]]:
        return [orjson.loads(raw) for raw in self.sent]

    async def wait_sent(self, count: int, timeout: float = 1.0) -> list[dict[str, Any]]:
        async def _wait() -> None:
            while len(self.sent) < count:
                await asyncio.sleep(0.001)

        await asyncio.wait_for(_wait(), timeout=timeout)
        return self.sent_messages()


class TransportFactoryRecorder:
    """Hands out one prepared transport and records how it was requested."""

    def __init__(self, transport: FakeTransport | None = None, error: BaseException | None = None) -> None:
        self.transport = transport
        self.error = error
        self.calls: list[tuple[str, str, TransportSettings]] = []

    async def __call__(self, url: str, origin: str, settings: TransportSettings) -> FakeTransport:
        self.calls.append((url, origin, settings))
        if self.error is not None:
            raise self.error
        if self.transport is None:
            self.transport = FakeTransport(url)
        return self.transport


__all__ = ["FakeTransport", "TransportFactoryRecorder", "split_bytes"]
