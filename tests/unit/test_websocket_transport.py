from __future__ import annotations

import pytest
from websockets.exceptions import ConnectionClosed

from tests.utils import make_settings
from litrpc.transport.base import Fragment
from litrpc.errors import ConnectionClosedError, ConnectionFailedError
from litrpc.transport.websocket import WebSocketTransport, get_ws_options, open_websocket_transport


class _FakeWebSocket:
    def __init__(self, messages: list[list[bytes]], *, closed_after: bool = True) -> None:
        self._messages = list(messages)
        self._closed_after = closed_after
        self.sent: list[bytes] = []
        self.close_code: int | None = None

    async def recv_streaming(self, decode: bool | None = None):
        assert decode is False
        if not self._messages:
            raise ConnectionClosed(None, None)
        for frame in self._messages.pop(0):
            yield frame

    async def send(self, data: bytes) -> None:
        if self.close_code is not None:
            raise ConnectionClosed(None, None)
        self.sent.append(data)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        self.close_code = code


@pytest.mark.asyncio
async def test_frames_become_fragments_with_final_marker() -> None:
    ws = _FakeWebSocket([[b'{"id":1,', b'"error":""}'], [b'{"id":2}']])
    transport = WebSocketTransport(ws, "ws://node:8001/ws")

    assert await transport.recv_fragment() == Fragment(b'{"id":1,', final=False)
    assert await transport.recv_fragment() == Fragment(b'"error":""}', final=False)
    assert await transport.recv_fragment() == Fragment(b"", final=True)
    assert await transport.recv_fragment() == Fragment(b'{"id":2}', final=False)
    assert await transport.recv_fragment() == Fragment(b"", final=True)

    with pytest.raises(ConnectionClosedError):
        await transport.recv_fragment()


@pytest.mark.asyncio
async def test_send_and_close() -> None:
    ws = _FakeWebSocket([])
    transport = WebSocketTransport(ws, "ws://node:8001/ws")
    await transport.send(b'{"id":1}')
    assert ws.sent == [b'{"id":1}']

    await transport.close()
    assert ws.close_code == 1000
    with pytest.raises(ConnectionClosedError):
        await transport.send(b'{"id":2}')
    assert transport.endpoint == "ws://node:8001/ws"


def test_ws_options_carry_origin_and_leave_size_to_assembler() -> None:
    settings = make_settings(max_message_bytes=4096).transport
    options = get_ws_options("http://localhost/", settings)
    assert options["origin"] == "http://localhost/"
    assert options["max_size"] is None
    assert options["ping_interval"] is None


@pytest.mark.asyncio
async def test_open_maps_os_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _refuse(*_args, **_kwargs):
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr("litrpc.transport.websocket.websockets.connect", _refuse)
    with pytest.raises(ConnectionFailedError) as exc:
        await open_websocket_transport("ws://localhost:1/ws", origin="http://localhost/", settings=make_settings().transport)
    assert exc.value.endpoint == "ws://localhost:1/ws"
