"""WebSocket transport backed by the ``websockets`` asyncio client."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import AsyncIterator

import websockets
from websockets.exceptions import InvalidURI, ConnectionClosed, InvalidHandshake

from litrpc.transport.base import Fragment
from litrpc.state.settings import TransportSettings
from litrpc.errors import ConnectionClosedError, ConnectionFailedError
from litrpc.config.connection import WS_CLOSE_CLIENT_REQUEST_CODE, WS_CLOSE_CLIENT_REQUEST_REASON

logger = logging.getLogger(__name__)


def get_ws_options(origin: str, settings: TransportSettings) -> dict[str, Any]:
    return {
        "origin": origin,
        "open_timeout": settings.connect_timeout_s,
        "close_timeout": settings.close_timeout_s,
        "ping_interval": settings.ping_interval_s or None,
        "ping_timeout": settings.ping_timeout_s or None,
        # FrameAssembler enforces max_message_bytes per message and skips oversized ones.
        "max_size": None,
    }


class WebSocketTransport:
    """Expose a websockets connection as discrete fragments.

    ``recv_streaming`` yields the frames of one message and stops after the
    last one; that stop is reported as an empty final fragment.
    """

    def __init__(self, ws: Any, endpoint: str) -> None:
        self._ws = ws
        self._endpoint = endpoint
        self._stream: AsyncIterator[bytes] | None = None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def send(self, data: bytes) -> None:
        try:
            await self._ws.send(data)
        except ConnectionClosed as exc:
            raise ConnectionClosedError(f"connection closed while sending: {exc}") from exc
        except Exception as exc:
            raise ConnectionFailedError(self._endpoint, f"send failed: {exc}") from exc

    async def recv_fragment(self) -> Fragment:
        if self._stream is None:
            self._stream = self._ws.recv_streaming(decode=False).__aiter__()
        try:
            data = await self._stream.__anext__()
        except StopAsyncIteration:
            self._stream = None
            return Fragment(b"", final=True)
        except ConnectionClosed as exc:
            self._stream = None
            raise ConnectionClosedError(f"connection closed by peer: {exc}") from exc
        except asyncio.CancelledError:
            self._stream = None
            raise
        except Exception as exc:
            self._stream = None
            raise ConnectionFailedError(self._endpoint, f"receive failed: {exc}") from exc
        return Fragment(bytes(data), final=False)

    async def close(self) -> None:
        self._stream = None
        with contextlib.suppress(Exception):
            await self._ws.close(code=WS_CLOSE_CLIENT_REQUEST_CODE, reason=WS_CLOSE_CLIENT_REQUEST_REASON)


async def open_websocket_transport(url: str, *, origin: str, settings: TransportSettings) -> WebSocketTransport:
    try:
        ws = await websockets.connect(url, **get_ws_options(origin, settings))
    except InvalidURI as exc:
        raise ConnectionFailedError(url, f"invalid endpoint: {exc}") from exc
    except InvalidHandshake as exc:
        raise ConnectionFailedError(url, f"handshake rejected: {exc}") from exc
    except TimeoutError as exc:
        raise ConnectionFailedError(url, f"timed out after {settings.connect_timeout_s}s") from exc
    except OSError as exc:
        raise ConnectionFailedError(url, str(exc)) from exc
    logger.debug("websocket open to %s (origin=%s)", url, origin)
    return WebSocketTransport(ws, url)


__all__ = ["WebSocketTransport", "get_ws_options", "open_websocket_transport"]
