"""Connection lifecycle and the call surface used by RPC method wrappers."""

from __future__ import annotations

import asyncio
import logging
import contextlib
import dataclasses
from typing import Any
from collections.abc import Callable, Awaitable

from litrpc.state.pending import Decoder
from litrpc.transport.base import Transport
from litrpc.protocol.frames import FrameAssembler
from litrpc.runtime.settings_loader import load_settings
from litrpc.state.connection_state import ConnectionState
from litrpc.transport.websocket import open_websocket_transport
from litrpc.state.settings import ClientSettings, TransportSettings
from litrpc.protocol.codec import build_call, encode_call, json_decoder
from litrpc.errors import (
    RpcError,
    ConnectionStateError,
    ConnectionClosedError,
    ConnectionFailedError,
)

from .endpoint import ws_url, build_endpoint
from .correlator import RequestCorrelator
from .receive_loop import ReceiveLoop, ProtocolErrorHook

logger = logging.getLogger(__name__)

TransportFactory = Callable[[str, str, TransportSettings], Awaitable[Transport]]


async def _open_websocket(url: str, origin: str, settings: TransportSettings) -> Transport:
    return await open_websocket_transport(url, origin=origin, settings=settings)


class ConnectionManager:
    """One duplex connection to a LIT node and the calls multiplexed over it.

    Lifecycle is ``DISCONNECTED -> CONNECTING -> OPEN -> CLOSED``. A failed
    ``connect`` falls back to ``DISCONNECTED`` so it can be retried; a closed
    connection stays closed. Calling ``connect`` in any state other than
    ``DISCONNECTED`` raises ``ConnectionStateError``.

    Whenever the connection closes (``disconnect`` or a lost transport) every
    call still waiting for a reply fails with ``ConnectionClosedError``.
    Calls carry no timeout of their own; wrap ``invoke`` in
    ``asyncio.wait_for`` to bound it.
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        settings: ClientSettings | None = None,
        origin: str | None = None,
        transport_factory: TransportFactory | None = None,
        on_protocol_error: ProtocolErrorHook | None = None,
    ) -> None:
        settings = settings or load_settings()
        endpoint_settings = settings.endpoint
        if host is not None:
            endpoint_settings = dataclasses.replace(endpoint_settings, host=host)
        if port is not None:
            endpoint_settings = dataclasses.replace(endpoint_settings, port=int(port))
        self._settings = dataclasses.replace(settings, endpoint=endpoint_settings)

        self._endpoint = build_endpoint(endpoint_settings)
        self._origin = origin or endpoint_settings.origin
        self._transport_factory = transport_factory or _open_websocket
        self._on_protocol_error = on_protocol_error

        self._state = ConnectionState.DISCONNECTED
        self._correlator = RequestCorrelator()
        self._transport: Transport | None = None
        self._receive_loop: ReceiveLoop | None = None
        self._send_lock = asyncio.Lock()
        self._closed = asyncio.Event()

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is ConnectionState.OPEN

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def pending_count(self) -> int:
        return len(self._correlator)

    async def __aenter__(self) -> ConnectionManager:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.disconnect()

    async def connect(self, endpoint: str | None = None) -> None:
        if self._state is not ConnectionState.DISCONNECTED:
            raise ConnectionStateError("connect", self._state.value)

        url = ws_url(endpoint, self._settings.endpoint) if endpoint else self._endpoint
        self._state = ConnectionState.CONNECTING
        try:
            transport = await self._transport_factory(url, self._origin, self._settings.transport)
        except ConnectionFailedError:
            self._state = ConnectionState.DISCONNECTED
            raise
        except asyncio.CancelledError:
            self._state = ConnectionState.DISCONNECTED
            raise
        except Exception as exc:
            self._state = ConnectionState.DISCONNECTED
            raise ConnectionFailedError(url, str(exc) or type(exc).__name__) from exc

        if self._state is not ConnectionState.CONNECTING:
            # disconnect() ran while the transport was being opened.
            await transport.close()
            raise ConnectionClosedError("connection closed while connecting")

        self._endpoint = url
        self._transport = transport
        self._state = ConnectionState.OPEN
        self._receive_loop = ReceiveLoop(
            transport,
            self._correlator,
            assembler=FrameAssembler(max_message_bytes=self._settings.transport.max_message_bytes),
            on_protocol_error=self._on_protocol_error,
            on_closed=self._on_transport_lost,
        )
        await self.restart_receive_loop()
        logger.info("connected to %s", url)

    async def restart_receive_loop(self) -> None:
        """Cancel the running receive loop, if any, and start a fresh one."""
        if self._state is not ConnectionState.OPEN or self._receive_loop is None:
            raise ConnectionStateError("restart receive loop", self._state.value)
        await self._receive_loop.restart()

    async def disconnect(self) -> None:
        await self._shutdown("connection closed by client")

    async def invoke(self, method: str, request: Any = None, decode: Decoder = json_decoder) -> Any:
        """Send ``method`` with ``request`` as its single parameter and return the decoded reply.

        Raises:
            RemoteError: The daemon replied with a non-empty error.
            DecodeError: ``decode`` rejected the reply's result.
            ConnectionClosedError: The connection closed before the reply arrived.
            ConnectionFailedError: The request could not be sent.
            ConnectionStateError: The connection is not open.
        """
        if self._state is ConnectionState.CLOSED:
            raise ConnectionClosedError("connection is closed")
        transport = self._transport
        if self._state is not ConnectionState.OPEN or transport is None:
            raise ConnectionStateError("invoke", self._state.value)

        request_id = self._correlator.next_id()
        payload = encode_call(build_call(request_id, method, request))
        future = self._correlator.register(request_id, method, decode)
        try:
            logger.debug("outgoing call id=%s method=%s: %s", request_id, method, payload[:2000])
            try:
                async with self._send_lock:
                    await transport.send(payload)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                self._correlator.discard(request_id)
                await self._handle_send_failure(exc)
                if isinstance(exc, RpcError):
                    raise
                raise ConnectionFailedError(self._endpoint, f"send failed: {exc}") from exc
            return await future
        finally:
            self._correlator.discard(request_id)

    async def _handle_send_failure(self, exc: BaseException) -> None:
        logger.warning("send to %s failed: %s", self._endpoint, exc)
        await self._shutdown(f"send failed: {exc}")

    async def _on_transport_lost(self, exc: BaseException) -> None:
        await self._shutdown(str(exc) or "transport lost")

    async def _shutdown(self, reason: str) -> None:
        if self._state is ConnectionState.CLOSED:
            await self._closed.wait()
            return
        self._state = ConnectionState.CLOSED

        receive_loop, transport = self._receive_loop, self._transport
        self._receive_loop = None
        self._transport = None

        if receive_loop is not None:
            await receive_loop.stop()
        drained = self._correlator.drain_with_error(
            lambda entry: ConnectionClosedError(reason, request_id=entry.id)
        )
        if transport is not None:
            with contextlib.suppress(Exception):
                await transport.close()
        self._closed.set()
        logger.info("connection to %s closed (%s); failed %s pending call(s)", self._endpoint, reason, drained)


async def open_connection(
    host: str | None = None,
    port: int | None = None,
    **kwargs: Any,
) -> ConnectionManager:
    """Create a ``ConnectionManager`` and connect it."""
    connection = ConnectionManager(host, port, **kwargs)
    await connection.connect()
    return connection


__all__ = ["ConnectionManager", "TransportFactory", "open_connection"]
