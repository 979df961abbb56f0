"""Background reader that routes incoming replies to pending calls."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable, Awaitable

from litrpc.transport.base import Transport
from litrpc.protocol.frames import FrameAssembler
from litrpc.protocol.codec import decode_envelope
from litrpc.config.protocol import RPC_UNADDRESSED_ID
from litrpc.errors import RpcError, ProtocolError

from .correlator import RequestCorrelator

logger = logging.getLogger(__name__)

ProtocolErrorHook = Callable[[ProtocolError], None]
ClosedHook = Callable[[BaseException], Awaitable[None]]


class ReceiveLoop:
    """Single reader per connection: reassemble, decode, route, repeat.

    A malformed message is reported and skipped. The loop only ends when it is
    stopped or the transport goes away; in the latter case ``on_closed`` is
    awaited with the failure.
    """

    def __init__(
        self,
        transport: Transport,
        correlator: RequestCorrelator,
        *,
        assembler: FrameAssembler | None = None,
        on_protocol_error: ProtocolErrorHook | None = None,
        on_closed: ClosedHook | None = None,
    ) -> None:
        self._transport = transport
        self._correlator = correlator
        self._assembler = assembler or FrameAssembler()
        self._on_protocol_error = on_protocol_error
        self._on_closed = on_closed
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._stop_event.clear()
            self._task = asyncio.create_task(self._run(), name="litrpc-receive-loop")
        return self._task

    async def restart(self) -> asyncio.Task:
        await self.stop()
        return self.start()

    async def stop(self) -> None:
        self._stop_event.set()
        task = self._task
        if task is None:
            return
        # Stopping from inside the loop (via on_closed) must not await itself.
        if task is asyncio.current_task():
            return
        self._task = None
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task

    def dispatch(self, raw: bytes) -> bool:
        """Route one complete message. Returns True when a pending call consumed it."""
        envelope = decode_envelope(raw)
        logger.debug("incoming message id=%s: %s", envelope.id, raw[:2000])

        if envelope.id == RPC_UNADDRESSED_ID:
            logger.debug("dropping unaddressed message")
            return False
        if envelope.is_error:
            return self._correlator.fail(envelope.id, envelope.error)
        return self._correlator.resolve(envelope.id, envelope.result)

    def _report_protocol_error(self, exc: ProtocolError) -> None:
        logger.warning("discarding malformed message: %s", exc)
        if self._on_protocol_error is None:
            return
        try:
            self._on_protocol_error(exc)
        except Exception:
            logger.exception("protocol error hook failed")

    async def _run(self) -> None:
        reason: BaseException
        try:
            while not self._stop_event.is_set():
                try:
                    raw = await self._assembler.read_message(self._transport)
                    self.dispatch(raw)
                except ProtocolError as exc:
                    self._report_protocol_error(exc)
            return
        except asyncio.CancelledError:
            raise
        except RpcError as exc:
            logger.info("receive loop ended: %s", exc)
            reason = exc
        except Exception as exc:
            logger.exception("receive loop crashed")
            reason = exc

        if self._on_closed is not None and not self._stop_event.is_set():
            await self._on_closed(reason)


__all__ = ["ClosedHook", "ProtocolErrorHook", "ReceiveLoop"]
