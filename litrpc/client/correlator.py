"""In-flight request table: id allocation and reply routing."""

from __future__ import annotations

import asyncio
import logging
import itertools
import threading
from typing import Any
from collections.abc import Callable

from litrpc.state.pending import Decoder, PendingRequest
from litrpc.config.protocol import RPC_FIRST_ID, RPC_ABSENT_RESULT
from litrpc.errors import RpcError, DecodeError, RemoteError, DuplicateIdError

logger = logging.getLogger(__name__)

ErrorFactory = Callable[[PendingRequest], BaseException]


class RequestCorrelator:
    """Owns the pending-request table and the id counter of one connection.

    Every entry leaves the table exactly once: through ``resolve``, ``fail``,
    ``discard`` or ``drain_with_error``. Lookups for ids that are not pending
    are no-ops.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(RPC_FIRST_ID)
        self._pending: dict[int, PendingRequest] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)

    def __contains__(self, request_id: object) -> bool:
        with self._lock:
            return request_id in self._pending

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)

    def register(
        self,
        request_id: int,
        method: str,
        decode: Decoder,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> asyncio.Future[Any]:
        loop = loop or asyncio.get_running_loop()
        with self._lock:
            if request_id in self._pending:
                raise DuplicateIdError(request_id)
            future: asyncio.Future[Any] = loop.create_future()
            self._pending[request_id] = PendingRequest(id=request_id, method=method, decode=decode, future=future)
        return future

    def _pop(self, request_id: int) -> PendingRequest | None:
        with self._lock:
            return self._pending.pop(request_id, None)

    def resolve(self, request_id: int, raw_result: bytes | None) -> bool:
        entry = self._pop(request_id)
        if entry is None:
            logger.debug("dropping reply for id=%s: no pending call", request_id)
            return False
        if entry.future.done():
            return True

        try:
            value = entry.decode(RPC_ABSENT_RESULT if raw_result is None else raw_result)
        except RpcError as exc:
            entry.future.set_exception(exc)
        except Exception as exc:
            logger.debug("decode failed for %s id=%s", entry.method, request_id, exc_info=True)
            entry.future.set_exception(DecodeError(request_id, entry.method, str(exc) or type(exc).__name__))
        else:
            entry.future.set_result(value)
        return True

    def fail(self, request_id: int, error: BaseException | str) -> bool:
        entry = self._pop(request_id)
        if entry is None:
            logger.debug("dropping error for id=%s: no pending call", request_id)
            return False
        if isinstance(error, str):
            error = RemoteError(error, request_id=request_id, method=entry.method)
        if not entry.future.done():
            entry.future.set_exception(error)
        return True

    def discard(self, request_id: int) -> bool:
        return self._pop(request_id) is not None

    def drain_with_error(self, make_error: ErrorFactory) -> int:
        with self._lock:
            entries = list(self._pending.values())
            self._pending.clear()
        for entry in entries:
            if not entry.future.done():
                entry.future.set_exception(make_error(entry))
        return len(entries)


__all__ = ["ErrorFactory", "RequestCorrelator"]
