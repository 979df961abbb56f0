"""Reassembly of transport fragments into complete messages."""

from __future__ import annotations

import logging

from litrpc.errors import ProtocolError
from litrpc.transport.base import Transport

logger = logging.getLogger(__name__)


class FrameAssembler:
    """Accumulate fragments byte-for-byte until the transport flags the final one.

    A message that grows past ``max_message_bytes`` (when > 0) is dropped: the
    remaining fragments are consumed and a ``ProtocolError`` is raised once the
    final fragment arrives, so the next message starts on a clean buffer.
    """

    def __init__(self, *, max_message_bytes: int = 0) -> None:
        self._max_message_bytes = max(0, int(max_message_bytes))
        self._buffer = bytearray()
        self._fragments = 0
        self._oversized = False

    @property
    def buffered_bytes(self) -> int:
        return len(self._buffer)

    def reset(self) -> None:
        self._buffer.clear()
        self._fragments = 0
        self._oversized = False

    def feed(self, data: bytes, final: bool) -> bytes | None:
        """Append one fragment; return the whole message when ``final`` is set."""
        self._fragments += 1
        if not self._oversized:
            self._buffer += data
            if self._max_message_bytes and len(self._buffer) > self._max_message_bytes:
                self._oversized = True
                self._buffer.clear()
        if not final:
            return None

        if self._oversized:
            fragments = self._fragments
            self.reset()
            raise ProtocolError(
                f"message exceeds {self._max_message_bytes} bytes ({fragments} fragments); dropped"
            )

        message = bytes(self._buffer)
        if self._fragments > 1:
            logger.debug("reassembled %s bytes from %s fragments", len(message), self._fragments)
        self.reset()
        return message

    async def read_message(self, transport: Transport) -> bytes:
        self.reset()
        while True:
            fragment = await transport.recv_fragment()
            message = self.feed(fragment.data, fragment.final)
            if message is not None:
                return message


__all__ = ["FrameAssembler"]
