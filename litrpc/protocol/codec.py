"""Envelope encoding/decoding for the LIT JSON-RPC wire format.

Outgoing calls are ``{"id", "method", "params": [request]}``; replies are
``{"id", "result", "error"}``. The codec never looks inside a request or a
result: requests are serialized as-is and results are handed on as raw JSON
bytes for the caller's decoder.
"""

from __future__ import annotations

import base64
from typing import Any
from collections.abc import Callable

import orjson

from litrpc.errors import ProtocolError
from litrpc.state.envelope import IncomingEnvelope, OutgoingEnvelope
from litrpc.config.protocol import (
    RPC_KEY_ID,
    RPC_KEY_ERROR,
    RPC_KEY_METHOD,
    RPC_KEY_PARAMS,
    RPC_KEY_RESULT,
)


def _default(obj: Any) -> Any:
    # The daemon expects byte arrays as base64 strings.
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def build_call(request_id: int, method: str, request: Any = None) -> OutgoingEnvelope:
    if not isinstance(method, str) or not method.strip():
        raise ValueError("method must be a non-empty string")
    return OutgoingEnvelope(
        id=request_id,
        method=method.strip(),
        params=({} if request is None else request,),
    )


def encode_call(envelope: OutgoingEnvelope) -> bytes:
    return orjson.dumps(
        {
            RPC_KEY_ID: envelope.id,
            RPC_KEY_METHOD: envelope.method,
            RPC_KEY_PARAMS: list(envelope.params),
        },
        default=_default,
    )


def _error_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)) and not value:
        return ""
    return orjson.dumps(value).decode("utf-8")


_JSON_WS = b" \t\r\n"


def _skip_ws(buf: bytes, i: int) -> int:
    while buf[i] in _JSON_WS:
        i += 1
    return i


def _string_end(buf: bytes, i: int) -> int:
    i += 1
    while True:
        c = buf[i]
        if c == 0x5C:  # backslash
            i += 2
            continue
        i += 1
        if c == 0x22:
            return i


def _value_end(buf: bytes, i: int) -> int:
    c = buf[i]
    if c == 0x22:
        return _string_end(buf, i)
    if c in b"[{":
        depth = 0
        while True:
            c = buf[i]
            if c == 0x22:
                i = _string_end(buf, i)
                continue
            if c in b"[{":
                depth += 1
            elif c in b"]}":
                depth -= 1
                if depth == 0:
                    return i + 1
            i += 1
    while i < len(buf) and buf[i] not in b",}] \t\r\n":
        i += 1
    return i


def _member_bytes(buf: bytes, key: str) -> bytes | None:
    """Return the verbatim text of the top-level member ``key`` of a JSON object.

    ``buf`` must already be known to parse as an object. If the key repeats,
    the last occurrence is returned.
    """
    found = None
    i = _skip_ws(buf, 3 if buf.startswith(b"\xef\xbb\xbf") else 0) + 1
    while True:
        i = _skip_ws(buf, i)
        if buf[i] == 0x7D:
            return found
        end = _string_end(buf, i)
        name = orjson.loads(buf[i:end])
        i = _skip_ws(buf, _skip_ws(buf, end) + 1)
        end = _value_end(buf, i)
        if name == key:
            found = buf[i:end]
        i = _skip_ws(buf, end)
        if buf[i] == 0x2C:
            i += 1


def decode_envelope(raw: bytes) -> IncomingEnvelope:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ProtocolError(f"message is not valid UTF-8: {exc}", raw) from exc

    try:
        msg = orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        raise ProtocolError(f"invalid JSON: {exc}", raw) from exc

    if not isinstance(msg, dict):
        raise ProtocolError("message must be a JSON object", raw)

    if RPC_KEY_ID not in msg:
        raise ProtocolError("message missing 'id'", raw)
    request_id = msg[RPC_KEY_ID]
    if isinstance(request_id, bool) or not isinstance(request_id, int):
        raise ProtocolError(f"message 'id' must be an integer, got {request_id!r}", raw)

    error = _error_text(msg.get(RPC_KEY_ERROR))
    if error or RPC_KEY_RESULT not in msg:
        return IncomingEnvelope(id=request_id, result=None, error=error)
    # Hand over the result exactly as sent; re-encoding would turn big integers into floats.
    return IncomingEnvelope(id=request_id, result=_member_bytes(bytes(raw), RPC_KEY_RESULT), error="")


def json_decoder(raw: bytes) -> Any:
    return orjson.loads(raw)


def object_decoder(factory: Callable[[Any], Any]) -> Callable[[bytes], Any]:
    """Build a decoder that parses the result and passes it to ``factory``."""

    def _decode(raw: bytes) -> Any:
        return factory(orjson.loads(raw))

    return _decode


__all__ = [
    "build_call",
    "decode_envelope",
    "encode_call",
    "json_decoder",
    "object_decoder",
]
