from __future__ import annotations

import json
import base64
from dataclasses import dataclass

import pytest

from litrpc.errors import ProtocolError
from litrpc.protocol.codec import build_call, encode_call, json_decoder, object_decoder, decode_envelope


@dataclass
class _PushArgs:
    ChanIdx: int
    Amt: int
    Data: bytes


def test_encode_call_wraps_request_in_single_param() -> None:
    raw = encode_call(build_call(7, "LitRPC.Connect", {"LNAddr": "ln1abc"}))
    msg = json.loads(raw)
    assert msg == {"id": 7, "method": "LitRPC.Connect", "params": [{"LNAddr": "ln1abc"}]}


def test_encode_call_without_request_sends_empty_object() -> None:
    msg = json.loads(encode_call(build_call(1, "LitRPC.Balance")))
    assert msg["params"] == [{}]


def test_encode_call_serializes_dataclass_and_bytes() -> None:
    raw = encode_call(build_call(2, "LitRPC.Push", _PushArgs(ChanIdx=1, Amt=1000, Data=b"\x00\x01ref")))
    params = json.loads(raw)["params"]
    assert len(params) == 1
    assert params[0]["ChanIdx"] == 1
    assert base64.b64decode(params[0]["Data"]) == b"\x00\x01ref"


def test_encode_call_rejects_unserializable_request() -> None:
    with pytest.raises(TypeError):
        encode_call(build_call(3, "LitRPC.Send", {"x": object()}))


@pytest.mark.parametrize("method", ["", "   ", None])
def test_build_call_requires_method(method) -> None:
    with pytest.raises(ValueError):
        build_call(1, method, {})


def test_decode_envelope_result() -> None:
    env = decode_envelope(b'{"id":1,"result":{"Balances":[]},"error":""}')
    assert env.id == 1
    assert env.error == ""
    assert not env.is_error
    assert json.loads(env.result) == {"Balances": []}


def test_decode_envelope_keeps_result_bytes_verbatim() -> None:
    env = decode_envelope(b'{"id":6,"result":{"Amt":18446744073709551616},"error":""}')
    assert env.result == b'{"Amt":18446744073709551616}'
    assert json.loads(env.result)["Amt"] == 2**64


@pytest.mark.parametrize(
    "raw, expected",
    [
        (b'{ "id" : 7 , "result" : [1, {"x": "]}"}] , "error": "" }', b'[1, {"x": "]}"}]'),
        (b'{"result":"a \\"}\\" b","id":7}', b'"a \\"}\\" b"'),
        (b'{"id":7,"res\\u0075lt":-1.5e3}', b"-1.5e3"),
        (b'{"id":7,"result":{"Memo":"\xc3\xa9"}}', b'{"Memo":"\xc3\xa9"}'),
    ],
)
def test_decode_envelope_result_span(raw: bytes, expected: bytes) -> None:
    assert decode_envelope(raw).result == expected


def test_decode_envelope_error_skips_result() -> None:
    env = decode_envelope(b'{"id":3,"result":{"Status":"ignored"},"error":"peer not found"}')
    assert env.is_error
    assert env.error == "peer not found"
    assert env.result is None


@pytest.mark.parametrize("error", [None, "", [], {}])
def test_decode_envelope_empty_error_values(error) -> None:
    env = decode_envelope(json.dumps({"id": 4, "result": 5, "error": error}).encode())
    assert env.error == ""
    assert env.result == b"5"


def test_decode_envelope_non_string_error_is_reported_as_json() -> None:
    env = decode_envelope(b'{"id":4,"error":{"code":-1}}')
    assert json.loads(env.error) == {"code": -1}


def test_decode_envelope_absent_result() -> None:
    env = decode_envelope(b'{"id":5,"error":""}')
    assert env.result is None
    assert not env.is_error


@pytest.mark.parametrize(
    "raw",
    [
        b"not json",
        b"\xff\xfe{}",
        b"[]",
        b'{"result":{},"error":""}',
        b'{"id":"1","result":{}}',
        b'{"id":null,"result":{}}',
        b'{"id":true,"result":{}}',
        b'{"id":1.5,"result":{}}',
    ],
)
def test_decode_envelope_invalid(raw: bytes) -> None:
    with pytest.raises(ProtocolError) as exc:
        decode_envelope(raw)
    assert exc.value.raw == raw


def test_object_decoder_applies_factory() -> None:
    decode = object_decoder(lambda result: result["Balances"])
    assert decode(b'{"Balances":[1,2]}') == [1, 2]
    assert json_decoder(b"null") is None
