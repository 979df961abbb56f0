"""Error types for the LIT RPC client (dataclasses only, plus a shared base)."""

from __future__ import annotations

from dataclasses import dataclass


class RpcError(Exception):
    """Base class for every error raised by the client."""


@dataclass(frozen=True, slots=True)
class ConnectionFailedError(RpcError):
    """The transport could not be established, or a send/receive failed."""

    endpoint: str
    reason: str

    def __str__(self) -> str:
        return f"connection to {self.endpoint} failed: {self.reason}"


@dataclass(frozen=True, slots=True)
class ConnectionClosedError(RpcError):
    """The connection was torn down while a call was still pending."""

    reason: str = "connection closed"
    request_id: int | None = None

    def __str__(self) -> str:
        if self.request_id is None:
            return self.reason
        return f"{self.reason} (request id={self.request_id})"


@dataclass(frozen=True, slots=True)
class ConnectionStateError(RpcError):
    """An operation was attempted in a connection state that does not allow it."""

    operation: str
    state: str

    def __str__(self) -> str:
        return f"cannot {self.operation} while connection is {self.state}"


@dataclass(frozen=True, slots=True)
class ProtocolError(RpcError):
    """A received message is not a well-formed reply envelope."""

    reason: str
    raw: bytes = b""

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class RemoteError(RpcError):
    """The daemon answered a call with a non-empty ``error`` field."""

    message: str
    request_id: int = 0
    method: str = ""

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class DecodeError(RpcError):
    """A reply's ``result`` did not satisfy the caller's decode contract."""

    request_id: int
    method: str
    reason: str

    def __str__(self) -> str:
        return f"cannot decode reply to {self.method} (id={self.request_id}): {self.reason}"


@dataclass(frozen=True, slots=True)
class DuplicateIdError(RpcError):
    """A request id was registered while another call still owned it."""

    request_id: int

    def __str__(self) -> str:
        return f"request id {self.request_id} is already pending"


__all__ = [
    "ConnectionClosedError",
    "ConnectionFailedError",
    "ConnectionStateError",
    "DecodeError",
    "DuplicateIdError",
    "ProtocolError",
    "RemoteError",
    "RpcError",
]
