"""Client settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EndpointSettings:
    host: str
    port: int
    path: str
    secure: bool
    origin: str


@dataclass(frozen=True, slots=True)
class TransportSettings:
    connect_timeout_s: float
    close_timeout_s: float
    max_message_bytes: int
    ping_interval_s: float
    ping_timeout_s: float


@dataclass(frozen=True, slots=True)
class ClientSettings:
    endpoint: EndpointSettings
    transport: TransportSettings


__all__ = [
    "ClientSettings",
    "EndpointSettings",
    "TransportSettings",
]
