"""Endpoint URL helpers for the daemon's WebSocket RPC listener."""

from __future__ import annotations

from urllib.parse import urlparse, urlunparse

from litrpc.state.settings import EndpointSettings


def build_endpoint(settings: EndpointSettings) -> str:
    scheme = "wss" if settings.secure else "ws"
    return f"{scheme}://{settings.host}:{settings.port}{settings.path}"


def ws_url(server: str, settings: EndpointSettings) -> str:
    """Normalize ``host``, ``host:port``, ``http(s)://`` or ``ws(s)://`` into a WebSocket URL.

    Missing pieces (port, path) are taken from ``settings``.
    """
    server = (server or "").strip()
    if not server:
        return build_endpoint(settings)

    if server.startswith(("ws://", "wss://", "http://", "https://")):
        parsed = urlparse(server)
        secure = parsed.scheme in {"wss", "https"} or settings.secure
        netloc = parsed.netloc if parsed.port is not None else f"{parsed.netloc}:{settings.port}"
        path = parsed.path.rstrip("/") or settings.path
        return urlunparse(("wss" if secure else "ws", netloc, path, "", parsed.query, ""))

    scheme = "wss" if settings.secure else "ws"
    host = server.rstrip("/")
    if ":" not in host:
        host = f"{host}:{settings.port}"
    return f"{scheme}://{host}{settings.path}"


__all__ = ["build_endpoint", "ws_url"]
