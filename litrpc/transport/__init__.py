from .base import Fragment, Transport
from .websocket import WebSocketTransport, open_websocket_transport

__all__ = ["Fragment", "Transport", "WebSocketTransport", "open_websocket_transport"]
