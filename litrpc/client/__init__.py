from .correlator import RequestCorrelator
from .receive_loop import ReceiveLoop
from .endpoint import ws_url, build_endpoint
from .connection import ConnectionManager, open_connection

__all__ = [
    "ConnectionManager",
    "ReceiveLoop",
    "RequestCorrelator",
    "build_endpoint",
    "open_connection",
    "ws_url",
]
