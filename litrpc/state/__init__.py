from .pending import Decoder, PendingRequest
from .connection_state import ConnectionState
from .envelope import IncomingEnvelope, OutgoingEnvelope
from .settings import ClientSettings, EndpointSettings, TransportSettings

__all__ = [
    "ClientSettings",
    "ConnectionState",
    "Decoder",
    "EndpointSettings",
    "IncomingEnvelope",
    "OutgoingEnvelope",
    "PendingRequest",
    "TransportSettings",
]
