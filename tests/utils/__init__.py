"""Test doubles and fixtures shared by the unit tests."""

from __future__ import annotations

from .settings import make_settings
from .transport import FakeTransport, TransportFactoryRecorder, split_bytes

__all__ = ["FakeTransport", "TransportFactoryRecorder", "make_settings", "split_bytes"]
