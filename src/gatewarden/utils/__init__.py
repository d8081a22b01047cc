"""Utilities shared across gatewarden components."""

from ._clock import Clock, FakeClock, SystemClock
from ._io import atomic_write, write_json_atomic
from ._logging import create_logger
from ._net import probe_tcp

__all__ = [
    "Clock",
    "FakeClock",
    "SystemClock",
    "atomic_write",
    "create_logger",
    "probe_tcp",
    "write_json_atomic",
]
