"""Telemetry decoding for Forza DASH datagrams.

Public API
----------
TelemetrySample     - single decoded datagram
FrameDecoder        - raw datagram bytes → TelemetrySample
MalformedFrame      - raised on undersized or non-byte datagrams
DASH_PACKET_SIZE    - length of a Forza Motorsport DASH datagram
"""

from forza_timing.telemetry.decoder import (
    DASH_LAYOUT,
    DASH_PACKET_SIZE,
    FrameDecoder,
    MalformedFrame,
)
from forza_timing.telemetry.models import TelemetrySample

__all__ = [
    "DASH_LAYOUT",
    "DASH_PACKET_SIZE",
    "FrameDecoder",
    "MalformedFrame",
    "TelemetrySample",
]
