"""Live feed: datagram source → decoder → timing engine → snapshots."""

from forza_timing.live.event_stream import DatagramStream, SampleEvent
from forza_timing.live.loop import LiveTimingLoop

__all__ = [
    "DatagramStream",
    "LiveTimingLoop",
    "SampleEvent",
]
