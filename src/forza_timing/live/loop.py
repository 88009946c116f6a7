"""LiveTimingLoop — connects a DatagramStream to a TimingEngine."""

from __future__ import annotations

from collections.abc import Callable

from forza_timing.config import TimingConfig
from forza_timing.live.event_stream import DatagramStream
from forza_timing.telemetry.decoder import FrameDecoder
from forza_timing.timing.engine import TimingEngine
from forza_timing.timing.schemas import TimingSnapshot


class LiveTimingLoop:
    """Single writer for a :class:`TimingEngine`.

    Samples are pulled from the stream and ingested on the thread that calls
    :meth:`tick`, so the engine itself needs no locking. Listeners receive
    an immutable :class:`TimingSnapshot` after every ingested sample.

    Parameters
    ----------
    stream:
        A :class:`~forza_timing.live.event_stream.DatagramStream`.
    engine:
        The session's :class:`TimingEngine`.
    """

    def __init__(self, stream, engine: TimingEngine) -> None:
        self._stream = stream
        self._engine = engine
        self._listeners: list[Callable[[TimingSnapshot], None]] = []
        self.latest: TimingSnapshot | None = None

    @classmethod
    def from_config(cls, source, config: TimingConfig | None = None) -> LiveTimingLoop:
        """Wire a stream over *source* and a fresh engine from *config*."""
        cfg = config or TimingConfig()
        stream = DatagramStream(
            source,
            FrameDecoder(min_length=cfg.min_datagram_length),
            queue_maxsize=cfg.queue_maxsize,
        )
        return cls(stream, TimingEngine(cfg))

    @property
    def engine(self) -> TimingEngine:
        return self._engine

    def start(self) -> None:
        """Start the underlying datagram stream."""
        self._stream.start()

    def stop(self) -> None:
        """Stop the underlying datagram stream."""
        self._stream.stop()

    def register_listener(self, listener: Callable[[TimingSnapshot], None]) -> None:
        """Register *listener(snapshot)*, called after each ingested sample."""
        self._listeners.append(listener)

    def tick(self, timeout: float = 0.0) -> TimingSnapshot | None:
        """Ingest one queued sample and return the resulting snapshot.

        Returns None when no sample arrived within *timeout* seconds.
        """
        event = self._stream.get_event(timeout=timeout)
        if event is None:
            return None

        self._engine.ingest(event.sample)
        snapshot = self._engine.snapshot()
        self.latest = snapshot
        for listener in self._listeners:
            listener(snapshot)
        return snapshot

    def drain(self) -> int:
        """Ingest every sample currently queued; returns how many were processed."""
        count = 0
        while self.tick() is not None:
            count += 1
        return count
