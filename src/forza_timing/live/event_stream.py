"""DatagramStream — background receive loop with drop-oldest overflow handling."""

from __future__ import annotations

import contextlib
import logging
import queue
import threading
from dataclasses import dataclass

from forza_timing.telemetry.decoder import FrameDecoder, MalformedFrame
from forza_timing.telemetry.models import TelemetrySample

_logger = logging.getLogger(__name__)


@dataclass
class SampleEvent:
    """A decoded sample with its arrival sequence number."""

    sample: TelemetrySample
    sequence: int


class DatagramStream:
    """Reads datagrams from *source*, decodes them and enqueues :class:`SampleEvent`.

    Malformed datagrams and source read errors are logged and dropped; the
    stream keeps running.
    When the internal queue is full the *oldest* event is discarded so that
    the consumer always sees the most recent telemetry.

    Parameters
    ----------
    source:
        Object with ``read_datagram() -> bytes | None``, e.g. a wrapper
        around a bound UDP socket with a receive timeout. ``None`` means no
        datagram arrived in time.
    decoder:
        A :class:`FrameDecoder`; a default one is created when omitted.
    queue_maxsize:
        Maximum number of events buffered before drop-oldest kicks in.
    """

    def __init__(
        self,
        source,
        decoder: FrameDecoder | None = None,
        queue_maxsize: int = 120,
    ) -> None:
        self._source = source
        self._decoder = decoder or FrameDecoder()
        self._queue: queue.Queue[SampleEvent] = queue.Queue(maxsize=queue_maxsize)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._sequence = 0
        self.dropped_malformed = 0
        self.dropped_overflow = 0
        self.read_errors = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the background receive thread."""
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="DatagramStream")
        self._thread.start()

    def stop(self) -> None:
        """Signal the receive thread to stop and join it."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None

    def get_event(self, timeout: float = 0.1) -> SampleEvent | None:
        """Return the next queued event, or None if none arrives within *timeout* s."""
        try:
            if timeout <= 0:
                return self._queue.get_nowait()
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def queue_size(self) -> int:
        """Return the current number of buffered events."""
        return self._queue.qsize()

    def feed(self, datagram: bytes) -> SampleEvent | None:
        """Decode and enqueue one *datagram*; returns the event or None if dropped."""
        try:
            sample = self._decoder.decode(datagram)
        except MalformedFrame as exc:
            self.dropped_malformed += 1
            _logger.warning("Dropping malformed datagram: %s", exc)
            return None
        self._sequence += 1
        event = SampleEvent(sample=sample, sequence=self._sequence)
        self._enqueue(event)
        return event

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                datagram = self._source.read_datagram()
            except OSError as exc:
                self.read_errors += 1
                _logger.warning("Datagram source read failed: %s", exc)
                self._stop_event.wait(0.001)
                continue
            if datagram is None:
                # Sources without a blocking timeout must not spin.
                self._stop_event.wait(0.001)
                continue
            self.feed(datagram)

    def _enqueue(self, event: SampleEvent) -> None:
        """Put *event* in the queue; drop oldest if full."""
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            with contextlib.suppress(queue.Empty):
                self._queue.get_nowait()
                self.dropped_overflow += 1
            with contextlib.suppress(queue.Full):
                self._queue.put_nowait(event)
