"""Background timekeeper with a request/response handoff.

A producer thread computes the current local time on demand and hands the
formatted string to the game loop. The two threads meet at a rendezvous made
of single-slot queues:

1. the consumer creates a one-slot reply queue and puts it in the request slot
2. the producer, blocked on that slot, wakes, computes exactly one fresh
   reading and puts it in that reply queue
3. the consumer, blocked on its own reply queue, receives that reading

Every request therefore yields a value computed after the request was made,
and the producer never runs unless asked. A consumer-side lock pairs each
request with its own response when several threads ask at once. A reply the
consumer stopped waiting for stays in its abandoned queue and can never be
read by a later request.

The producer runs as a daemon thread for the life of the process; it is never
joined or cancelled. There are no timeouts, so callers must not rely on
bounded latency.
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Union

from .logging_utils import LOG_TAG_HANDOFF, log_handoff


TIME_FORMAT = "%I:%M %p, %A, %B %d, %Y"
"""Example: ``01:05 PM, Monday, October 19, 2026``."""


def format_timestamp(moment: datetime, time_format: str = TIME_FORMAT) -> str:
    return moment.strftime(time_format)


def local_now() -> datetime:
    """Current wall-clock time in the local timezone."""

    return datetime.now().astimezone()


@dataclass(frozen=True)
class TimeReading:
    """One value published by the producer."""

    moment: datetime
    text: str
    sequence: int


class TimeKeeper:
    """Producer thread plus the consumer-side handoff.

    Args:
        clock: Returns the moment to publish; defaults to local wall-clock time.
            Tests inject a deterministic clock.
        time_format: ``strftime`` pattern applied to each reading
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        *,
        time_format: str = TIME_FORMAT,
    ) -> None:
        self._clock = clock or local_now
        self._time_format = time_format
        self._requests: queue.Queue[queue.Queue[Union[TimeReading, Exception]]] = queue.Queue(maxsize=1)
        self._consumer_lock = threading.Lock()
        self._start_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._published = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def published(self) -> int:
        """Number of readings the producer has computed so far."""

        return self._published

    def start(self) -> "TimeKeeper":
        """Spawn the producer thread. Calling again is a no-op."""

        with self._start_lock:
            if self._thread is None:
                self._thread = threading.Thread(
                    target=self._run,
                    name="roomcrawl-timekeeper",
                    daemon=True,
                )
                self._thread.start()
        return self

    def _run(self) -> None:
        while True:
            reply = self._requests.get()
            try:
                reading: Union[TimeReading, Exception] = self._publish()
            except Exception as exc:
                # Hand the failure to the waiting consumer instead of leaving it blocked
                reading = exc
            reply.put(reading)

    def _publish(self) -> TimeReading:
        moment = self._clock()
        self._published += 1
        return TimeReading(
            moment=moment,
            text=format_timestamp(moment, self._time_format),
            sequence=self._published,
        )

    def request_reading(self) -> TimeReading:
        """Block until the producer publishes one fresh reading for this request.

        Raises:
            RuntimeError: ``start()`` has not been called
            Exception: whatever the clock raised while computing the reading
        """

        if self._thread is None:
            raise RuntimeError("TimeKeeper.start() must be called before requesting the time")

        with self._consumer_lock:
            log_handoff(f"  {LOG_TAG_HANDOFF} [TimeKeeper] Requesting fresh reading")
            reply: queue.Queue[Union[TimeReading, Exception]] = queue.Queue(maxsize=1)
            self._requests.put(reply)
            result = reply.get()

        if isinstance(result, Exception):
            raise result
        log_handoff(f"  {LOG_TAG_HANDOFF} [TimeKeeper] Received reading #{result.sequence}")
        return result

    def request_time(self) -> str:
        """Return a freshly computed, formatted timestamp."""

        return self.request_reading().text
