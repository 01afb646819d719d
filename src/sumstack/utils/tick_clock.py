from __future__ import annotations

from sumstack.constants import TICK_INTERVAL_MS
from sumstack.events.bus import EVENT_TICK, EventBus


class TickClock:
    """Turns variable host frame deltas into fixed-size EVENT_TICK pulses.

    The round controller never reads wall-clock time; it only sees these ticks,
    so tests can feed synthetic ones directly on the bus.
    """

    def __init__(self, event_bus: EventBus, interval_ms: int = TICK_INTERVAL_MS) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.event_bus = event_bus
        self.interval_ms = interval_ms
        self._accumulated_ms = 0.0

    def advance(self, dt_seconds: float) -> int:
        """Accumulate ``dt_seconds`` and emit one tick per whole interval elapsed."""
        if dt_seconds <= 0:
            return 0
        self._accumulated_ms += dt_seconds * 1000.0
        emitted = 0
        while self._accumulated_ms >= self.interval_ms:
            self._accumulated_ms -= self.interval_ms
            self.event_bus.emit(EVENT_TICK, dt_ms=self.interval_ms)
            emitted += 1
        return emitted

    def reset(self) -> None:
        self._accumulated_ms = 0.0
