"""In-memory store of recent frequency samples per sensor, with a session timer."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable

Point = tuple[float, float]

MAX_POINTS = 100


class DataStorage:
    """Keeps the last MAX_POINTS (time, frequency) samples of every sensor."""

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock if clock is not None else time.monotonic
        self._data: dict[int, deque[Point]] = {}
        self._started_at: float | None = None
        self._last_elapsed_ms = 0

    def add_frequency_data(self, sensor_id: int, time: float, frequency: float) -> None:
        """Append a sample, dropping the oldest once the sensor holds too many."""
        points = self._data.setdefault(sensor_id, deque(maxlen=MAX_POINTS))
        points.append((time, frequency))

    def frequency_data(self, sensor_id: int) -> list[Point]:
        """Return a copy of the samples stored for a sensor, oldest first."""
        return list(self._data.get(sensor_id, ()))

    def add_pulse_data(self, sensor_id: int, time: float, frequency: float) -> None:
        """Store a pulse sample; pulses share the frequency series."""
        self.add_frequency_data(sensor_id, time, frequency)

    def clear(self) -> None:
        """Drop all samples and restart the timer."""
        self._data.clear()
        self._started_at = self._clock()
        self._last_elapsed_ms = 0

    def start_timer(self) -> None:
        self._started_at = self._clock()
        self._last_elapsed_ms = 0

    def stop_timer(self) -> None:
        """Remember the elapsed time; the clock itself keeps running."""
        self._last_elapsed_ms = self._elapsed_ms()

    def _elapsed_ms(self) -> int:
        if self._started_at is None:
            return self._last_elapsed_ms
        return int((self._clock() - self._started_at) * 1000)

    def current_time_seconds(self) -> float:
        return self._elapsed_ms() / 1000.0

    def current_time_milliseconds(self) -> float:
        return float(self._elapsed_ms())