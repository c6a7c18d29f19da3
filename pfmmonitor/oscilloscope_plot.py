"""Model of the oscilloscope-style chart that draws each sample as a pulse."""

from __future__ import annotations

from collections.abc import Iterable

from pfmmonitor.frequency_plot import SENSOR_IDS, Axis, sensor_name
from pfmmonitor.storage import DataStorage, Point

PULSE_HIGH_VOLTS = 3.3
DUTY_CYCLE = 0.8
MAX_POINTS = 1000
WINDOW = 5.0


class OscilloscopePlotter:
    """Keeps rectangular pulse traces per sensor and a sliding time window."""

    def __init__(self, storage: DataStorage) -> None:
        self.storage = storage
        self.title = "Осциллографный вид (PFM)"
        self.axis_x = Axis("Время, мс", 0, WINDOW)
        self.axis_y = Axis("Напряжение, В", 0, 3.5)
        self.series_names = {i: sensor_name(i) for i in SENSOR_IDS}
        self.series: dict[int, list[Point]] = {i: [] for i in SENSOR_IDS}
        self.visible_sensors: frozenset[int] = frozenset()

    def add_pulse(self, sensor_id: int, time: float, frequency: float) -> None:
        """Append one pulse for a visible sensor; frequency is in kHz."""
        if sensor_id not in self.series or sensor_id not in self.visible_sensors:
            return
        if frequency <= 0 or time < 0:
            return
        period_ms = 1.0 / (frequency * 1000.0) * 1000.0
        width = period_ms * DUTY_CYCLE
        points = self.series[sensor_id]
        points.extend(
            [
                (time, 0.0),
                (time, PULSE_HIGH_VOLTS),
                (time + width, PULSE_HIGH_VOLTS),
                (time + width, 0.0),
            ]
        )
        if len(points) > MAX_POINTS:
            del points[: len(points) - MAX_POINTS]

    def clear(self) -> None:
        for points in self.series.values():
            points.clear()

    def update_plot(self) -> None:
        """Show the last WINDOW units of time of the visible sensors."""
        min_time, max_time = 0.0, WINDOW
        has_data = False
        for sensor_id in sorted(self.visible_sensors):
            data = self.storage.frequency_data(sensor_id)
            if data:
                has_data = True
                max_time = max(max_time, data[-1][0])
                min_time = max(0.0, max_time - WINDOW)
        if has_data:
            self.axis_x.minimum, self.axis_x.maximum = min_time, max_time
        else:
            self.axis_x.minimum, self.axis_x.maximum = 0, WINDOW

    def set_visible_sensors(self, sensors: Iterable[int]) -> None:
        self.visible_sensors = frozenset(sensors)
        self.clear()
        self.update_plot()