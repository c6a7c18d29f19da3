"""Model of the frequency-over-time chart."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pfmmonitor.storage import DataStorage, Point

SENSOR_IDS = range(1, 9)


@dataclass
class Axis:
    """A chart axis with a title and a visible range."""

    title: str
    minimum: float
    maximum: float


def sensor_name(sensor_id: int) -> str:
    return f"Датчик {sensor_id}"


class FrequencyPlotter:
    """Keeps one line series per sensor and the axis ranges of the chart."""

    def __init__(self, storage: DataStorage) -> None:
        self.storage = storage
        self.title = "Мониторинг PFM сигнала (0.05-500 кГц)"
        self.axis_x = Axis("Время (сек)", 0, 10)
        self.axis_y = Axis("Частота (кГц)", 0.05, 500)
        self.series_names = {i: sensor_name(i) for i in SENSOR_IDS}
        self.series: dict[int, list[Point]] = {i: [] for i in SENSOR_IDS}
        self.visible_sensors: frozenset[int] = frozenset()

    def add_data_point(self, sensor_id: int, x: float, y: float) -> None:
        """Store a sample for a known sensor and redraw if it is shown."""
        if sensor_id not in self.series:
            return
        self.storage.add_frequency_data(sensor_id, x, y)
        if sensor_id in self.visible_sensors:
            self.update_plot()

    def clear(self) -> None:
        for points in self.series.values():
            points.clear()

    def update_plot(self) -> None:
        """Copy stored samples into visible series and fit the time axis."""
        for sensor_id in sorted(self.visible_sensors):
            if sensor_id in self.series:
                self.series[sensor_id] = self.storage.frequency_data(sensor_id)

        min_x, max_x = 0.0, 10.0
        for sensor_id in self.visible_sensors:
            data = self.storage.frequency_data(sensor_id)
            if data:
                min_x = min(min_x, data[0][0])
                max_x = max(max_x, data[-1][0])
        self.axis_x.minimum, self.axis_x.maximum = min_x, max_x

    def set_visible_sensors(self, sensors: Iterable[int]) -> None:
        self.visible_sensors = frozenset(sensors)
        self.update_plot()