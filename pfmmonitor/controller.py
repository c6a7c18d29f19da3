"""Application state behind the main window: connection, chart type and sensor visibility."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import IntEnum

from pfmmonitor.frequency_plot import SENSOR_IDS, FrequencyPlotter
from pfmmonitor.oscilloscope_plot import OscilloscopePlotter
from pfmmonitor.serial_reader import Reading, SerialPortReader
from pfmmonitor.storage import DataStorage

log = logging.getLogger(__name__)

MIN_BAUD_RATE = 9600
MAX_BAUD_RATE = 115200
DEFAULT_BAUD_RATE = 115200

STATUS_DISCONNECTED = "Статус: не подключено"
STATUS_CONNECTED_PREFIX = "Статус: Подключено к "
BUTTON_CONNECT = "Подключить"
BUTTON_DISCONNECT = "Отключить"


class GraphType(IntEnum):
    """Chart kinds, in the order they appear in the selector."""

    FREQUENCY = 0
    OSCILLOSCOPE = 1

    @property
    def label(self) -> str:
        return "Частота/Время" if self is GraphType.FREQUENCY else "Осциллограф"


class MonitorController:
    """Connects the serial reader, the sample store and the active chart model."""

    def __init__(
        self,
        storage: DataStorage | None = None,
        reader: SerialPortReader | None = None,
    ) -> None:
        self.storage = storage if storage is not None else DataStorage()
        self.reader = reader if reader is not None else SerialPortReader()
        self.frequency_plotter: FrequencyPlotter | None = None
        self.oscilloscope_plotter: OscilloscopePlotter | None = None
        self.graph_type = GraphType.FREQUENCY
        self.is_connected = False
        self.current_port_name = ""
        self._checked = [True] * len(SENSOR_IDS)
        self._setup_frequency_plotter()

    @property
    def active_plotter(self) -> FrequencyPlotter | OscilloscopePlotter:
        plotter = self.frequency_plotter or self.oscilloscope_plotter
        assert plotter is not None
        return plotter

    @property
    def checked(self) -> list[bool]:
        return list(self._checked)

    @property
    def status_text(self) -> str:
        if self.is_connected:
            return STATUS_CONNECTED_PREFIX + self.current_port_name
        return STATUS_DISCONNECTED

    @property
    def button_text(self) -> str:
        return BUTTON_DISCONNECT if self.is_connected else BUTTON_CONNECT

    @property
    def port_controls_enabled(self) -> bool:
        return not self.is_connected

    def _setup_frequency_plotter(self) -> None:
        if self.oscilloscope_plotter is not None:
            self.oscilloscope_plotter.clear()
            self.oscilloscope_plotter = None
        if self.frequency_plotter is None:
            self.frequency_plotter = FrequencyPlotter(self.storage)
            self.frequency_plotter.update_plot()

    def _setup_oscilloscope_plotter(self) -> None:
        if self.frequency_plotter is not None:
            self.frequency_plotter.clear()
            self.frequency_plotter = None
        if self.oscilloscope_plotter is None:
            self.oscilloscope_plotter = OscilloscopePlotter(self.storage)
            self.oscilloscope_plotter.update_plot()

    def _clear_plotters(self) -> None:
        if self.frequency_plotter is not None:
            self.frequency_plotter.clear()
        if self.oscilloscope_plotter is not None:
            self.oscilloscope_plotter.clear()

    def on_graph_type_changed(self, graph_type: GraphType | int) -> None:
        """Switch the chart model and reapply the sensor selection."""
        graph_type = GraphType(graph_type)
        self.graph_type = graph_type
        if graph_type is GraphType.FREQUENCY:
            self._setup_frequency_plotter()
        else:
            self._setup_oscilloscope_plotter()
        self.update_visible_sensors()

    def update_visible_sensors(self, checked: Iterable[bool] | None = None) -> frozenset[int]:
        """Show the sensors whose boxes are ticked; None reuses the last ticks."""
        if checked is not None:
            self._checked = [bool(flag) for flag in checked]
        visible = frozenset(
            sensor_id for sensor_id, flag in zip(SENSOR_IDS, self._checked) if flag
        )
        if self.frequency_plotter is not None:
            self.frequency_plotter.set_visible_sensors(visible)
        if self.oscilloscope_plotter is not None:
            self.oscilloscope_plotter.set_visible_sensors(visible)
        return visible

    def on_new_data(self, sensor_id: int, frequency: float) -> None:
        """Timestamp a reading, store it and hand it to the active chart."""
        now = self.storage.current_time_seconds()
        self.storage.add_frequency_data(sensor_id, now, frequency)
        if self.graph_type is GraphType.FREQUENCY and self.frequency_plotter is not None:
            self.frequency_plotter.add_data_point(sensor_id, now, frequency)
        elif self.oscilloscope_plotter is not None:
            self.oscilloscope_plotter.add_pulse(sensor_id, now, frequency)
            self.oscilloscope_plotter.update_plot()

    def on_connect_clicked(self, port_name: str, baud_rate: int = DEFAULT_BAUD_RATE) -> bool:
        """Toggle the connection; return the new state.

        Raises SerialPortError when the port cannot be opened.
        """
        self.current_port_name = port_name
        if not self.is_connected:
            self.reader.connect(port_name, baud_rate)
            self.storage.clear()
            self.storage.start_timer()
            log.debug("Connected to %s at %s baud", port_name, baud_rate)
            self.is_connected = True
        else:
            self.reader.disconnect()
            self.storage.clear()
            self.storage.stop_timer()
            log.debug("Disconnected from %s", port_name)
            self.is_connected = False
        self._clear_plotters()
        return self.is_connected

    def poll(self) -> list[Reading]:
        """Fetch waiting readings from the port and process each one."""
        readings = self.reader.poll()
        for reading in readings:
            self.on_new_data(reading.sensor_id, reading.frequency)
        return readings

    def close(self) -> None:
        """Release the serial port."""
        self.reader.disconnect()
        self.is_connected = False