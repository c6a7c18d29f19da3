import pytest

from pfmmonitor.controller import (
    BUTTON_CONNECT,
    BUTTON_DISCONNECT,
    STATUS_DISCONNECTED,
    GraphType,
    MonitorController,
)
from pfmmonitor.serial_reader import Reading, SerialPortError
from pfmmonitor.storage import DataStorage


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class FakeReader:
    def __init__(self, fail=False):
        self.fail = fail
        self.connected_to = None
        self.pending = []

    def connect(self, port_name, baud_rate=115200):
        if self.fail:
            raise SerialPortError(f"Не удалось открыть порт {port_name}: busy")
        self.connected_to = (port_name, baud_rate)

    def disconnect(self):
        was_open = self.connected_to is not None
        self.connected_to = None
        return was_open

    def poll(self):
        readings, self.pending = self.pending, []
        return readings


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def reader():
    return FakeReader()


@pytest.fixture
def controller(clock, reader):
    return MonitorController(DataStorage(clock), reader)


def test_initial_state(controller):
    assert controller.graph_type is GraphType.FREQUENCY
    assert controller.frequency_plotter is not None
    assert controller.oscilloscope_plotter is None
    assert controller.is_connected is False
    assert controller.status_text == STATUS_DISCONNECTED
    assert controller.button_text == BUTTON_CONNECT
    assert controller.port_controls_enabled is True
    assert controller.frequency_plotter.visible_sensors == frozenset()
    assert controller.checked == [True] * 8


def test_update_visible_sensors(controller):
    flags = [True, False, True, False, False, False, False, True]
    visible = controller.update_visible_sensors(flags)
    assert visible == {1, 3, 8}
    assert controller.frequency_plotter.visible_sensors == visible
    assert controller.checked == flags


def test_switch_to_oscilloscope_keeps_selection(controller):
    controller.update_visible_sensors([False, True] + [False] * 6)
    controller.on_graph_type_changed(GraphType.OSCILLOSCOPE)
    assert controller.frequency_plotter is None
    assert controller.oscilloscope_plotter is controller.active_plotter
    assert controller.oscilloscope_plotter.visible_sensors == {2}


def test_switch_back_to_frequency(controller):
    controller.on_graph_type_changed(1)
    controller.on_graph_type_changed(0)
    assert controller.graph_type is GraphType.FREQUENCY
    assert controller.oscilloscope_plotter is None
    assert controller.frequency_plotter.visible_sensors == set(range(1, 9))


def test_connect_success(controller, reader):
    controller.storage.add_frequency_data(1, 0.0, 1.0)
    assert controller.on_connect_clicked("COM3", 115200) is True
    assert reader.connected_to == ("COM3", 115200)
    assert controller.status_text == "Статус: Подключено к COM3"
    assert controller.button_text == BUTTON_DISCONNECT
    assert controller.port_controls_enabled is False
    assert controller.storage.frequency_data(1) == []


def test_connect_failure_raises_and_stays_disconnected(clock):
    controller = MonitorController(DataStorage(clock), FakeReader(fail=True))
    with pytest.raises(SerialPortError):
        controller.on_connect_clicked("COM9", 9600)
    assert controller.is_connected is False
    assert controller.status_text == STATUS_DISCONNECTED


def test_disconnect(controller, reader):
    controller.on_connect_clicked("COM3", 9600)
    controller.on_new_data(1, 2.0)
    assert controller.on_connect_clicked("COM3", 9600) is False
    assert reader.connected_to is None
    assert controller.storage.frequency_data(1) == []
    assert controller.button_text == BUTTON_CONNECT


def test_new_data_in_frequency_mode(controller, clock):
    controller.on_connect_clicked("COM3", 115200)
    controller.update_visible_sensors([True] * 8)
    clock.now = 1.5
    controller.on_new_data(4, 2.0)
    data = controller.storage.frequency_data(4)
    assert data == [(1.5, 2.0), (1.5, 2.0)]
    assert controller.frequency_plotter.series[4] == data


def test_new_data_in_oscilloscope_mode(controller, clock):
    controller.on_connect_clicked("COM3", 115200)
    controller.on_graph_type_changed(GraphType.OSCILLOSCOPE)
    clock.now = 7.0
    controller.on_new_data(2, 1.0)
    points = controller.oscilloscope_plotter.series[2]
    assert len(points) == 4
    assert points[0] == (7.0, 0.0)
    axis = controller.oscilloscope_plotter.axis_x
    assert axis.maximum == 7.0
    assert axis.maximum - axis.minimum == 5.0


def test_poll_processes_readings(controller, reader):
    reader.pending = [Reading(2, 10.0), Reading(5, 0.5)]
    readings = controller.poll()
    assert readings == [Reading(2, 10.0), Reading(5, 0.5)]
    assert [p[1] for p in controller.storage.frequency_data(2)] == [10.0, 10.0]
    assert controller.poll() == []


def test_close_disconnects(controller, reader):
    controller.on_connect_clicked("COM3", 115200)
    controller.close()
    assert reader.connected_to is None
    assert controller.is_connected is False