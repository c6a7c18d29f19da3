import pytest

from pfmmonitor.oscilloscope_plot import MAX_POINTS, OscilloscopePlotter
from pfmmonitor.storage import DataStorage


@pytest.fixture
def storage():
    return DataStorage(lambda: 0.0)


@pytest.fixture
def plotter(storage):
    return OscilloscopePlotter(storage)


def test_initial_axes(plotter):
    assert (plotter.axis_x.minimum, plotter.axis_x.maximum) == (0, 5)
    assert (plotter.axis_y.minimum, plotter.axis_y.maximum) == (0, 3.5)
    assert plotter.title == "Осциллографный вид (PFM)"


def test_hidden_sensor_gets_no_pulse(plotter):
    plotter.add_pulse(1, 1.0, 1.0)
    assert plotter.series[1] == []


def test_pulse_shape(plotter):
    plotter.set_visible_sensors({1})
    plotter.add_pulse(1, 2.0, 1.0)
    points = plotter.series[1]
    assert len(points) == 4
    assert points[0] == (2.0, 0.0)
    assert points[1] == (2.0, 3.3)
    assert points[2][1] == 3.3 and points[3][1] == 0.0
    assert points[2][0] - points[1][0] == pytest.approx(0.8)
    assert points[3][0] == points[2][0]


def test_higher_frequency_gives_narrower_pulse(plotter):
    plotter.set_visible_sensors({1, 2})
    plotter.add_pulse(1, 0.0, 1.0)
    plotter.add_pulse(2, 0.0, 10.0)
    assert plotter.series[2][2][0] < plotter.series[1][2][0]


@pytest.mark.parametrize("time, frequency", [(1.0, 0.0), (1.0, -2.0), (-1.0, 1.0)])
def test_invalid_pulses_are_ignored(plotter, time, frequency):
    plotter.set_visible_sensors({1})
    plotter.add_pulse(1, time, frequency)
    assert plotter.series[1] == []


def test_point_count_is_capped(plotter):
    plotter.set_visible_sensors({1})
    for i in range(300):
        plotter.add_pulse(1, float(i), 100.0)
    points = plotter.series[1]
    assert len(points) == MAX_POINTS == 1000
    assert points[-1][0] > 299.0
    assert points[0][1] == 0.0


def test_set_visible_sensors_clears_traces(plotter):
    plotter.set_visible_sensors({1})
    plotter.add_pulse(1, 1.0, 1.0)
    plotter.set_visible_sensors({1, 2})
    assert plotter.series[1] == []


def test_window_without_data(plotter):
    plotter.set_visible_sensors({1})
    plotter.update_plot()
    assert (plotter.axis_x.minimum, plotter.axis_x.maximum) == (0, 5)


def test_window_with_early_data_stays_at_start(plotter, storage):
    storage.add_frequency_data(1, 3.0, 1.0)
    plotter.set_visible_sensors({1})
    assert (plotter.axis_x.minimum, plotter.axis_x.maximum) == (0.0, 5)


def test_window_slides_with_latest_sample(plotter, storage):
    storage.add_frequency_data(1, 4.0, 1.0)
    storage.add_frequency_data(2, 12.0, 1.0)
    plotter.set_visible_sensors({1, 2})
    assert plotter.axis_x.maximum == 12.0
    assert plotter.axis_x.maximum - plotter.axis_x.minimum == pytest.approx(5.0)