# pfmmonitor

A desktop monitor for up to eight pulse-frequency-modulated (PFM) sensors that
report over a serial port. Readings are shown either as frequency against time
or as an oscilloscope-style pulse train. The window's labels are in Russian.

## Installation

```
pip install .
```

This installs `pyserial` for the serial port and `matplotlib` for the charts.
The window uses Tkinter, which comes with most Python distributions.

## Running

```
pfmmonitor
```

In the window:

1. Pick a serial port from the list ("Порт"). The ⟳ button reloads the list of
   ports and selects the first one.
2. Set the baud rate ("Скорость"). Values outside 9600–115200 are clamped to
   that range; anything that is not a number falls back to 115200.
3. Choose the graph type ("Тип графика"): "Частота/Время" (frequency over time)
   or "Осциллограф" (oscilloscope).
4. Press "Подключить" to connect; the button then reads "Отключить" and
   disconnects when pressed again. While connected, the port and baud-rate
   fields are disabled and the status line names the port. If the port cannot
   be opened, an error dialog shows the reason.
5. Use the sensor check boxes ("Датчик 1" … "Датчик 8") to show or hide
   sensors.

The port is polled every 20 ms. Connecting or disconnecting clears all stored
readings and chart traces and restarts the session timer.

## Input format

The device sends one reading per line, read-only at 8 data bits, no parity,
one stop bit, no flow control:

```
sensor3:12500
```

The part before the colon is `sensor` followed by a sensor number from 1 to 8.
The part after the colon is a frequency in hertz from 50 to 500000. Accepted
readings are converted to kilohertz. Lines that do not match are ignored.

## Views

- **Frequency/time**: one line per visible sensor. The last 100 readings of
  each sensor are kept. The time axis is in seconds since connecting and covers
  at least 0–10. The frequency axis covers 0.05–500 kHz.
- **Oscilloscope**: every reading of a visible sensor is drawn as a 3.3 V
  rectangular pulse starting at the reading's time, with a width of 80 % of the
  signal period in milliseconds. Each sensor keeps at most 1000 points. The time
  axis ends at the newest stored reading (at least 5) and shows the 5 units
  before it. Changing which sensors are shown clears the pulse traces.

## Using the parts from Python

The pieces work without the window:

```python
from pfmmonitor.serial_reader import LineDecoder, parse_line, readings_from_lines

parse_line("sensor2:1000")           # Reading(sensor_id=2, frequency=1.0)
parse_line("sensor9:1000")           # None: sensor out of range
decoder = LineDecoder()
decoder.feed(b"sensor1:500\nsens")   # readings from complete lines only
readings_from_lines(["sensor4:2000", "junk"])
```

- `pfmmonitor.serial_reader.SerialPortReader` opens a port with `connect()`
  (raising `SerialPortError` on failure), returns decoded readings from
  `poll()`, and closes it with `disconnect()` or when used as a context
  manager. `available_ports()` lists the port names on this machine.
- `pfmmonitor.storage.DataStorage` holds the recent readings of each sensor
  and the session timer.
- `pfmmonitor.frequency_plot.FrequencyPlotter` and
  `pfmmonitor.oscilloscope_plot.OscilloscopePlotter` hold the series and axis
  ranges of the two charts.
- `pfmmonitor.controller.MonitorController` ties the storage, the serial
  reader and the active chart together and has no GUI code in it.
- `pfmmonitor.gui.MainWindow` is the Tk window; `pfmmonitor.gui.main()` starts
  it.

## What it does not do

Readings are kept in memory only, for the current session. Nothing is saved
to disk or exported, and there is no way to reload earlier data.