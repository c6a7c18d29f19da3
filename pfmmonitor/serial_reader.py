"""Reading "sensorN:value" lines from a serial port."""

from __future__ import annotations

import codecs
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import serial
from serial.tools import list_ports

MIN_SENSOR = 1
MAX_SENSOR = 8
MIN_FREQUENCY_HZ = 50.0
MAX_FREQUENCY_HZ = 500000.0
DEFAULT_BAUD_RATE = 115200

_SENSOR_PREFIX = "sensor"
_INT_RE = re.compile(r"\s*[+-]?\d+\s*")


@dataclass(frozen=True)
class Reading:
    """One sample: sensor number and frequency in kHz."""

    sensor_id: int
    frequency: float


class SerialPortError(Exception):
    """The serial port could not be opened."""


def _to_float(text: str) -> float | None:
    if "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_line(line: str) -> Reading | None:
    """Decode one "sensorN:hertz" line; None if it is malformed or out of range."""
    parts = line.strip().split(":")
    if len(parts) != 2:
        return None
    sensor_text, value_text = (part.strip() for part in parts)
    if not sensor_text.startswith(_SENSOR_PREFIX) or len(sensor_text) <= len(_SENSOR_PREFIX):
        return None
    id_text = sensor_text[len(_SENSOR_PREFIX):]
    if not _INT_RE.fullmatch(id_text):
        return None
    sensor_id = int(id_text)
    if not MIN_SENSOR <= sensor_id <= MAX_SENSOR:
        return None
    hertz = _to_float(value_text)
    if hertz is None or not MIN_FREQUENCY_HZ <= hertz <= MAX_FREQUENCY_HZ:
        return None
    khz = hertz / 1000
    if khz <= 0:
        return None
    return Reading(sensor_id, khz)


class LineDecoder:
    """Splits a byte stream into lines and decodes the valid readings."""

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, data: bytes | str) -> list[Reading]:
        """Add received data and return readings from every completed line."""
        self._buffer += data if isinstance(data, str) else self._decoder.decode(data)
        *lines, self._buffer = self._buffer.split("\n")
        return [reading for reading in map(parse_line, lines) if reading is not None]


def available_ports() -> list[str]:
    """Names of the serial ports present on this machine."""
    return [info.device for info in list_ports.comports()]


def _open_serial(port_name: str, baud_rate: int) -> Any:
    return serial.Serial(
        port=port_name,
        baudrate=baud_rate,
        bytesize=serial.EIGHTBITS,
        parity=serial.PARITY_NONE,
        stopbits=serial.STOPBITS_ONE,
        xonxoff=False,
        rtscts=False,
        timeout=0,
    )


class SerialPortReader:
    """Owns the serial port and turns its incoming bytes into readings."""

    def __init__(self, port_factory: Callable[[str, int], Any] | None = None) -> None:
        self._port_factory = port_factory or _open_serial
        self._port: Any = None
        self._decoder = LineDecoder()

    @property
    def is_connected(self) -> bool:
        return self._port is not None and bool(self._port.is_open)

    def connect(self, port_name: str, baud_rate: int = DEFAULT_BAUD_RATE) -> None:
        """Open the port read-only at 8N1; raise SerialPortError on failure."""
        if self.is_connected:
            raise SerialPortError(f"Не удалось открыть порт {port_name}: Port already open")
        try:
            self._port = self._port_factory(port_name, baud_rate)
        except (OSError, ValueError) as exc:
            self._port = None
            raise SerialPortError(f"Не удалось открыть порт {port_name}: {exc}") from exc
        self._decoder = LineDecoder()

    def disconnect(self) -> bool:
        """Close the port; return True if an open port was closed."""
        if not self.is_connected:
            return False
        self._port.close()
        self._port = None
        return True

    def poll(self) -> list[Reading]:
        """Read whatever is waiting on the port and return decoded readings."""
        if not self.is_connected:
            return []
        waiting = self._port.in_waiting
        if not waiting:
            return []
        return self._decoder.feed(self._port.read(waiting))

    def __enter__(self) -> SerialPortReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()


def readings_from_lines(lines: Iterable[str]) -> list[Reading]:
    """Decode a sequence of already split lines."""
    return [reading for reading in map(parse_line, lines) if reading is not None]