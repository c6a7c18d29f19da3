"""Serial-port monitor and plotter for pulse-frequency-modulated sensors."""

__version__ = "0.1.0"