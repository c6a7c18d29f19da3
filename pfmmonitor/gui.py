"""Tk main window that shows the live chart and the connection controls."""

from __future__ import annotations

import argparse
import tkinter as tk
from tkinter import messagebox, ttk

from matplotlib.axes import Axes
from matplotlib.figure import Figure

from pfmmonitor.controller import (
    DEFAULT_BAUD_RATE,
    MAX_BAUD_RATE,
    MIN_BAUD_RATE,
    GraphType,
    MonitorController,
)
from pfmmonitor.frequency_plot import SENSOR_IDS, FrequencyPlotter, sensor_name
from pfmmonitor.oscilloscope_plot import OscilloscopePlotter
from pfmmonitor.serial_reader import SerialPortError, available_ports

POLL_INTERVAL_MS = 20


def sensor_grid_position(sensor_id: int) -> tuple[int, int]:
    """Row and column of a sensor's check box in the two-column grid."""
    return (sensor_id - 1) // 2, (sensor_id - 1) % 2


def draw_chart(axes: Axes, plotter: FrequencyPlotter | OscilloscopePlotter) -> None:
    """Render the visible series and axis ranges of a chart model."""
    axes.clear()
    axes.set_title(plotter.title)
    axes.set_xlabel(plotter.axis_x.title)
    axes.set_ylabel(plotter.axis_y.title)
    for sensor_id in sorted(plotter.visible_sensors):
        if sensor_id not in plotter.series:
            continue
        points = plotter.series[sensor_id]
        xs = [x for x, _ in points]
        ys = [y for _, y in points]
        axes.plot(xs, ys, label=plotter.series_names[sensor_id], color=f"C{sensor_id - 1}")
    axes.set_xlim(plotter.axis_x.minimum, plotter.axis_x.maximum)
    axes.set_ylim(plotter.axis_y.minimum, plotter.axis_y.maximum)
    if axes.lines:
        axes.legend(loc="upper right")


class MainWindow:
    """Connection panel, sensor check boxes and the chart, bound to a controller."""

    def __init__(self, root: tk.Misc, controller: MonitorController) -> None:
        from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

        self.root = root
        self.controller = controller
        root.title("PFM")
        root.geometry("1200x700")

        main = ttk.Frame(root, padding=15)
        main.pack(fill=tk.BOTH, expand=True)
        top = ttk.Frame(main)
        top.pack(fill=tk.X, anchor=tk.N)

        control = ttk.LabelFrame(top, text="Настройки подключения", padding=12)
        control.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(0, 15))

        ttk.Button(control, text="⟳", width=3, command=self.refresh_port_list).grid(
            row=0, column=0, sticky=tk.W
        )
        ttk.Label(control, text="Порт:").grid(row=0, column=1, sticky=tk.E, padx=4, pady=5)
        self._port_var = tk.StringVar()
        self._port_combo = ttk.Combobox(
            control, textvariable=self._port_var, width=14, state="readonly"
        )
        self._port_combo.grid(row=0, column=2, sticky=tk.W)

        ttk.Label(control, text="Скорость:").grid(row=1, column=1, sticky=tk.E, padx=4, pady=5)
        self._baud_var = tk.StringVar(value=str(DEFAULT_BAUD_RATE))
        self._baud_spin = ttk.Spinbox(
            control,
            from_=MIN_BAUD_RATE,
            to=MAX_BAUD_RATE,
            textvariable=self._baud_var,
            width=14,
        )
        self._baud_spin.grid(row=1, column=2, sticky=tk.W)

        ttk.Label(control, text="Тип графика:").grid(
            row=2, column=1, sticky=tk.E, padx=4, pady=5
        )
        self._graph_combo = ttk.Combobox(
            control, values=[g.label for g in GraphType], width=18, state="readonly"
        )
        self._graph_combo.current(int(controller.graph_type))
        self._graph_combo.bind("<<ComboboxSelected>>", self._on_graph_selected)
        self._graph_combo.grid(row=2, column=2, sticky=tk.W)

        button_box = ttk.Frame(control)
        button_box.grid(row=0, column=3, rowspan=3, sticky=tk.NW, padx=(12, 0))
        self._connect_button = ttk.Button(button_box, command=self._on_connect)
        self._connect_button.pack(anchor=tk.W)
        self._status_label = tk.Label(button_box, font=("TkDefaultFont", 9, "italic"))
        self._status_label.pack(anchor=tk.W, pady=(8, 0))

        sensors = ttk.LabelFrame(top, text="Датчики", padding=12)
        sensors.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(0, 15))
        self._sensor_vars: list[tk.BooleanVar] = []
        for sensor_id, flag in zip(SENSOR_IDS, controller.checked):
            var = tk.BooleanVar(value=flag)
            row, column = sensor_grid_position(sensor_id)
            ttk.Checkbutton(
                sensors, text=sensor_name(sensor_id), variable=var, command=self._on_sensor_toggled
            ).grid(row=row, column=column, sticky=tk.W, padx=6, pady=3)
            self._sensor_vars.append(var)

        tk.Label(
            top,
            text="Итэлма",
            font=("TkDefaultFont", 18, "bold"),
            fg="#0055A0",
            bg="#f8f8f8",
            relief=tk.SOLID,
            borderwidth=1,
            width=8,
            height=2,
        ).pack(side=tk.LEFT, anchor=tk.N)

        self.figure = Figure(figsize=(10, 5))
        self.axes = self.figure.add_subplot()
        self.canvas = FigureCanvasTkAgg(self.figure, master=main)
        self.canvas.get_tk_widget().pack(fill=tk.BOTH, expand=True, pady=(12, 0))

        self.refresh_port_list()
        self._update_connection_status()
        self.redraw()
        root.protocol("WM_DELETE_WINDOW", self._on_close)
        self._poll_job = root.after(POLL_INTERVAL_MS, self._poll)

    def refresh_port_list(self) -> None:
        """Re-read the serial ports and select the first one."""
        ports = available_ports()
        self._port_combo["values"] = ports
        self._port_var.set(ports[0] if ports else "")

    def redraw(self) -> None:
        draw_chart(self.axes, self.controller.active_plotter)
        self.canvas.draw_idle()

    def _baud_rate(self) -> int:
        try:
            value = int(self._baud_var.get())
        except ValueError:
            value = DEFAULT_BAUD_RATE
        value = min(max(value, MIN_BAUD_RATE), MAX_BAUD_RATE)
        self._baud_var.set(str(value))
        return value

    def _on_connect(self) -> None:
        try:
            self.controller.on_connect_clicked(self._port_var.get(), self._baud_rate())
        except SerialPortError as exc:
            messagebox.showerror("Ошибка", str(exc), parent=self.root)
        self._update_connection_status()
        self.redraw()

    def _on_graph_selected(self, _event: object = None) -> None:
        self.controller.on_graph_type_changed(self._graph_combo.current())
        self.redraw()

    def _on_sensor_toggled(self) -> None:
        self.controller.update_visible_sensors(var.get() for var in self._sensor_vars)
        self.redraw()

    def _update_connection_status(self) -> None:
        controller = self.controller
        self._status_label.configure(
            text=controller.status_text,
            fg="#2A9D34" if controller.is_connected else "#666666",
        )
        self._connect_button.configure(text=controller.button_text)
        state = "readonly" if controller.port_controls_enabled else "disabled"
        self._port_combo.configure(state=state)
        self._baud_spin.configure(state="normal" if controller.port_controls_enabled else "disabled")

    def _poll(self) -> None:
        try:
            if self.controller.poll():
                self.redraw()
        except OSError as exc:
            messagebox.showerror("Ошибка", str(exc), parent=self.root)
        self._poll_job = self.root.after(POLL_INTERVAL_MS, self._poll)

    def _on_close(self) -> None:
        self.root.after_cancel(self._poll_job)
        self.controller.close()
        self.root.destroy()


def main(argv: list[str] | None = None) -> int:
    """Open the monitor window and run until it is closed."""
    argparse.ArgumentParser(
        prog="pfmmonitor", description="Live monitor of PFM sensor frequencies."
    ).parse_args(argv)
    root = tk.Tk()
    MainWindow(root, MonitorController())
    root.mainloop()
    return 0