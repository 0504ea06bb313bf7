"""Rich-based dashboard for displaying the latest sensor readings."""

from __future__ import annotations

import contextlib
import time

from blessed import Terminal
from loguru import logger
from rich.console import Console, Group
from rich.live import Live
from rich.table import Table
from rich.text import Text

from .models import MonitorSnapshot, SensorSnapshot
from .utils import (
    MONITOR_TITLE,
    OFFLINE_MARKER,
    POLLING_DISCLAIMER,
    POLLING_STATUS,
    QUIT_KEYS,
    format_sensor_id,
    format_uptime,
)

HEADER_STYLE = "bold cyan"
SENSOR_ID_STYLE = "yellow"
GOOD_STYLE = "green"
OFFLINE_STYLE = "red"
METRIC_COLUMNS = ("Battery(V)", "Temp(C)", "Light")


class SensorDashboard:
    """Draws sensor snapshots and watches the keyboard for the quit key.

    Use as a context manager: entering switches to the alternate screen and
    puts the terminal in cbreak mode, leaving restores both.
    """

    def __init__(self, console: Console | None = None, term: Terminal | None = None) -> None:
        self.console = console or Console()
        self.term = term
        self.start_time = time.time()
        self.current_snapshot: MonitorSnapshot | None = None
        self._live: Live | None = None
        self._stack: contextlib.ExitStack | None = None

    # --- Terminal lifecycle -----------------------------------------------

    def start(self) -> None:
        """Take over the terminal."""
        if self._stack is not None:
            return
        stack = contextlib.ExitStack()
        try:
            if self.term is None:
                self.term = Terminal()
            stack.enter_context(self.term.cbreak())
            self._live = stack.enter_context(
                Live(self.render(), console=self.console, screen=True, auto_refresh=False)
            )
        except Exception:
            stack.close()
            self._live = None
            raise
        self._stack = stack

    def stop(self) -> None:
        """Restore the terminal. Does nothing if not started."""
        stack, self._stack = self._stack, None
        self._live = None
        if stack is not None:
            stack.close()

    def __enter__(self) -> "SensorDashboard":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.stop()
        return False

    def quit_requested(self) -> bool:
        """Return True if the quit key was pressed. Never blocks."""
        if self.term is None:
            return False
        key = self.term.inkey(timeout=0)
        while key:
            if str(key) in QUIT_KEYS:
                logger.info("Quit key pressed")
                return True
            key = self.term.inkey(timeout=0)
        return False

    def update(self, snapshot: MonitorSnapshot) -> None:
        """Redraw the screen from a new snapshot."""
        self.current_snapshot = snapshot
        if self._live is None:
            return
        try:
            self._live.update(self.render(), refresh=True)
        except Exception as e:
            # A failed frame (e.g. mid-resize) must not stop sampling
            logger.exception(f"Error rendering dashboard: {e}")

    # --- Rendering --------------------------------------------------------

    def generate_header(self) -> Group:
        return Group(
            Text(MONITOR_TITLE, style=HEADER_STYLE),
            Text(POLLING_DISCLAIMER, style="dim"),
            Text(""),
        )

    def generate_row(self, sensor: SensorSnapshot) -> list[Text]:
        row = [Text(format_sensor_id(sensor.index), style=SENSOR_ID_STYLE)]
        if sensor.online:
            row.extend(Text(value, style=GOOD_STYLE) for value in (sensor.battery, sensor.temperature, sensor.light))
        else:
            row.extend(Text(OFFLINE_MARKER, style=OFFLINE_STYLE) for _ in METRIC_COLUMNS)
        return row

    def generate_table(self) -> Table:
        table = Table(box=None, show_header=True, header_style="underline", padding=(0, 1), pad_edge=False)
        table.add_column("ID", width=9, no_wrap=True)
        for title in METRIC_COLUMNS:
            table.add_column(title, min_width=12, no_wrap=True)

        snapshot = self.current_snapshot
        if snapshot is not None:
            for sensor in snapshot.sensors:
                table.add_row(*self.generate_row(sensor))
        return table

    def generate_footer(self) -> Text:
        footer = Text(POLLING_STATUS)
        snapshot = self.current_snapshot
        runtime = format_uptime(time.time() - self.start_time)
        if snapshot is None:
            footer.append(f"  Waiting for first poll  Runtime {runtime}", style="dim")
            return footer
        timestamp = snapshot.generated_at.astimezone().strftime("%H:%M:%S")
        footer.append(
            f"  Tick {snapshot.tick}  Online {snapshot.online_count}/{len(snapshot.sensors)}"
            f"  Last Update {timestamp}  Runtime {runtime}",
            style="dim",
        )
        return footer

    def render(self) -> Group:
        """Render the complete dashboard."""
        return Group(self.generate_header(), self.generate_table(), Text(""), self.generate_footer())
