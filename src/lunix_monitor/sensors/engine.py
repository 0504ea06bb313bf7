"""
Sampling engine for the sensor fleet.

The engine owns one ``SensorState`` per sensor index and drives a full poll
pass across all of them on each tick. Every read is non-blocking, so a pass is
a bounded ``sensor_count * 3`` system calls and can run on a fixed cadence
without stalling the dashboard. Absent and silent sensors are normal states,
never errors.
"""

from __future__ import annotations

from loguru import logger

from ..settings import MonitorConfig
from .channel import MetricKind
from .models import SensorSnapshot
from .state import SensorState


class SamplingEngine:
    """Owns the sensor collection and runs one poll pass per tick."""

    def __init__(self, config: MonitorConfig | None = None) -> None:
        self.config = config or MonitorConfig()
        self.sensors: list[SensorState] = []
        self.poll_passes = 0
        self._opened = False
        self._released = False

    def open(self) -> None:
        """Attempt to open every channel of every sensor exactly once."""
        if self._opened:
            return
        self.sensors = [
            SensorState.initialize(index, self.config.device_dir) for index in range(self.config.sensor_count)
        ]
        self._opened = True
        open_channels = sum(sensor.open_channels for sensor in self.sensors)
        logger.info(
            f"Sampling engine ready: {open_channels}/{len(self.sensors) * len(MetricKind)} channels open "
            f"under {self.config.device_dir}"
        )

    def poll_all(self) -> None:
        """Poll every sensor in ascending index order."""
        updated = 0
        for sensor in self.sensors:
            updated += sensor.poll_once()
        self.poll_passes += 1
        if updated:
            logger.trace(f"Poll pass #{self.poll_passes}: {updated} channel(s) updated")

    def snapshot_all(self) -> tuple[SensorSnapshot, ...]:
        """Index-ordered view of every sensor as of the last poll pass."""
        return tuple(sensor.snapshot() for sensor in self.sensors)

    def release(self) -> None:
        """Close all channels. Does nothing before open() or after the first call."""
        if not self._opened or self._released:
            return
        self._released = True
        for sensor in self.sensors:
            sensor.release()
        logger.info(f"Sampling engine released after {self.poll_passes} poll pass(es)")

    def __len__(self) -> int:
        return len(self.sensors)

    def __enter__(self) -> "SamplingEngine":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False
