"""Data models for the dashboard."""

from dataclasses import dataclass
from datetime import datetime

from ..sensors.models import SensorSnapshot

__all__ = ["MonitorSnapshot", "SensorSnapshot"]


@dataclass(frozen=True, slots=True)
class MonitorSnapshot:
    """Everything the dashboard draws for one tick."""

    generated_at: datetime
    tick: int
    sensors: tuple[SensorSnapshot, ...] = ()

    @property
    def online_count(self) -> int:
        return sum(1 for sensor in self.sensors if sensor.online)
