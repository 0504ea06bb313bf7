"""Per-sensor aggregate of the battery, temperature and light channels."""

from __future__ import annotations

import os

from loguru import logger

from .channel import ChannelReader, ChannelStatus, MetricKind
from .models import SensorSnapshot


class SensorState:
    """Last known values and channel status for one sensor index."""

    def __init__(self, index: int, readers: dict[MetricKind, ChannelReader]) -> None:
        missing = [kind.name for kind in MetricKind if kind not in readers]
        if missing:
            raise ValueError(f"Sensor {index} is missing readers for: {', '.join(missing)}")
        self.index = index
        self._readers = readers
        self.values: dict[MetricKind, str] = {kind: "" for kind in MetricKind}

    @classmethod
    def initialize(cls, index: int, base_dir: str | os.PathLike = "/dev") -> "SensorState":
        """Open every metric channel of the sensor, each independently."""
        readers = {kind: ChannelReader.open(index, kind, base_dir) for kind in MetricKind}
        return cls(index, readers)

    @property
    def source_status(self) -> dict[MetricKind, ChannelStatus]:
        return {kind: reader.status for kind, reader in self._readers.items()}

    @property
    def open_channels(self) -> int:
        return sum(1 for reader in self._readers.values() if reader.status is ChannelStatus.OPEN)

    @property
    def online(self) -> bool:
        # Battery is the liveness proxy; temperature and light do not count
        battery = self._readers[MetricKind.BATTERY]
        return battery.status is ChannelStatus.OPEN and self.values[MetricKind.BATTERY] != ""

    def poll_once(self) -> int:
        """Poll battery, temperature and light once; return how many updated."""
        updated_count = 0
        for kind in MetricKind:
            value, updated = self._readers[kind].poll(self.values[kind])
            if updated:
                self.values[kind] = value
                updated_count += 1
        return updated_count

    def snapshot(self) -> SensorSnapshot:
        return SensorSnapshot(
            index=self.index,
            battery=self.values[MetricKind.BATTERY],
            temperature=self.values[MetricKind.TEMPERATURE],
            light=self.values[MetricKind.LIGHT],
            online=self.online,
        )

    def release(self) -> None:
        """Close the open channels; unavailable ones are skipped."""
        for reader in self._readers.values():
            reader.close()
        logger.trace(f"Sensor {self.index} released")
