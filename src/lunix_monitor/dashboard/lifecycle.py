"""Lifecycle management for the dashboard."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Protocol

from loguru import logger

from .models import MonitorSnapshot

if TYPE_CHECKING:  # pragma: no cover - type checking helper
    from ..sensors.engine import SamplingEngine


class Presenter(Protocol):
    def quit_requested(self) -> bool: ...

    def update(self, snapshot: MonitorSnapshot) -> None: ...


class SensorMonitor:
    """Driver loop that ticks the sampling engine and feeds the presenter.

    One tick is: check for quit, poll every channel, snapshot, draw. Ticks run
    back to back in a single coroutine with ``refresh_interval`` seconds of
    sleep in between, so a draw never sees a half-finished poll pass.
    """

    def __init__(self, *, engine: "SamplingEngine", presenter: Presenter, refresh_interval: float = 0.1) -> None:
        if refresh_interval < 0:
            raise ValueError("refresh_interval must be non-negative")
        self._engine = engine
        self._presenter = presenter
        self._refresh_interval = refresh_interval
        self.ticks = 0

    def tick(self) -> MonitorSnapshot:
        """Run one poll pass and publish the resulting snapshot."""
        self._engine.poll_all()
        self.ticks += 1
        snapshot = self._build_snapshot()
        self._presenter.update(snapshot)
        return snapshot

    async def run(self) -> int:
        """Tick until the presenter reports a quit; always releases the engine."""
        logger.info(f"Sensor monitor started ({len(self._engine)} sensors, every {self._refresh_interval:.3f}s)")
        try:
            while not self._presenter.quit_requested():
                self.tick()
                await asyncio.sleep(self._refresh_interval)
        except asyncio.CancelledError:
            logger.info("Sensor monitor cancelled")
            raise
        finally:
            self._engine.release()
        logger.info(f"Sensor monitor stopped after {self.ticks} tick(s)")
        return 0

    def _build_snapshot(self) -> MonitorSnapshot:
        return MonitorSnapshot(
            generated_at=datetime.now(tz=timezone.utc),
            tick=self.ticks,
            sensors=self._engine.snapshot_all(),
        )
