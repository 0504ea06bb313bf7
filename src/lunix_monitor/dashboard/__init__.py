"""
Rich-based dashboard for the Lunix sensor monitor.

The dashboard renders snapshots produced by the sampling engine. Snapshot
generation is decoupled from drawing so the engine can be driven and tested
without a terminal.
"""

from .dashboard import SensorDashboard
from .lifecycle import Presenter, SensorMonitor
from .models import MonitorSnapshot, SensorSnapshot

__all__ = [
    "MonitorSnapshot",
    "Presenter",
    "SensorDashboard",
    "SensorMonitor",
    "SensorSnapshot",
]
