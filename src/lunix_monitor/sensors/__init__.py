"""Channel readers, per-sensor state and the sampling engine."""

from .channel import BUFFER_SIZE, ChannelReader, ChannelStatus, MetricKind, channel_path
from .engine import SamplingEngine
from .models import SensorSnapshot
from .state import SensorState

__all__ = [
    "BUFFER_SIZE",
    "ChannelReader",
    "ChannelStatus",
    "MetricKind",
    "SamplingEngine",
    "SensorSnapshot",
    "SensorState",
    "channel_path",
]
