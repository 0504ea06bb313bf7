"""
Non-blocking readers for individual Lunix sensor channels.

Each sensor exposes one device node per metric (``/dev/lunix3-temp`` and so
on). A channel is opened once at startup; if that fails the reader stays
unavailable for the rest of the process and every poll is a no-op. An open
channel is polled with a single bounded non-blocking read per tick, and any
bytes that arrive become the new value for that metric.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from loguru import logger

BUFFER_SIZE = 32
MAX_VALUE_BYTES = BUFFER_SIZE - 1
LINE_TERMINATORS = ("\n", "\r")


class MetricKind(Enum):
    """Metrics exposed per sensor; the value is the device node suffix."""

    BATTERY = "batt"
    TEMPERATURE = "temp"
    LIGHT = "light"


class ChannelStatus(Enum):
    UNAVAILABLE = "unavailable"
    OPEN = "open"


def channel_path(base_dir: str | os.PathLike, sensor_index: int, kind: MetricKind) -> Path:
    """Build the device node path for one (sensor, metric) channel."""
    return Path(base_dir) / f"lunix{sensor_index}-{kind.value}"


def normalize_payload(raw: bytes) -> str:
    """Turn a raw read into a single-line display value.

    The payload is capped at ``MAX_VALUE_BYTES`` and cut at the first line
    terminator. Bytes that do not decode (including a multi-byte character
    split by the cap) are dropped.
    """
    text = raw[:MAX_VALUE_BYTES].decode("utf-8", errors="ignore")
    for terminator in LINE_TERMINATORS:
        text = text.split(terminator, 1)[0]
    return text


class ChannelReader:
    """Owns the descriptor of one channel and polls it without blocking."""

    def __init__(self, kind: MetricKind, fd: int | None = None, path: Path | None = None) -> None:
        self.kind = kind
        self.path = path
        self._fd = fd
        # Fixed at construction, closing the descriptor does not change it
        self._status = ChannelStatus.UNAVAILABLE if fd is None else ChannelStatus.OPEN

    @classmethod
    def open(
        cls, sensor_index: int, kind: MetricKind, base_dir: str | os.PathLike = "/dev"
    ) -> "ChannelReader":
        """Attempt to open a channel; failure leaves the reader unavailable."""
        path = channel_path(base_dir, sensor_index, kind)
        try:
            fd = os.open(path, os.O_RDONLY | os.O_NONBLOCK)
        except OSError as e:
            logger.debug(f"Channel {path} unavailable: {e.strerror or e}")
            return cls(kind, fd=None, path=path)
        logger.debug(f"Channel {path} opened (fd={fd})")
        return cls(kind, fd=fd, path=path)

    @property
    def status(self) -> ChannelStatus:
        return self._status

    def poll(self, previous: str) -> tuple[str, bool]:
        """Try one non-blocking read.

        Returns ``(value, updated)``. ``updated`` only means bytes were read
        this call; the value may equal ``previous``.
        """
        if self._fd is None:
            return previous, False
        try:
            raw = os.read(self._fd, MAX_VALUE_BYTES)
        except BlockingIOError:
            return previous, False
        except OSError as e:
            logger.trace(f"Read from {self.path or self.kind.value} failed: {e}")
            return previous, False
        if not raw:
            return previous, False
        return normalize_payload(raw), True

    def close(self) -> None:
        """Release the descriptor of an open channel."""
        if self._fd is None:
            return
        fd, self._fd = self._fd, None
        try:
            os.close(fd)
        except OSError as e:
            logger.warning(f"Failed to close channel {self.path or self.kind.value} (fd={fd}): {e}")

    def __repr__(self) -> str:
        return f"ChannelReader(kind={self.kind.name}, status={self.status.name}, path={self.path})"
