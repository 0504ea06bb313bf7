import os

import pytest

from lunix_monitor.sensors import ChannelReader, MetricKind


@pytest.fixture
def pipe_reader():
    """A non-blocking reader on the read end of a pipe, plus the write end."""
    read_fd, write_fd = os.pipe()
    os.set_blocking(read_fd, False)
    reader = ChannelReader(MetricKind.BATTERY, fd=read_fd)
    yield reader, write_fd
    reader.close()
    os.close(write_fd)


def write_device(device_dir, sensor_index, kind, payload):
    """Create a device node stand-in holding ``payload``."""
    path = device_dir / f"lunix{sensor_index}-{kind.value}"
    path.write_bytes(payload.encode() if isinstance(payload, str) else payload)
    return path


class FakePresenter:
    """Presenter that quits after a fixed number of quit checks."""

    def __init__(self, quit_after: int = 0):
        self.quit_after = quit_after
        self.quit_checks = 0
        self.snapshots = []

    def quit_requested(self) -> bool:
        self.quit_checks += 1
        return self.quit_checks > self.quit_after

    def update(self, snapshot) -> None:
        self.snapshots.append(snapshot)
