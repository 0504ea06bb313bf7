import os

import pytest

from lunix_monitor.dashboard.models import SensorSnapshot
from lunix_monitor.sensors import ChannelReader, ChannelStatus, MetricKind, SensorState

from conftest import write_device


def _sensor_with_pipes(index=0):
    """Sensor whose three channels are pipes; returns (sensor, write fds)."""
    readers = {}
    writers = {}
    for kind in MetricKind:
        read_fd, write_fd = os.pipe()
        os.set_blocking(read_fd, False)
        readers[kind] = ChannelReader(kind, fd=read_fd)
        writers[kind] = write_fd
    return SensorState(index, readers), writers


def _close_writers(writers):
    for fd in writers.values():
        os.close(fd)


def test_initialize_isolates_channel_failures(tmp_path):
    write_device(tmp_path, 4, MetricKind.BATTERY, "3.9\n")
    write_device(tmp_path, 4, MetricKind.TEMPERATURE, "21.0\n")
    sensor = SensorState.initialize(4, tmp_path)
    try:
        assert sensor.source_status == {
            MetricKind.BATTERY: ChannelStatus.OPEN,
            MetricKind.TEMPERATURE: ChannelStatus.OPEN,
            MetricKind.LIGHT: ChannelStatus.UNAVAILABLE,
        }
        sensor.poll_once()
        assert sensor.snapshot() == SensorSnapshot(index=4, battery="3.9", temperature="21.0", light="", online=True)
    finally:
        sensor.release()


def test_unavailable_sensor_stays_offline(tmp_path):
    sensor = SensorState.initialize(7, tmp_path)
    for _ in range(5):
        assert sensor.poll_once() == 0
        assert sensor.snapshot() == SensorSnapshot(index=7)
    sensor.release()


def test_value_persists_when_no_new_data():
    sensor, writers = _sensor_with_pipes()
    try:
        os.write(writers[MetricKind.BATTERY], b"4.0\n")
        assert sensor.poll_once() == 1
        before = sensor.snapshot()
        for _ in range(3):
            assert sensor.poll_once() == 0
            assert sensor.snapshot() == before
        assert before.battery == "4.0"
        assert before.online
    finally:
        sensor.release()
        _close_writers(writers)


def test_poll_once_updates_each_metric():
    sensor, writers = _sensor_with_pipes(index=2)
    try:
        os.write(writers[MetricKind.BATTERY], b"3.6\n")
        os.write(writers[MetricKind.TEMPERATURE], b"19.5\n")
        os.write(writers[MetricKind.LIGHT], b"120\n")
        assert sensor.poll_once() == 3
        assert sensor.values == {
            MetricKind.BATTERY: "3.6",
            MetricKind.TEMPERATURE: "19.5",
            MetricKind.LIGHT: "120",
        }
        os.write(writers[MetricKind.LIGHT], b"130\n")
        assert sensor.poll_once() == 1
        assert sensor.snapshot().light == "130"
        assert sensor.snapshot().battery == "3.6"
    finally:
        sensor.release()
        _close_writers(writers)


@pytest.mark.parametrize(
    "battery_open, battery_value, expected",
    [
        (True, "4.1", True),
        (True, "", False),
        (False, "4.1", False),
        (False, "", False),
    ],
)
def test_online_requires_open_battery_with_value(battery_open, battery_value, expected):
    readers = {kind: ChannelReader(kind) for kind in MetricKind}
    fds = []
    if battery_open:
        read_fd, write_fd = os.pipe()
        fds.append(write_fd)
        readers[MetricKind.BATTERY] = ChannelReader(MetricKind.BATTERY, fd=read_fd)
    sensor = SensorState(0, readers)
    sensor.values[MetricKind.BATTERY] = battery_value
    try:
        assert sensor.online is expected
        assert sensor.snapshot().online is expected
    finally:
        sensor.release()
        for fd in fds:
            os.close(fd)


def test_temperature_and_light_do_not_make_sensor_online():
    sensor, writers = _sensor_with_pipes()
    try:
        os.write(writers[MetricKind.TEMPERATURE], b"25.0\n")
        os.write(writers[MetricKind.LIGHT], b"400\n")
        sensor.poll_once()
        assert not sensor.online
    finally:
        sensor.release()
        _close_writers(writers)


def test_missing_reader_is_rejected():
    with pytest.raises(ValueError):
        SensorState(0, {MetricKind.BATTERY: ChannelReader(MetricKind.BATTERY)})
