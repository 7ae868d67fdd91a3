"""Unit tests for the bounded reading window."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from models.records import WeatherReading
from services.history import HISTORY_CAPACITY, HistoryBuffer


def make_reading(air_temperature: float = 23.5, offset_seconds: int = 0) -> WeatherReading:
    """Helper to build deterministic readings."""

    return WeatherReading(
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=offset_seconds),
        air_temperature=air_temperature,
        rainfall=12.5,
        relative_humidity=68.0,
        wind_speed=8.3,
    )


def test_new_buffer_is_empty() -> None:
    buffer = HistoryBuffer()

    assert len(buffer) == 0
    assert buffer.snapshot() == ()
    assert buffer.capacity == HISTORY_CAPACITY == 10


@pytest.mark.parametrize("count", [1, 5, 10, 11, 25])
def test_length_is_bounded_and_newest_is_last(count: int) -> None:
    buffer = HistoryBuffer()
    readings = [make_reading(air_temperature=float(i), offset_seconds=i) for i in range(count)]

    for reading in readings:
        buffer.append(reading)

    snapshot = buffer.snapshot()
    assert len(snapshot) == min(count, HISTORY_CAPACITY)
    assert snapshot[-1] == readings[-1]


def test_overflow_evicts_oldest_in_fifo_order() -> None:
    buffer = HistoryBuffer()
    readings = [make_reading(air_temperature=float(i), offset_seconds=i) for i in range(1, 13)]

    for reading in readings:
        buffer.append(reading)

    assert list(buffer.snapshot()) == readings[-10:]
    assert [r.air_temperature for r in buffer.snapshot()] == [float(i) for i in range(3, 13)]


def test_snapshot_is_a_detached_copy() -> None:
    buffer = HistoryBuffer(capacity=3)
    buffer.append(make_reading(air_temperature=1.0))
    snapshot = buffer.snapshot()

    buffer.append(make_reading(air_temperature=2.0))

    assert len(snapshot) == 1
    assert isinstance(snapshot, tuple)
    assert len(buffer.snapshot()) == 2


def test_non_positive_capacity_is_rejected() -> None:
    with pytest.raises(ValueError):
        HistoryBuffer(capacity=0)
