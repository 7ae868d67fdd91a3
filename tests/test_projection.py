"""Unit tests for series projection helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from models.records import Measurement, WeatherReading
from services.projection import (
    COLLECTING,
    RangeSummary,
    axis_labels,
    axis_max,
    project,
    range_summary,
)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_reading(
    air_temperature: float = 23.5,
    rainfall: float = 12.5,
    relative_humidity: float = 68.0,
    wind_speed: float = 8.3,
    offset_seconds: int = 0,
) -> WeatherReading:
    """Helper to build deterministic readings."""

    return WeatherReading(
        timestamp=BASE_TIME + timedelta(seconds=offset_seconds),
        air_temperature=air_temperature,
        rainfall=rainfall,
        relative_humidity=relative_humidity,
        wind_speed=wind_speed,
    )


def test_two_readings_are_right_padded_with_none() -> None:
    snapshot = (make_reading(air_temperature=22.0), make_reading(air_temperature=23.5))

    series = project(snapshot, Measurement.air_temperature)

    assert series == [22.0, 23.5] + [None] * 8
    assert axis_max(series, fallback=30) == 24
    assert range_summary(series) == RangeSummary(min=22.0, max=23.5)


def test_full_window_is_projected_without_padding() -> None:
    snapshot = tuple(make_reading(rainfall=float(i)) for i in range(3, 13))

    series = project(snapshot, Measurement.rainfall)

    assert series == [float(i) for i in range(3, 13)]


def test_projection_selects_each_measurement() -> None:
    reading = make_reading(
        air_temperature=1.0, rainfall=2.0, relative_humidity=3.0, wind_speed=4.0
    )

    values = [project((reading,), m)[0] for m in Measurement]

    assert values == [1.0, 2.0, 3.0, 4.0]


def test_projection_is_repeatable() -> None:
    snapshot = (make_reading(wind_speed=9.1), make_reading(wind_speed=10.4))

    first = project(snapshot, Measurement.wind_speed)
    second = project(snapshot, Measurement.wind_speed)

    assert first == second
    assert first is not second


def test_zero_is_a_value_not_a_gap() -> None:
    series = project((make_reading(rainfall=0.0),), Measurement.rainfall)

    assert series[0] == 0.0
    assert series[0] is not None
    assert axis_max(series, fallback=20) == 0
    assert range_summary(series) == RangeSummary(min=0.0, max=0.0)


def test_axis_max_uses_fallback_only_without_values() -> None:
    assert axis_max([None] * 10, fallback=15) == 15
    assert axis_max([None, 7.01, None], fallback=15) == 8
    assert axis_max([12.0], fallback=15) == 12


def test_range_summary_rounds_to_one_decimal() -> None:
    summary = range_summary([10.04, 10.06, None])

    assert summary == RangeSummary(min=10.0, max=10.1)


def test_empty_window_has_no_labels_and_is_collecting() -> None:
    assert axis_labels(()) == []
    for measurement in Measurement:
        assert range_summary(project((), measurement)) == COLLECTING


def test_axis_labels_step_one_second_from_oldest_reading() -> None:
    snapshot = (
        make_reading(offset_seconds=0),
        make_reading(offset_seconds=60),
        make_reading(offset_seconds=125),
    )

    labels = axis_labels(snapshot, tz=timezone.utc)

    assert len(labels) == 10
    assert labels[0] == "12:00:00 PM"
    assert labels[1] == "12:00:01 PM"
    assert labels[-1] == "12:00:09 PM"
