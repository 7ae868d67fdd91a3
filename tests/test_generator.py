"""Unit tests for the synthetic reading generator."""

from __future__ import annotations

import math
import random
from datetime import datetime, timezone

from services.generator import ReadingGenerator, build_default_generator
from settings import get_settings

FIXED_NOW = datetime(2024, 6, 1, 8, 30, tzinfo=timezone.utc)


class _FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__()
        self._value = value

    def random(self) -> float:
        return self._value


def test_generate_applies_base_values_and_jitter() -> None:
    generator = ReadingGenerator(rng=_FixedRandom(0.5), clock=lambda: FIXED_NOW)

    reading = generator.generate()

    assert reading.timestamp == FIXED_NOW
    assert reading.air_temperature == 23.5
    assert reading.rainfall == 15.0
    assert reading.relative_humidity == 68.0
    assert reading.wind_speed == 10.3


def test_generate_stays_within_jitter_bounds() -> None:
    generator = ReadingGenerator(rng=random.Random(1234))

    for _ in range(200):
        reading = generator.generate()
        assert 22.0 <= reading.air_temperature <= 25.0
        assert 12.5 <= reading.rainfall <= 17.5
        assert 65.0 <= reading.relative_humidity <= 71.0
        assert 8.3 <= reading.wind_speed <= 12.3
        for value in (
            reading.air_temperature,
            reading.rainfall,
            reading.relative_humidity,
            reading.wind_speed,
        ):
            assert math.isfinite(value)
            assert round(value, 1) == value


def test_generate_uses_utc_clock_by_default() -> None:
    reading = ReadingGenerator().generate()

    assert reading.timestamp.tzinfo is not None
    assert reading.timestamp.utcoffset().total_seconds() == 0


def test_seeded_default_generator_is_reproducible(monkeypatch) -> None:
    monkeypatch.setenv("WEATHER_GENERATOR_SEED", "42")
    get_settings.cache_clear()
    build_default_generator.cache_clear()
    try:
        first = build_default_generator().generate()
        build_default_generator.cache_clear()
        second = build_default_generator().generate()
    finally:
        build_default_generator.cache_clear()
        get_settings.cache_clear()

    assert first.air_temperature == second.air_temperature
    assert first.rainfall == second.rainfall
    assert first.relative_humidity == second.relative_humidity
    assert first.wind_speed == second.wind_speed
