"""Synthetic weather reading generation."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable, Optional

from models.records import WeatherReading
from settings import get_settings

logger = logging.getLogger(__name__)

BASE_AIR_TEMPERATURE = 23.5
BASE_RAINFALL = 12.5
BASE_RELATIVE_HUMIDITY = 68.0
BASE_WIND_SPEED = 8.3


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReadingGenerator:
    """Builds one reading per call from fixed base values plus uniform jitter.

    The generator keeps no memory of earlier readings; the random source and
    the clock are injectable so tests can pin both.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._rng = rng or random.Random()
        self._clock = clock

    def generate(self) -> WeatherReading:
        rng = self._rng
        reading = WeatherReading(
            timestamp=self._clock(),
            air_temperature=round(BASE_AIR_TEMPERATURE + (rng.random() - 0.5) * 3, 1),
            rainfall=round(BASE_RAINFALL + rng.random() * 5, 1),
            relative_humidity=round(BASE_RELATIVE_HUMIDITY + (rng.random() - 0.5) * 6, 1),
            wind_speed=round(BASE_WIND_SPEED + rng.random() * 4, 1),
        )
        logger.debug(
            "Generated weather reading",
            extra={"reading_timestamp": reading.timestamp.isoformat()},
        )
        return reading


@lru_cache
def build_default_generator() -> ReadingGenerator:
    """Factory that seeds the generator from settings when a seed is configured."""
    seed = get_settings().generator_seed
    rng = random.Random(seed) if seed is not None else random.Random()
    return ReadingGenerator(rng=rng)
