"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Measurement(str, Enum):
    """The four measurement kinds carried by every reading."""

    air_temperature = "airTemperature"
    rainfall = "rainfall"
    relative_humidity = "relativeHumidity"
    wind_speed = "windSpeed"

    @property
    def attribute(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class WeatherReading:
    """One timestamped set of environmental measurements."""

    timestamp: datetime
    air_temperature: float
    rainfall: float
    relative_humidity: float
    wind_speed: float

    def value_of(self, measurement: Measurement) -> float:
        return getattr(self, measurement.attribute)
