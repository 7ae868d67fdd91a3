"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.records import WeatherReading


class WeatherReadingPayload(BaseModel):
    """Wire representation of a reading; keys are camelCase on the wire."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    timestamp: datetime
    air_temperature: float = Field(..., alias="airTemperature")
    rainfall: float
    relative_humidity: float = Field(..., alias="relativeHumidity")
    wind_speed: float = Field(..., alias="windSpeed")

    @field_validator("air_temperature", "rainfall", "relative_humidity", "wind_speed")
    @classmethod
    def _require_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("measurement must be finite")
        return value

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_reading(cls, reading: WeatherReading) -> "WeatherReadingPayload":
        return cls(
            timestamp=reading.timestamp,
            air_temperature=reading.air_temperature,
            rainfall=reading.rainfall,
            relative_humidity=reading.relative_humidity,
            wind_speed=reading.wind_speed,
        )

    def to_reading(self) -> WeatherReading:
        return WeatherReading(
            timestamp=self.timestamp,
            air_temperature=self.air_temperature,
            rainfall=self.rainfall,
            relative_humidity=self.relative_humidity,
            wind_speed=self.wind_speed,
        )


class WeatherResponse(BaseModel):
    """Successful ``GET /weather`` body carrying a single reading."""

    success: Literal[True] = True
    data: WeatherReadingPayload


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
