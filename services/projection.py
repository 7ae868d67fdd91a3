"""Chart series derived from a history snapshot.

Every function here is pure: the same snapshot always yields the same output.
``None`` marks an unfilled slot in a padded series and is never confused with
a zero measurement.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta, tzinfo
from typing import List, Optional, Sequence, Union

from models.records import Measurement, WeatherReading
from services.history import HISTORY_CAPACITY

Series = List[Optional[float]]

COLLECTING = "collecting"
TIME_LABEL_FORMAT = "%I:%M:%S %p"


@dataclass(frozen=True)
class RangeSummary:
    min: float
    max: float


def project(
    snapshot: Sequence[WeatherReading],
    measurement: Measurement,
    length: int = HISTORY_CAPACITY,
) -> Series:
    """Extract ``measurement`` in window order and right-pad with ``None``."""
    series: Series = [reading.value_of(measurement) for reading in snapshot]
    series.extend([None] * (length - len(series)))
    return series


def numeric_values(series: Sequence[Optional[float]]) -> List[float]:
    return [value for value in series if value is not None]


def axis_max(series: Sequence[Optional[float]], fallback: float) -> float:
    values = numeric_values(series)
    if not values:
        return fallback
    return math.ceil(max(values))


def axis_labels(
    snapshot: Sequence[WeatherReading],
    length: int = HISTORY_CAPACITY,
    tz: Optional[tzinfo] = None,
    fmt: str = TIME_LABEL_FORMAT,
) -> List[str]:
    """Evenly spaced one-second labels anchored on the oldest reading.

    Later readings' own timestamps are ignored; the axis is a fixed-cadence
    display convention. ``tz`` defaults to the local timezone.
    """
    if not snapshot:
        return []
    anchor = snapshot[0].timestamp.astimezone(tz)
    return [(anchor + timedelta(seconds=offset)).strftime(fmt) for offset in range(length)]


def range_summary(series: Sequence[Optional[float]]) -> Union[RangeSummary, str]:
    """Return rounded min/max of present values, or ``COLLECTING`` when there are none."""
    values = numeric_values(series)
    if not values:
        return COLLECTING
    return RangeSummary(min=round(min(values), 1), max=round(max(values), 1))
