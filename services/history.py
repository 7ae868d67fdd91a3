"""Fixed-capacity window of the most recent readings."""

from __future__ import annotations

from collections import deque
from typing import Deque, Tuple

from models.records import WeatherReading

HISTORY_CAPACITY = 10


class HistoryBuffer:
    """Insertion-ordered window that silently evicts its oldest reading on overflow."""

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._readings: Deque[WeatherReading] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._readings)

    def append(self, reading: WeatherReading) -> None:
        # deque(maxlen=...) drops from the left once full
        self._readings.append(reading)

    def snapshot(self) -> Tuple[WeatherReading, ...]:
        """Return the window oldest-first as an immutable copy."""
        return tuple(self._readings)
