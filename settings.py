from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_LOG_LEVEL_ENV = "LOG_LEVEL"
_GENERATOR_SEED_ENV = "WEATHER_GENERATOR_SEED"
_POLL_INTERVAL_ENV = "DASHBOARD_POLL_INTERVAL"

DEFAULT_POLL_INTERVAL = 60.0


@dataclass(frozen=True)
class Settings:
    log_level: str
    generator_seed: Optional[int]
    poll_interval: float


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


def _read_seed() -> Optional[int]:
    value = os.getenv(_GENERATOR_SEED_ENV)
    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        return None


def _read_poll_interval(default: float) -> float:
    value = os.getenv(_POLL_INTERVAL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@lru_cache
def get_settings() -> Settings:
    return Settings(
        log_level=_read_log_level("INFO"),
        generator_seed=_read_seed(),
        poll_interval=_read_poll_interval(DEFAULT_POLL_INTERVAL),
    )
