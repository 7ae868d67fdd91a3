"""Dashboard session: owns the history window and rebuilds the view on every change."""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import tzinfo
from enum import Enum
from functools import lru_cache
from threading import Lock
from typing import Callable, List, Optional, Tuple, Union
from uuid import uuid4

from models.records import Measurement, WeatherReading
from services.history import HISTORY_CAPACITY, HistoryBuffer
from services.projection import (
    TIME_LABEL_FORMAT,
    RangeSummary,
    Series,
    axis_labels,
    axis_max,
    project,
    range_summary,
)
from services.widgets import Gauge, WaterTank, build_gauge, build_water_tank

logger = logging.getLogger(__name__)


class DashboardState(str, Enum):
    """Lifecycle of the window; there is no way back to ``empty``."""

    empty = "empty"
    populating = "populating"
    steady = "steady"


@dataclass(frozen=True)
class MetricSpec:
    measurement: Measurement
    title: str
    unit: str
    icon: str
    color: str
    axis_fallback: float
    gradient_from: str
    gradient_to: str
    widget: str
    widget_max: float


METRICS: tuple[MetricSpec, ...] = (
    MetricSpec(
        measurement=Measurement.air_temperature,
        title="Air Temperature",
        unit="°C",
        icon="🌡️",
        color="#ef4444",
        axis_fallback=30,
        gradient_from="#fee2e2",
        gradient_to="#fecaca",
        widget="gauge",
        widget_max=50,
    ),
    MetricSpec(
        measurement=Measurement.rainfall,
        title="Rainfall",
        unit="mm",
        icon="🌧️",
        color="#3b82f6",
        axis_fallback=20,
        gradient_from="#dbeafe",
        gradient_to="#bfdbfe",
        widget="tank",
        widget_max=26,
    ),
    MetricSpec(
        measurement=Measurement.relative_humidity,
        title="Relative Humidity",
        unit="%",
        icon="💧",
        color="#06b6d4",
        axis_fallback=100,
        gradient_from="#cffafe",
        gradient_to="#a5f3fc",
        widget="tank",
        widget_max=100,
    ),
    MetricSpec(
        measurement=Measurement.wind_speed,
        title="Wind Speed",
        unit="m/s",
        icon="💨",
        color="#10b981",
        axis_fallback=15,
        gradient_from="#d1fae5",
        gradient_to="#a7f3d0",
        widget="gauge",
        widget_max=30,
    ),
)


@dataclass(frozen=True)
class MetricPanel:
    spec: MetricSpec
    value: Optional[float]
    series: Series
    axis_max: float
    summary: Union[RangeSummary, str]
    widget: Union[Gauge, WaterTank]

    @property
    def title(self) -> str:
        return self.spec.title

    @property
    def unit(self) -> str:
        return self.spec.unit


@dataclass(frozen=True)
class DashboardView:
    state: DashboardState
    labels: List[str]
    last_update: str
    error: Optional[str]
    current: Optional[WeatherReading]
    panels: List[MetricPanel] = field(default_factory=list)


def _build_widget(spec: MetricSpec, value: Optional[float]) -> Union[Gauge, WaterTank]:
    if spec.widget == "gauge":
        return build_gauge(value, spec.widget_max, spec.unit)
    return build_water_tank(value, spec.widget_max, spec.unit)


class DashboardSession:
    """Single-writer owner of the reading window for one dashboard.

    ``apply`` and ``record_error`` are the only mutations; both recompute the
    view immediately so readers always see the current window.
    """

    def __init__(
        self,
        capacity: int = HISTORY_CAPACITY,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self.history = HistoryBuffer(capacity)
        self._tz = tz
        self.latest: Optional[WeatherReading] = None
        self.last_update = ""
        self.error: Optional[str] = None
        self._view = self._compute_view()

    @property
    def state(self) -> DashboardState:
        size = len(self.history)
        if size == 0:
            return DashboardState.empty
        if size < self.history.capacity:
            return DashboardState.populating
        return DashboardState.steady

    def apply(self, reading: WeatherReading) -> DashboardView:
        self.history.append(reading)
        self.latest = reading
        self.error = None
        self.last_update = reading.timestamp.astimezone(self._tz).strftime(TIME_LABEL_FORMAT)
        self._view = self._compute_view()
        logger.info(
            "Applied weather reading",
            extra={
                "reading_timestamp": reading.timestamp.isoformat(),
                "buffer_size": len(self.history),
                "state": self.state.value,
            },
        )
        return self._view

    def record_error(self, message: str) -> DashboardView:
        self.error = message
        self._view = self._compute_view()
        logger.warning(
            "Weather fetch failed; keeping last window",
            extra={"reason": message, "buffer_size": len(self.history)},
        )
        return self._view

    def view(self) -> DashboardView:
        return self._view

    def _compute_view(self) -> DashboardView:
        snapshot = self.history.snapshot()
        capacity = self.history.capacity
        panels: List[MetricPanel] = []
        for spec in METRICS:
            series = project(snapshot, spec.measurement, length=capacity)
            value = self.latest.value_of(spec.measurement) if self.latest else None
            panels.append(
                MetricPanel(
                    spec=spec,
                    value=value,
                    series=series,
                    axis_max=axis_max(series, spec.axis_fallback),
                    summary=range_summary(series),
                    widget=_build_widget(spec, value),
                )
            )
        return DashboardView(
            state=self.state,
            labels=axis_labels(snapshot, length=capacity, tz=self._tz),
            last_update=self.last_update,
            error=self.error,
            current=self.latest,
            panels=panels,
        )


MAX_SESSIONS = 256


class SessionRegistry:
    """One ``DashboardSession`` per viewer, keyed by an opaque session id.

    Holds at most ``max_sessions`` windows; the least recently seen viewer is
    dropped first. Unknown ids are never adopted, a fresh id is issued instead.
    """

    def __init__(
        self,
        session_factory: Callable[[], DashboardSession] = DashboardSession,
        max_sessions: int = MAX_SESSIONS,
    ) -> None:
        if max_sessions <= 0:
            raise ValueError("max_sessions must be positive")
        self._factory = session_factory
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, DashboardSession] = OrderedDict()
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def get(self, session_id: Optional[str]) -> Optional[DashboardSession]:
        if not session_id:
            return None
        with self._lock:
            return self._sessions.get(session_id)

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, DashboardSession]:
        with self._lock:
            if session_id and session_id in self._sessions:
                self._sessions.move_to_end(session_id)
                return session_id, self._sessions[session_id]

            new_id = uuid4().hex
            session = self._factory()
            self._sessions[new_id] = session
            while len(self._sessions) > self.max_sessions:
                self._sessions.popitem(last=False)
                logger.info("Evicted least recently seen dashboard session")
            return new_id, session


@lru_cache
def build_default_registry() -> SessionRegistry:
    """Process-wide registry backing the web dashboard's per-viewer sessions."""
    return SessionRegistry()
