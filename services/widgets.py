"""Geometry for the dashboard widgets: gauge, water tank and line chart."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

GAUGE_SIZE = 200
GAUGE_START_DEGREES = -110.0
GAUGE_END_DEGREES = 110.0
GAUGE_SCALE_MAX = 110.0
GAUGE_SEGMENTS = 100
GAUGE_OUTER_RADIUS = 90.0
GAUGE_INNER_RADIUS = 72.0

_GRADIENT_STOPS = (
    (0.33, "#4ade80", "#fbbf24"),
    (0.66, "#fbbf24", "#fb923c"),
    (1.0, "#fb923c", "#ef4444"),
)

Point = Tuple[float, float]


def format_caption(value: Optional[float], max_value: float, unit: str) -> str:
    return f"{value} {unit} / {max_value} {unit}"


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)


def interpolate_color(start: str, end: str, t: float) -> str:
    r1, g1, b1 = _hex_to_rgb(start)
    r2, g2, b2 = _hex_to_rgb(end)
    r = round(r1 + (r2 - r1) * t)
    g = round(g1 + (g2 - g1) * t)
    b = round(b1 + (b2 - b1) * t)
    return f"rgb({r}, {g}, {b})"


def gradient_color(position: float) -> str:
    """Color along the green-yellow-orange-red ramp for ``position`` in [0, 1]."""
    lower = 0.0
    for upper, start, end in _GRADIENT_STOPS[:-1]:
        if position < upper:
            return interpolate_color(start, end, (position - lower) / (upper - lower))
        lower = upper
    upper, start, end = _GRADIENT_STOPS[-1]
    return interpolate_color(start, end, (position - lower) / (upper - lower))


def _polar(cx: float, cy: float, radius: float, angle: float) -> Point:
    # angles are measured clockwise from 12 o'clock
    return cx + radius * math.sin(angle), cy - radius * math.cos(angle)


@dataclass(frozen=True)
class ArcSegment:
    path: str
    color: str


@dataclass(frozen=True)
class Gauge:
    kind = "gauge"

    value: Optional[float]
    max: float
    unit: str
    value_angle: float
    segments: List[ArcSegment] = field(default_factory=list)
    pointer: Point = (0.0, 0.0)
    size: int = GAUGE_SIZE

    @property
    def center(self) -> Point:
        return self.size / 2, self.size / 2

    @property
    def caption(self) -> str:
        return format_caption(self.value, self.max, self.unit)


def build_gauge(
    value: Optional[float],
    max_value: float,
    unit: str = "",
    segments: int = GAUGE_SEGMENTS,
) -> Gauge:
    """Lay out the gradient arc and pointer for ``value`` out of ``max_value``."""
    start = math.radians(GAUGE_START_DEGREES)
    end = math.radians(GAUGE_END_DEGREES)
    proportion = (value or 0.0) / max_value if max_value > 0 else 0.0
    proportion = max(0.0, min(1.0, proportion))
    scaled = proportion * GAUGE_SCALE_MAX
    value_angle = start + (scaled / GAUGE_SCALE_MAX) * (end - start)

    cx = cy = GAUGE_SIZE / 2
    outer, inner = GAUGE_OUTER_RADIUS, GAUGE_INNER_RADIUS
    arc_length = end - start
    step = (value_angle - start) / segments

    arc: List[ArcSegment] = []
    if step > 0:
        for index in range(segments):
            angle1 = start + index * step
            angle2 = start + (index + 1) * step
            x1_out, y1_out = _polar(cx, cy, outer, angle1)
            x2_out, y2_out = _polar(cx, cy, outer, angle2)
            x2_in, y2_in = _polar(cx, cy, inner, angle2)
            x1_in, y1_in = _polar(cx, cy, inner, angle1)
            large_arc = 1 if abs(angle2 - angle1) > math.pi else 0
            path = (
                f"M {x1_out:.3f} {y1_out:.3f} "
                f"A {outer} {outer} 0 {large_arc} 1 {x2_out:.3f} {y2_out:.3f} "
                f"L {x2_in:.3f} {y2_in:.3f} "
                f"A {inner} {inner} 0 {large_arc} 0 {x1_in:.3f} {y1_in:.3f} Z"
            )
            color = gradient_color((angle1 - start) / arc_length)
            arc.append(ArcSegment(path=path, color=color))

    return Gauge(
        value=value,
        max=max_value,
        unit=unit,
        value_angle=value_angle,
        segments=arc,
        pointer=_polar(cx, cy, outer, value_angle),
    )


@dataclass(frozen=True)
class WaterTank:
    kind = "tank"

    value: Optional[float]
    max: float
    unit: str
    fill_percentage: float

    @property
    def caption(self) -> str:
        return format_caption(self.value, self.max, self.unit)


def build_water_tank(value: Optional[float], max_value: float, unit: str = "") -> WaterTank:
    if max_value > 0:
        fill = (value or 0.0) / max_value * 100
    else:
        fill = 0.0
    return WaterTank(
        value=value,
        max=max_value,
        unit=unit,
        fill_percentage=max(0.0, min(100.0, fill)),
    )


@dataclass(frozen=True)
class LineChart:
    width: int
    height: int
    lines: List[List[Point]]
    ticks: List[Tuple[float, str]]


def build_line_chart(
    series: Sequence[Optional[float]],
    y_max: float,
    labels: Sequence[str] = (),
    width: int = 320,
    height: int = 160,
) -> LineChart:
    """Place ``series`` on a point scale; ``None`` slots break the line."""
    slots = len(series)
    step = width / (slots - 1) if slots > 1 else 0.0
    scale = height / y_max if y_max > 0 else 0.0

    lines: List[List[Point]] = []
    current: List[Point] = []
    for index, value in enumerate(series):
        if value is None:
            if current:
                lines.append(current)
                current = []
            continue
        current.append((round(index * step, 2), round(height - value * scale, 2)))
    if current:
        lines.append(current)

    ticks = [(round(index * step, 2), label) for index, label in enumerate(labels)]
    return LineChart(width=width, height=height, lines=lines, ticks=ticks)
