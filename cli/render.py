from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

import typer

from models.records import WeatherReading
from services.dashboard import DashboardView, MetricPanel
from services.projection import COLLECTING
from services.widgets import Gauge

BAR_WIDTH = 20
NO_DATA = "--"


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_reading(reading: WeatherReading) -> None:
    echo_heading("Weather Reading")
    echo_key_values(
        [
            ("timestamp", reading.timestamp.isoformat()),
            ("airTemperature", reading.air_temperature),
            ("rainfall", reading.rainfall),
            ("relativeHumidity", reading.relative_humidity),
            ("windSpeed", reading.wind_speed),
        ]
    )


def format_series(series: Sequence[Optional[float]]) -> str:
    return " ".join(NO_DATA if value is None else f"{value:.1f}" for value in series)


def format_bar(fraction: float, width: int = BAR_WIDTH) -> str:
    filled = round(max(0.0, min(1.0, fraction)) * width)
    return "[" + "#" * filled + "." * (width - filled) + "]"


def format_range(panel: MetricPanel) -> str:
    if panel.summary == COLLECTING:
        return "Collecting data..."
    return (
        f"Range: {panel.summary.min:.1f}{panel.unit} - {panel.summary.max:.1f}{panel.unit}"
    )


def _render_panel(panel: MetricPanel) -> None:
    typer.echo()
    typer.secho(f"{panel.spec.icon} {panel.title.upper()}", bold=True)
    typer.echo(f"  now:    {panel.value}{panel.unit}")
    widget = panel.widget
    if isinstance(widget, Gauge):
        fraction = widget.value / widget.max if widget.value is not None and widget.max else 0.0
    else:
        fraction = widget.fill_percentage / 100
    typer.echo(f"  {widget.kind}:  {format_bar(fraction)} {widget.caption}")
    typer.echo(f"  series: {format_series(panel.series)} (axis max {panel.axis_max})")
    typer.echo(f"  {format_range(panel)}")


def render_dashboard(view: DashboardView) -> None:
    echo_heading("Weather Monitoring Dashboard")
    typer.echo(f"Last updated: {view.last_update or NO_DATA}")
    if view.error:
        typer.secho(f"Error: {view.error}", fg=typer.colors.RED)
    if view.current is None:
        typer.echo("No data available")
        return
    if view.labels:
        typer.echo(f"Axis: {view.labels[0]} .. {view.labels[-1]}")
    for panel in view.panels:
        _render_panel(panel)
