from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

import typer

from cli.client import ApiClient, WeatherFetchError
from cli.config import CLIConfig, load_config
from cli.render import render_dashboard, render_reading
from logging_config import configure_logging
from services.dashboard import DashboardSession


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Terminal client for the weather monitoring service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)

sleep: Callable[[float], None] = time.sleep


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Weather API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    poll_interval: Optional[float] = typer.Option(
        None,
        "--poll-interval",
        help="Seconds between polls (defaults to DASHBOARD_POLL_INTERVAL env or 60).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Override LOG_LEVEL for this invocation.",
    ),
) -> None:
    """Entry point for the CLI."""
    if log_level:
        configure_logging(log_level.upper(), force=True)
    else:
        configure_logging()
    config = load_config(base_url=base_url, poll_interval=poll_interval)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("fetch")
def fetch_command(ctx: typer.Context) -> None:
    """Fetch a single reading and print it."""
    state = _get_state(ctx)
    try:
        reading = state.client.fetch_reading()
    except WeatherFetchError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    render_reading(reading)


@app.command("watch")
def watch_command(
    ctx: typer.Context,
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        "-i",
        help="Override the poll interval in seconds.",
    ),
    count: Optional[int] = typer.Option(
        None,
        "--count",
        "-n",
        min=1,
        help="Stop after this many polls (default: run until interrupted).",
    ),
) -> None:
    """Poll the weather endpoint and render the rolling ten-reading dashboard."""
    state = _get_state(ctx)
    delay = interval if interval is not None and interval > 0 else state.config.poll_interval
    session = DashboardSession()
    typer.echo(f"Polling {state.config.base_url}/weather every {delay}s ...")

    polls = 0
    try:
        while count is None or polls < count:
            try:
                view = session.apply(state.client.fetch_reading())
            except WeatherFetchError as exc:
                view = session.record_error(str(exc))
            polls += 1
            typer.echo()
            render_dashboard(view)
            if count is not None and polls >= count:
                break
            sleep(delay)
    except KeyboardInterrupt:
        typer.echo("Stopped.")
