from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api import FETCH_FAILED_MESSAGE, get_generator
from services.dashboard import DashboardView, SessionRegistry, build_default_registry
from services.generator import ReadingGenerator
from services.widgets import LineChart, build_line_chart
from settings import get_settings

logger = logging.getLogger(__name__)

SESSION_COOKIE = "weather_session"

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def get_registry() -> SessionRegistry:
    return build_default_registry()


def _charts(view: DashboardView) -> list[LineChart]:
    return [build_line_chart(panel.series, panel.axis_max, view.labels) for panel in view.panels]


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    request: Request,
    generator: ReadingGenerator = Depends(get_generator),
    registry: SessionRegistry = Depends(get_registry),
    session_id: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE),
) -> HTMLResponse:
    session_id, session = registry.get_or_create(session_id)
    try:
        reading = generator.generate()
    except Exception:  # noqa: BLE001 - surfaced inline, window kept
        logger.exception("Dashboard poll failed")
        view = session.record_error(FETCH_FAILED_MESSAGE)
    else:
        view = session.apply(reading)

    response = templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "view": view,
            "charts": _charts(view),
            "poll_interval": int(get_settings().poll_interval),
        },
    )
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response
