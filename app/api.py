"""HTTP route definitions for the service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from app.schemas import ErrorResponse, WeatherReadingPayload, WeatherResponse
from services.generator import ReadingGenerator, build_default_generator

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

FETCH_FAILED_MESSAGE = "Failed to fetch weather data"

router = APIRouter()


def get_generator() -> ReadingGenerator:
    return build_default_generator()


@router.get(
    "/weather",
    response_model=WeatherResponse,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
    summary="Fabricate and return one synthetic weather reading.",
)
async def get_weather(
    generator: ReadingGenerator = Depends(get_generator),
) -> JSONResponse:
    try:
        reading = generator.generate()
    except Exception:  # noqa: BLE001 - any generator failure maps to a 500 body
        logger.exception(
            "Weather reading generation failed",
            extra={"status_code": status.HTTP_500_INTERNAL_SERVER_ERROR},
        )
        body = ErrorResponse(error=FETCH_FAILED_MESSAGE)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(mode="json"),
            headers=CORS_HEADERS,
        )

    body = WeatherResponse(data=WeatherReadingPayload.from_reading(reading))
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=body.model_dump(mode="json", by_alias=True),
        headers=CORS_HEADERS,
    )


@router.options(
    "/weather",
    summary="CORS preflight for the weather endpoint.",
    status_code=status.HTTP_200_OK,
)
async def weather_preflight() -> Response:
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /weather for the latest reading."}
