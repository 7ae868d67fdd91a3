from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.schemas import WeatherReadingPayload
from cli.config import CLIConfig
from models.records import WeatherReading

logger = logging.getLogger(__name__)


class WeatherFetchError(RuntimeError):
    """The weather endpoint could not be reached or returned an unusable body."""


class ApiClient:
    """Minimal HTTP client for the weather service."""

    def __init__(self, config: CLIConfig, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url,
            timeout=config.request_timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def fetch_reading(self) -> WeatherReading:
        try:
            response = self._client.get("/weather")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise WeatherFetchError(self._describe_status_error(exc)) from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "Weather request failed",
                extra={"base_url": self._config.base_url, "reason": str(exc)},
            )
            raise WeatherFetchError(f"Failed to fetch: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise WeatherFetchError("Weather endpoint returned invalid JSON.") from exc

        if not isinstance(payload, dict) or payload.get("success") is not True:
            error = payload.get("error") if isinstance(payload, dict) else None
            raise WeatherFetchError(error or "Weather endpoint reported a failure.")

        try:
            return WeatherReadingPayload.model_validate(payload.get("data")).to_reading()
        except ValidationError as exc:
            raise WeatherFetchError("Unexpected reading payload from weather endpoint.") from exc

    def _describe_status_error(self, exc: httpx.HTTPStatusError) -> str:
        status_code = exc.response.status_code
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("error") or data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        logger.warning(
            "Weather endpoint returned an error status",
            extra={"base_url": self._config.base_url, "status_code": status_code},
        )
        return f"Request failed with status {status_code}: {detail or 'no detail provided.'}"
