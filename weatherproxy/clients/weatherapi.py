"""WeatherAPI.com forecast client."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests import Response

from weatherproxy.config import Settings
from weatherproxy.errors import FETCH_FAILED_MESSAGE, UpstreamError

LOGGER = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Weather API error"


class WeatherApiClient:
    """Small HTTP client for the forecast endpoint with error normalization."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    @property
    def api_key(self) -> Optional[str]:
        return self._settings.api_key

    def fetch(self, location: str) -> Dict[str, Any]:
        """Return the provider's forecast payload for ``location`` unchanged."""

        params = {
            "key": self._settings.api_key,
            "q": location,
            "days": self._settings.forecast_days,
            "aqi": "no",
            "alerts": "no",
            "tz": self._settings.timezone_name,
        }
        try:
            response = self._session.get(
                self._settings.forecast_url,
                params=params,
                timeout=self._settings.upstream_timeout_seconds,
            )
        except requests.RequestException as exc:
            LOGGER.warning("weather api unreachable", extra={"location": location})
            raise UpstreamError(500, FETCH_FAILED_MESSAGE) from exc

        self._raise_for_status(response, location)
        try:
            return response.json()
        except ValueError as exc:
            LOGGER.warning("weather api returned malformed body", extra={"location": location})
            raise UpstreamError(500, FETCH_FAILED_MESSAGE) from exc

    def _raise_for_status(self, response: Response, location: str) -> None:
        """Raise ``UpstreamError`` carrying the provider's message and code."""

        if response.ok:
            return
        status = response.status_code
        message = DEFAULT_ERROR_MESSAGE
        code = None
        try:
            body = response.json()
        except ValueError:
            body = None
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            message = error.get("message") or DEFAULT_ERROR_MESSAGE
            code = error.get("code")
        LOGGER.warning(
            "weather api request failed",
            extra={"status": status, "location": location},
        )
        raise UpstreamError(status, message, code)
