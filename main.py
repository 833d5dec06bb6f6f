"""FastAPI application that proxies and caches the weather provider."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weatherproxy.cache import ResponseCache
from weatherproxy.clients.weatherapi import WeatherApiClient
from weatherproxy.config import get_settings
from weatherproxy.errors import FETCH_FAILED_MESSAGE, ProxyError
from weatherproxy.logging_config import configure_logging
from weatherproxy.rate_limit import RateLimiter
from weatherproxy.service import WeatherService
from weatherproxy.utils import client_identity

configure_logging()
LOGGER = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

settings = get_settings()
weather_service = WeatherService(
    fetcher=WeatherApiClient(settings),
    cache=ResponseCache(settings.cache_ttl_seconds, settings.cache_max_entries),
    rate_limiter=RateLimiter(settings.rate_limit_requests, settings.rate_limit_window_seconds),
)

app = FastAPI(title="Weather Proxy")


@app.middleware("http")
async def apply_cors_headers(request: Request, call_next):  # type: ignore[override]
    try:
        response = await call_next(request)
    except Exception:  # noqa: BLE001
        client_ip = request.client.host if request.client else "unknown"
        LOGGER.exception("Unhandled exception", extra={"client_ip": client_ip})
        response = JSONResponse(status_code=500, content={"error": FETCH_FAILED_MESSAGE})
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(ProxyError)
async def handle_proxy_error(request: Request, exc: ProxyError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = "Method not allowed" if exc.status_code == 405 else exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


def get_service() -> WeatherService:
    """Provide the process-wide weather service."""

    return weather_service


@app.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}


@app.get("/api/weather")
def get_weather(
    request: Request,
    location: Optional[str] = Query(None, description="City name, postcode or 'lat,lon'."),
    service: WeatherService = Depends(get_service),
) -> Dict[str, Any]:
    """Return the forecast for ``location``, from cache when fresh."""

    if not location:
        raise HTTPException(status_code=400, detail="Location parameter is required")

    client_id = client_identity(request.headers, request.client.host if request.client else None)
    return service.get_weather(location, client_id)


@app.options("/api/weather")
def weather_preflight() -> Response:
    """Answer CORS preflight with an empty body."""

    return Response(status_code=200)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "8000")))
