"""Per-request weather lookup policy: rate limit, cache, then upstream."""
from __future__ import annotations

import logging
from typing import Any, Dict

from weatherproxy.cache import ResponseCache, cache_key
from weatherproxy.clients.weatherapi import WeatherApiClient
from weatherproxy.demo import build_demo_payload
from weatherproxy.errors import ConfigurationError, ProxyError, UpstreamError
from weatherproxy.rate_limit import RateLimiter

LOGGER = logging.getLogger(__name__)


class WeatherService:
    """Compose the rate limiter, response cache and upstream client.

    Rate-limited clients get a demo payload with HTTP 200 instead of an
    error, so the frontend always has something to render.
    """

    def __init__(
        self,
        fetcher: WeatherApiClient,
        cache: ResponseCache,
        rate_limiter: RateLimiter,
    ) -> None:
        self.fetcher = fetcher
        self.cache = cache
        self.rate_limiter = rate_limiter

    def get_weather(self, location: str, client_id: str) -> Dict[str, Any]:
        if self.rate_limiter.check_and_record(client_id):
            LOGGER.info(
                "rate limit exceeded, serving demo data", extra={"client_ip": client_id}
            )
            return build_demo_payload()

        key = cache_key(location)
        hit = self.cache.get(key)
        if hit is not None:
            payload, age = hit
            cache_age = int(age + 0.5)
            LOGGER.info("cache hit", extra={"location": location, "cache_age": cache_age})
            return {**payload, "cached": True, "cacheAge": cache_age}

        if not self.fetcher.api_key:
            LOGGER.error("weather api key not configured")
            raise ConfigurationError()

        try:
            payload = self.fetcher.fetch(location)
        except UpstreamError:
            raise
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("unexpected failure fetching weather", extra={"location": location})
            raise ProxyError() from exc

        self.cache.put(key, payload)
        LOGGER.info("weather api call made", extra={"location": location})
        return {**payload, "cached": False}
