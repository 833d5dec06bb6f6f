"""Caching, rate-limited proxy for the WeatherAPI.com forecast endpoint."""

from .cache import ResponseCache, cache_key
from .clients.weatherapi import WeatherApiClient
from .config import Settings, get_settings
from .rate_limit import RateLimiter
from .service import WeatherService

__all__ = [
    "RateLimiter",
    "ResponseCache",
    "Settings",
    "WeatherApiClient",
    "WeatherService",
    "cache_key",
    "get_settings",
]
