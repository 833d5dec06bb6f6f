"""Application settings and environment loading utilities."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from tzlocal import get_localzone_name


def _load_dotenv() -> None:
    env_path = Path(".env")
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


_load_dotenv()


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be an integer, got {raw!r}") from exc


def _local_timezone_name() -> str:
    """IANA name of the host zone, e.g. ``America/Los_Angeles``."""

    return get_localzone_name() or "UTC"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration derived from environment variables."""

    api_key: Optional[str] = None
    base_url: str = "https://api.weatherapi.com/v1"
    forecast_days: int = 3
    timezone_name: str = "UTC"
    cache_ttl_seconds: int = 600
    cache_max_entries: int = 100
    rate_limit_requests: int = 20
    rate_limit_window_seconds: int = 3600
    upstream_timeout_seconds: int = 10

    @property
    def forecast_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/forecast.json"

    @classmethod
    def from_env(cls) -> "Settings":
        # The key is optional here; requests fail with a configuration error until it is set.
        api_key = os.getenv("WEATHER_API_KEY") or os.getenv("REACT_APP_WEATHER_API_KEY")

        return cls(
            api_key=api_key or None,
            base_url=os.getenv("WEATHER_API_BASE_URL", cls.base_url),
            forecast_days=_int_from_env("WEATHER_FORECAST_DAYS", cls.forecast_days),
            timezone_name=os.getenv("WEATHER_TIMEZONE") or _local_timezone_name(),
            cache_ttl_seconds=_int_from_env("WEATHER_CACHE_TTL_SECONDS", cls.cache_ttl_seconds),
            cache_max_entries=_int_from_env("WEATHER_CACHE_MAX_ENTRIES", cls.cache_max_entries),
            rate_limit_requests=_int_from_env(
                "WEATHER_RATE_LIMIT_REQUESTS", cls.rate_limit_requests
            ),
            rate_limit_window_seconds=_int_from_env(
                "WEATHER_RATE_LIMIT_WINDOW_SECONDS", cls.rate_limit_window_seconds
            ),
            upstream_timeout_seconds=_int_from_env(
                "WEATHER_UPSTREAM_TIMEOUT_SECONDS", cls.upstream_timeout_seconds
            ),
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings.from_env()
