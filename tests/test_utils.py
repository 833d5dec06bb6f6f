from datetime import UTC, datetime
import json
import logging
from zoneinfo import ZoneInfo

import pytest

from weatherproxy.cache import ResponseCache, cache_key
from weatherproxy.config import Settings
from weatherproxy.errors import FETCH_FAILED_MESSAGE, ProxyError
from weatherproxy.logging_config import JsonFormatter
from weatherproxy.rate_limit import RateLimiter
from weatherproxy.utils import client_identity, format_local_time, to_epoch


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_rate_limiter_allows_up_to_limit():
    limiter = RateLimiter(20, 3600, clock=FakeClock())
    assert not any(limiter.check_and_record("ip") for _ in range(20))
    assert limiter.check_and_record("ip")


def test_rate_limiter_does_not_record_limited_attempts():
    clock = FakeClock()
    limiter = RateLimiter(2, 3600, clock=clock)
    assert not limiter.check_and_record("ip")
    clock.now += 10
    assert not limiter.check_and_record("ip")
    assert limiter.check_and_record("ip")
    assert limiter.check_and_record("ip")
    assert limiter.recent_requests("ip") == 2

    # Only the first request has left the window.
    clock.now += 3590
    assert not limiter.check_and_record("ip")
    assert limiter.check_and_record("ip")


def test_rate_limiter_window_boundary_is_exclusive():
    clock = FakeClock()
    limiter = RateLimiter(1, 3600, clock=clock)
    assert not limiter.check_and_record("ip")
    clock.now += 3599
    assert limiter.check_and_record("ip")
    clock.now += 1
    assert not limiter.check_and_record("ip")


def test_rate_limiter_tracks_identities_independently():
    limiter = RateLimiter(1, 3600, clock=FakeClock())
    assert not limiter.check_and_record("a")
    assert not limiter.check_and_record("b")
    assert limiter.check_and_record("a")


def test_cache_reports_age_while_fresh():
    clock = FakeClock()
    cache = ResponseCache(600, clock=clock)
    cache.put("paris", {"temp": 1})
    clock.now += 42.4
    payload, age = cache.get("paris")
    assert payload == {"temp": 1}
    assert round(age) == 42


def test_cache_stale_entry_is_a_miss_but_kept():
    clock = FakeClock()
    cache = ResponseCache(600, clock=clock)
    cache.put("paris", {"temp": 1})
    clock.now += 600
    assert cache.get("paris") is None
    assert "paris" in cache
    cache.put("paris", {"temp": 2})
    assert cache.get("paris")[0] == {"temp": 2}


def test_cache_evicts_single_oldest_entry_past_bound():
    cache = ResponseCache(600, max_entries=100, clock=FakeClock())
    for index in range(100):
        cache.put(f"city-{index}", {"i": index})
    assert len(cache) == 100

    cache.put("city-100", {"i": 100})

    assert len(cache) == 100
    assert "city-0" not in cache
    assert "city-1" in cache
    assert "city-100" in cache


def test_cache_key_lowercases_only():
    assert cache_key("Paris") == cache_key("paris") == "paris"
    assert cache_key("New York ") == "new york "


def test_client_identity_prefers_forwarded_for():
    headers = {"x-forwarded-for": "203.0.113.5, 10.0.0.1", "x-real-ip": "198.51.100.7"}
    assert client_identity(headers, "10.0.0.2") == "203.0.113.5"


def test_client_identity_falls_back_in_order():
    assert client_identity({"x-real-ip": "198.51.100.7"}, "10.0.0.2") == "198.51.100.7"
    assert client_identity({}, "10.0.0.2") == "10.0.0.2"
    assert client_identity({}, None) == "127.0.0.1"


def test_time_helpers_render_utc_without_fraction():
    value = datetime(2024, 3, 5, 7, 8, 9, 123456, tzinfo=UTC)
    assert format_local_time(value) == "2024-03-05T07:08:09"
    assert to_epoch(value) == 1709622489


def test_settings_from_env_reads_overrides(monkeypatch):
    monkeypatch.delenv("WEATHER_API_KEY", raising=False)
    monkeypatch.delenv("WEATHER_CACHE_TTL_SECONDS", raising=False)
    monkeypatch.delenv("WEATHER_API_BASE_URL", raising=False)
    monkeypatch.setenv("REACT_APP_WEATHER_API_KEY", "legacy-key")
    monkeypatch.setenv("WEATHER_RATE_LIMIT_REQUESTS", "5")
    monkeypatch.setenv("WEATHER_TIMEZONE", "Europe/Paris")

    settings = Settings.from_env()

    assert settings.api_key == "legacy-key"
    assert settings.rate_limit_requests == 5
    assert settings.cache_ttl_seconds == 600
    assert settings.timezone_name == "Europe/Paris"
    assert settings.forecast_url == "https://api.weatherapi.com/v1/forecast.json"


def test_settings_rejects_non_integer(monkeypatch):
    monkeypatch.setenv("WEATHER_CACHE_TTL_SECONDS", "ten minutes")
    with pytest.raises(RuntimeError):
        Settings.from_env()


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("weather", logging.INFO, __file__, 1, "cache hit", None, None)
    record.location = "Paris"
    record.cache_age = 12
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "cache hit"
    assert payload["location"] == "Paris"
    assert payload["cache_age"] == 12
    assert "client_ip" not in payload


def test_settings_sends_iana_zone_of_host(monkeypatch):
    monkeypatch.delenv("WEATHER_TIMEZONE", raising=False)
    monkeypatch.setenv("TZ", "PDT")
    monkeypatch.setattr("weatherproxy.config.get_localzone_name", lambda: "America/Los_Angeles")

    settings = Settings.from_env()

    assert settings.timezone_name == "America/Los_Angeles"
    assert ZoneInfo(settings.timezone_name).key == "America/Los_Angeles"


def test_proxy_error_defaults_to_fetch_failed_message():
    error = ProxyError()
    assert error.to_body() == {"error": FETCH_FAILED_MESSAGE}
    assert error.status_code == 500
