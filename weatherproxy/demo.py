"""Synthetic forecast served to rate-limited clients.

The payload mirrors the shape of a WeatherAPI ``forecast.json`` response so
the frontend can render it without special cases. Only the time fields depend
on the current clock.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from weatherproxy.utils import format_local_time, is_daytime, to_epoch, utc_now

_ICON_BASE = "//cdn.weatherapi.com/weather/64x64/day"

PARTLY_CLOUDY = {"text": "Partly cloudy", "icon": f"{_ICON_BASE}/116.png", "code": 1003}
LIGHT_RAIN = {"text": "Light rain", "icon": f"{_ICON_BASE}/296.png", "code": 1183}
SUNNY = {"text": "Sunny", "icon": f"{_ICON_BASE}/113.png", "code": 1000}

# (condition, max_c, max_f, min_c, min_f, avg_c, avg_f, wind_mph, wind_kph,
#  precip_mm, precip_in, vis_km, vis_miles, humidity, chance_of_rain, uv)
_FORECAST_DAYS = (
    (PARTLY_CLOUDY, 26, 79, 18, 64, 22, 72, 12.1, 19.4, 0.0, 0.0, 16.0, 10.0, 65, 10, 5.0),
    (LIGHT_RAIN, 24, 75, 16, 61, 20, 68, 10.5, 16.9, 2.1, 0.08, 12.0, 7.0, 72, 80, 3.0),
    (SUNNY, 28, 82, 20, 68, 24, 75, 15.2, 24.4, 0.0, 0.0, 16.0, 10.0, 58, 5, 7.0),
)


def _forecast_day(now: datetime, offset: int, values: tuple) -> Dict[str, Any]:
    (
        condition,
        max_c,
        max_f,
        min_c,
        min_f,
        avg_c,
        avg_f,
        wind_mph,
        wind_kph,
        precip_mm,
        precip_in,
        vis_km,
        vis_miles,
        humidity,
        chance_of_rain,
        uv,
    ) = values
    day = now + timedelta(days=offset)
    return {
        "date": format_local_time(day)[:10],
        "date_epoch": to_epoch(now) + offset * 86400,
        "day": {
            "maxtemp_c": max_c,
            "maxtemp_f": max_f,
            "mintemp_c": min_c,
            "mintemp_f": min_f,
            "avgtemp_c": avg_c,
            "avgtemp_f": avg_f,
            "maxwind_mph": wind_mph,
            "maxwind_kph": wind_kph,
            "totalprecip_mm": precip_mm,
            "totalprecip_in": precip_in,
            "totalsnow_cm": 0.0,
            "avgvis_km": vis_km,
            "avgvis_miles": vis_miles,
            "avghumidity": humidity,
            "daily_will_it_rain": 1 if chance_of_rain >= 50 else 0,
            "daily_chance_of_rain": chance_of_rain,
            "daily_will_it_snow": 0,
            "daily_chance_of_snow": 0,
            "condition": dict(condition),
            "uv": uv,
        },
    }


def build_demo_payload(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Return a complete demo forecast flagged with ``rateLimited``."""

    now = now or utc_now()
    epoch = to_epoch(now)
    local_time = format_local_time(now)
    forecast: List[Dict[str, Any]] = [
        _forecast_day(now, offset, values) for offset, values in enumerate(_FORECAST_DAYS)
    ]
    return {
        "location": {
            "name": "Demo City",
            "region": "Demo State",
            "country": "Demo Country",
            "lat": 40.7128,
            "lon": -74.0060,
            "tz_id": "America/New_York",
            "localtime_epoch": epoch,
            "localtime": local_time,
        },
        "current": {
            "last_updated_epoch": epoch,
            "last_updated": local_time,
            "temp_c": 22,
            "temp_f": 72,
            "is_day": 1 if is_daytime(now) else 0,
            "condition": dict(PARTLY_CLOUDY),
            "wind_mph": 8.5,
            "wind_kph": 13.7,
            "wind_degree": 230,
            "wind_dir": "SW",
            "pressure_mb": 1013.0,
            "pressure_in": 29.91,
            "precip_mm": 0.0,
            "precip_in": 0.0,
            "humidity": 65,
            "cloud": 40,
            "feelslike_c": 24,
            "feelslike_f": 75,
            "vis_km": 16.0,
            "vis_miles": 10.0,
            "uv": 5.0,
            "gust_mph": 12.1,
            "gust_kph": 19.4,
        },
        "forecast": {"forecastday": forecast},
        "rateLimited": True,
        "cached": False,
    }
