from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import pytest

from fresh_powder.models import Coordinates, Resort, WeatherCondition

NOW = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)
PAST_HOURS = 72


def build_payload(now: datetime = NOW, *, include_daily: bool = True) -> Dict[str, Any]:
    """Synthetic Open-Meteo response covering 72h back and 24h ahead of ``now``."""

    start = now - timedelta(hours=PAST_HOURS)
    times = [(start + timedelta(hours=hour)).strftime("%Y-%m-%dT%H:%M") for hour in range(96)]

    snowfall = [0.0] * 96
    snowfall[71] = 2.54  # one hour ago
    snowfall[42] = 5.08  # thirty hours ago
    snowfall[0] = 1.0  # exactly 72 hours ago
    snowfall[80] = 9.0  # in the future

    temperatures = [15.0] * 96
    temperatures[5] = 34.6
    temperatures[10] = 8.5
    temperatures[30] = 50.0  # beyond the first 24 readings

    payload: Dict[str, Any] = {
        "latitude": 39.6,
        "longitude": -106.35,
        "utc_offset_seconds": 0,
        "timezone": "GMT",
        "current": {
            "time": now.strftime("%Y-%m-%dT%H:%M"),
            "interval": 900,
            "temperature_2m": 21.6,
            "wind_speed_10m": 12.4,
            "weather_code": 73,
            "uv_index": 2.5,
        },
        "hourly": {
            "time": times,
            "snowfall": snowfall,
            "temperature_2m": temperatures,
        },
    }
    if include_daily:
        payload["daily"] = {
            "time": [(now.date() + timedelta(days=day)).isoformat() for day in range(7)],
            "snowfall_sum": [0.0, 10.0, 2.3, None, 0.0, 5.5, 1.2],
            "temperature_2m_max": [30.4, 28.5, 25.0, 33.2, 35.9, 27.0, 22.1],
            "temperature_2m_min": [12.6, 10.0, 5.4, -2.5, 18.0, 9.5, 3.3],
            "weather_code": [0, 3, 71, 61, 45, 2, 99],
            "wind_speed_10m_max": [10.2, 15.7, 22.5, 8.0, 5.4, 12.0, 30.6],
        }
    return payload


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def forecast_payload() -> Dict[str, Any]:
    return build_payload()


@pytest.fixture
def resort() -> Resort:
    return Resort(
        id="vail",
        name="Vail",
        location="Vail, CO",
        coordinates=Coordinates(39.6061, -106.355),
        current_temp=24,
        weather_condition=WeatherCondition.SNOWING,
        precip_24h=4.0,
        precip_48h=7.0,
        base_snow=42,
        uv_index=2,
        wind_speed=12,
        lifts_open=28,
        total_lifts=31,
    )


@pytest.fixture
def payload_factory():
    return build_payload
