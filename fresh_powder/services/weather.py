from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional

import httpx

from fresh_powder.aggregation import Sample, high_low, snowfall_in_window
from fresh_powder.errors import MissingCoordinatesError, ProviderError
from fresh_powder.http_client import ProviderFetcher, build_client
from fresh_powder.logging import get_logger
from fresh_powder.models import Coordinates, Resort, WeatherSummary
from fresh_powder.normalization import normalize_current, normalize_daily

logger = get_logger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

PAST_HOURS = 72
FORECAST_DAYS = 7
SHORT_WINDOW_HOURS = 24
LONG_WINDOW_HOURS = 48


def forecast_params(coordinates: Coordinates) -> Dict[str, Any]:
    """Query parameters for a current + hourly + 7-day forecast request.

    Temperatures and wind speeds are requested directly in °F and mph;
    snowfall is always reported in centimetres.
    """

    return {
        "latitude": coordinates.latitude,
        "longitude": coordinates.longitude,
        "current": "temperature_2m,wind_speed_10m,weather_code,uv_index",
        "hourly": "snowfall,temperature_2m",
        "daily": "snowfall_sum,temperature_2m_max,temperature_2m_min,weather_code,wind_speed_10m_max",
        "temperature_unit": "fahrenheit",
        "wind_speed_unit": "mph",
        "past_hours": PAST_HOURS,
        "forecast_days": FORECAST_DAYS,
    }


def _parse_timestamp(value: Any, offset: timedelta) -> datetime:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        # Naive times are wall-clock in the response's utc_offset_seconds.
        parsed = (parsed - offset).replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _hourly_samples(hourly: Mapping[str, Any], offset: timedelta) -> List[Sample]:
    times = hourly.get("time") or []
    depths = hourly.get("snowfall") or []
    return [
        Sample(
            timestamp=_parse_timestamp(stamp, offset),
            depth=depths[index] if index < len(depths) else None,
        )
        for index, stamp in enumerate(times)
    ]


def _as_utc(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def build_summary(payload: Mapping[str, Any], now: datetime) -> WeatherSummary:
    """Assemble a :class:`WeatherSummary` from a decoded provider response.

    Raises :class:`ProviderError` when the ``current`` or ``hourly`` section
    is missing or unusable. A missing ``daily`` section is not an error: the
    summary's ``daily_forecast`` is left as ``None``.
    """

    now = _as_utc(now)
    current = payload.get("current")
    hourly = payload.get("hourly")
    if not isinstance(current, Mapping):
        raise ProviderError("Provider response has no current section")
    if not isinstance(hourly, Mapping):
        raise ProviderError("Provider response has no hourly section")

    try:
        offset = timedelta(seconds=int(payload.get("utc_offset_seconds") or 0))
        fields = normalize_current(current)
        samples = _hourly_samples(hourly, offset)
        precip_24h = snowfall_in_window(samples, SHORT_WINDOW_HOURS, now)
        precip_48h = snowfall_in_window(samples, LONG_WINDOW_HOURS, now)
        high_temp, low_temp = high_low(hourly.get("temperature_2m") or [])

        daily = payload.get("daily")
        if daily is not None and not isinstance(daily, Mapping):
            raise ProviderError("Provider response has a malformed daily section")
        daily_forecast = normalize_daily(daily) if daily is not None else None
    except ProviderError:
        raise
    except (KeyError, TypeError, ValueError, ArithmeticError, OSError) as exc:
        # Huge or non-finite numbers fail in Decimal.quantize and fromtimestamp.
        raise ProviderError(f"Malformed provider response: {exc}") from exc

    return WeatherSummary(
        current_temp=fields["current_temp"],
        weather_condition=fields["weather_condition"],
        precip_24h=precip_24h,
        precip_48h=precip_48h,
        high_temp=high_temp,
        low_temp=low_temp,
        uv_index=fields["uv_index"],
        wind_speed=fields["wind_speed"],
        daily_forecast=daily_forecast,
    )


async def normalize(
    resort: Resort,
    *,
    client: Optional[httpx.AsyncClient] = None,
    now: Optional[datetime] = None,
    trace_id: str | None = None,
) -> WeatherSummary:
    """Fetch and normalize weather for a single resort.

    Issues exactly one request. Errors are not retried and propagate as
    :class:`MissingCoordinatesError` or :class:`ProviderError`.
    """

    if resort.coordinates is None:
        raise MissingCoordinatesError(resort.id)

    trace_id = trace_id or uuid.uuid4().hex
    params = forecast_params(resort.coordinates)
    logger.info("weather.request", trace_id=trace_id, resort_id=resort.id, url=OPEN_METEO_URL)

    try:
        if client is not None:
            payload = await ProviderFetcher(client).get_json(OPEN_METEO_URL, params, trace_id=trace_id)
        else:
            async with build_client() as owned_client:
                payload = await ProviderFetcher(owned_client).get_json(OPEN_METEO_URL, params, trace_id=trace_id)

        if not isinstance(payload, Mapping):
            raise ProviderError("Provider response is not a JSON object", url=OPEN_METEO_URL)
        summary = build_summary(payload, now or datetime.now(timezone.utc))
    except ProviderError as exc:
        logger.error(
            "weather.failure",
            trace_id=trace_id,
            resort_id=resort.id,
            url=OPEN_METEO_URL,
            status_code=exc.status,
            error=str(exc),
        )
        raise

    logger.info(
        "weather.success",
        trace_id=trace_id,
        resort_id=resort.id,
        days=len(summary.daily_forecast) if summary.daily_forecast is not None else None,
    )
    return summary
