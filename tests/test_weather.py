from __future__ import annotations

import json
from dataclasses import replace
from typing import Callable

import httpx
import pytest

from fresh_powder.errors import MissingCoordinatesError, ProviderError
from fresh_powder.models import WeatherCondition
from fresh_powder.services.weather import OPEN_METEO_URL, build_summary, normalize


def _make_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_build_summary_fields(forecast_payload, now):
    summary = build_summary(forecast_payload, now)

    assert summary.current_temp == 22
    assert summary.wind_speed == 12
    assert summary.uv_index == 3
    assert summary.weather_condition == WeatherCondition.SNOWING
    assert summary.precip_24h == 1.0
    assert summary.precip_48h == 3.0
    assert summary.high_temp == 35
    assert summary.low_temp == 9
    assert summary.daily_forecast is not None
    assert len(summary.daily_forecast) == 7
    assert summary.daily_forecast[0].date == now.date()
    assert summary.daily_forecast[1].snowfall == 3.9


def test_missing_daily_section_leaves_forecast_absent(payload_factory, now):
    summary = build_summary(payload_factory(include_daily=False), now)

    assert summary.daily_forecast is None
    assert summary.to_dict()["daily_forecast"] is None


def test_same_response_yields_identical_summaries(forecast_payload, now):
    first = build_summary(forecast_payload, now)
    second = build_summary(json.loads(json.dumps(forecast_payload)), now)

    assert first == second
    assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())


def test_utc_offset_shifts_hourly_window(payload_factory, now):
    payload = payload_factory()
    # Same wall-clock times reported in UTC-7 are seven hours later in UTC.
    payload["utc_offset_seconds"] = -7 * 3600

    summary = build_summary(payload, now)

    assert summary.precip_24h == 2.0
    assert summary.precip_48h == 2.0


@pytest.mark.parametrize("section", ["current", "hourly"])
def test_missing_required_section_is_provider_error(forecast_payload, now, section):
    del forecast_payload[section]

    with pytest.raises(ProviderError):
        build_summary(forecast_payload, now)


def test_unparseable_hourly_time_is_provider_error(forecast_payload, now):
    forecast_payload["hourly"]["time"][0] = "yesterday"

    with pytest.raises(ProviderError):
        build_summary(forecast_payload, now)


@pytest.mark.asyncio
async def test_normalize_requests_units_and_windows(resort, forecast_payload, now):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=forecast_payload)

    async with _make_client(handler) as client:
        summary = await normalize(resort, client=client, now=now)

    assert len(seen) == 1
    request = seen[0]
    assert str(request.url).startswith(OPEN_METEO_URL)
    params = request.url.params
    assert params["latitude"] == "39.6061"
    assert params["longitude"] == "-106.355"
    assert params["temperature_unit"] == "fahrenheit"
    assert params["wind_speed_unit"] == "mph"
    assert params["past_hours"] == "72"
    assert params["forecast_days"] == "7"
    assert params["current"] == "temperature_2m,wind_speed_10m,weather_code,uv_index"
    assert params["hourly"] == "snowfall,temperature_2m"
    assert "snowfall_sum" in params["daily"]
    assert summary == build_summary(forecast_payload, now)


@pytest.mark.asyncio
async def test_normalize_without_coordinates(resort):
    with pytest.raises(MissingCoordinatesError):
        await normalize(replace(resort, coordinates=None))


@pytest.mark.asyncio
async def test_non_success_status_raises_provider_error(resort, now):
    calls = {"count": 0}

    def handler(_: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(503, text="unavailable")

    async with _make_client(handler) as client:
        with pytest.raises(ProviderError) as excinfo:
            await normalize(resort, client=client, now=now)

    assert excinfo.value.status == 503
    assert calls["count"] == 1


@pytest.mark.asyncio
async def test_invalid_json_raises_provider_error(resort, now):
    async with _make_client(lambda _: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(ProviderError) as excinfo:
            await normalize(resort, client=client, now=now)

    assert excinfo.value.status == 200


@pytest.mark.asyncio
async def test_transport_failure_raises_provider_error(resort, now):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _make_client(handler) as client:
        with pytest.raises(ProviderError) as excinfo:
            await normalize(resort, client=client, now=now)

    assert excinfo.value.status is None


@pytest.mark.parametrize("value", [1e30, float("inf"), float("nan")])
def test_unroundable_current_value_is_provider_error(forecast_payload, now, value):
    forecast_payload["current"]["temperature_2m"] = value

    with pytest.raises(ProviderError):
        build_summary(forecast_payload, now)


def test_huge_hourly_snowfall_is_provider_error(forecast_payload, now):
    forecast_payload["hourly"]["snowfall"][71] = 1e300

    with pytest.raises(ProviderError):
        build_summary(forecast_payload, now)


def test_out_of_range_numeric_time_is_provider_error(forecast_payload, now):
    forecast_payload["hourly"]["time"][0] = 1e20

    with pytest.raises(ProviderError):
        build_summary(forecast_payload, now)


def test_non_mapping_daily_section_is_provider_error(forecast_payload, now):
    forecast_payload["daily"] = [forecast_payload["daily"]]

    with pytest.raises(ProviderError):
        build_summary(forecast_payload, now)


@pytest.mark.asyncio
async def test_non_finite_json_from_provider_raises_provider_error(resort, forecast_payload, now):
    forecast_payload["current"]["temperature_2m"] = float("inf")
    body = json.dumps(forecast_payload).encode()

    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body, headers={"Content-Type": "application/json"})

    async with _make_client(handler) as client:
        with pytest.raises(ProviderError):
            await normalize(resort, client=client, now=now)
