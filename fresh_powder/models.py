from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class WeatherCondition(str, Enum):
    """Domain-level sky/precipitation state shown on the dashboard."""

    SUNNY = "sunny"
    CLOUDY = "cloudy"
    SNOWING = "snowing"
    RAINING = "raining"
    WINDY = "windy"
    PARTLY_CLOUDY = "partly-cloudy"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class DailyForecast:
    """One calendar day of the forecast, in °F, mph and inches."""

    date: date
    snowfall: float
    temp_high: int
    temp_low: int
    weather_condition: WeatherCondition
    wind_speed: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "snowfall": self.snowfall,
            "temp_high": self.temp_high,
            "temp_low": self.temp_low,
            "weather_condition": self.weather_condition.value,
            "wind_speed": self.wind_speed,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DailyForecast":
        value = data["date"]
        return cls(
            date=value if isinstance(value, date) else date.fromisoformat(value),
            snowfall=float(data["snowfall"]),
            temp_high=int(data["temp_high"]),
            temp_low=int(data["temp_low"]),
            weather_condition=WeatherCondition(data["weather_condition"]),
            wind_speed=int(data["wind_speed"]),
        )


@dataclass(frozen=True)
class WeatherSummary:
    """Normalized weather derived from a single provider response.

    A summary carries no resort identity; callers overlay it onto a
    :class:`Resort` with :meth:`Resort.with_weather`. ``daily_forecast`` is
    ``None`` when the provider returned no daily section at all.
    """

    current_temp: int
    weather_condition: WeatherCondition
    precip_24h: float
    precip_48h: float
    high_temp: int
    low_temp: int
    uv_index: int
    wind_speed: int
    daily_forecast: Optional[Tuple[DailyForecast, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_temp": self.current_temp,
            "weather_condition": self.weather_condition.value,
            "precip_24h": self.precip_24h,
            "precip_48h": self.precip_48h,
            "high_temp": self.high_temp,
            "low_temp": self.low_temp,
            "uv_index": self.uv_index,
            "wind_speed": self.wind_speed,
            "daily_forecast": (
                [day.to_dict() for day in self.daily_forecast] if self.daily_forecast is not None else None
            ),
        }


@dataclass(frozen=True)
class Resort:
    """A resort from the static registry, optionally overlaid with live weather.

    The baseline values (temperature, precipitation, wind...) come from the
    registry and are what consumers see when a live fetch fails.
    """

    id: str
    name: str
    location: str
    coordinates: Optional[Coordinates] = None
    current_temp: int = 0
    weather_condition: WeatherCondition = WeatherCondition.PARTLY_CLOUDY
    precip_24h: float = 0.0
    precip_48h: float = 0.0
    base_snow: float = 0.0
    uv_index: int = 0
    wind_speed: int = 0
    lifts_open: int = 0
    total_lifts: int = 0
    high_temp: Optional[int] = None
    low_temp: Optional[int] = None
    daily_forecast: Optional[Tuple[DailyForecast, ...]] = None

    def with_weather(self, summary: WeatherSummary) -> "Resort":
        return replace(
            self,
            current_temp=summary.current_temp,
            weather_condition=summary.weather_condition,
            precip_24h=summary.precip_24h,
            precip_48h=summary.precip_48h,
            high_temp=summary.high_temp,
            low_temp=summary.low_temp,
            uv_index=summary.uv_index,
            wind_speed=summary.wind_speed,
            daily_forecast=summary.daily_forecast,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "coordinates": self.coordinates.to_dict() if self.coordinates else None,
            "current_temp": self.current_temp,
            "weather_condition": self.weather_condition.value,
            "precip_24h": self.precip_24h,
            "precip_48h": self.precip_48h,
            "base_snow": self.base_snow,
            "uv_index": self.uv_index,
            "wind_speed": self.wind_speed,
            "lifts_open": self.lifts_open,
            "total_lifts": self.total_lifts,
            "high_temp": self.high_temp,
            "low_temp": self.low_temp,
            "daily_forecast": (
                [day.to_dict() for day in self.daily_forecast] if self.daily_forecast is not None else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Resort":
        latitude = data.get("latitude")
        longitude = data.get("longitude")
        coordinates = data.get("coordinates")
        if isinstance(coordinates, Mapping):
            latitude = coordinates.get("latitude", latitude)
            longitude = coordinates.get("longitude", longitude)
        daily = data.get("daily_forecast")

        return cls(
            id=data["id"],
            name=data["name"],
            location=data.get("location", ""),
            coordinates=(
                Coordinates(float(latitude), float(longitude))
                if latitude is not None and longitude is not None
                else None
            ),
            current_temp=int(data.get("current_temp", 0)),
            weather_condition=WeatherCondition(data.get("weather_condition", WeatherCondition.PARTLY_CLOUDY.value)),
            precip_24h=float(data.get("precip_24h", 0.0)),
            precip_48h=float(data.get("precip_48h", 0.0)),
            base_snow=float(data.get("base_snow", 0.0)),
            uv_index=int(data.get("uv_index", 0)),
            wind_speed=int(data.get("wind_speed", 0)),
            lifts_open=int(data.get("lifts_open", 0)),
            total_lifts=int(data.get("total_lifts", 0)),
            high_temp=_optional_int(data.get("high_temp")),
            low_temp=_optional_int(data.get("low_temp")),
            daily_forecast=tuple(DailyForecast.from_dict(day) for day in daily) if daily is not None else None,
        )


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None
