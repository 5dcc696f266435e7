"""Normalized ski resort weather from Open-Meteo."""

from .errors import MissingCoordinatesError, ProviderError, WeatherError
from .models import Coordinates, DailyForecast, Resort, WeatherCondition, WeatherSummary
from .normalization import cm_to_inches, map_weather_code
from .resorts import all_resorts, coldest_first
from .services import normalize, normalize_all

__all__ = [
    "Coordinates",
    "DailyForecast",
    "MissingCoordinatesError",
    "ProviderError",
    "Resort",
    "WeatherCondition",
    "WeatherError",
    "WeatherSummary",
    "all_resorts",
    "cm_to_inches",
    "coldest_first",
    "map_weather_code",
    "normalize",
    "normalize_all",
]
