from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from .errors import ProviderError
from .models import DailyForecast, WeatherCondition

Converter = Callable[[Any], Any]

CM_TO_INCHES = 0.393701

_WHOLE = Decimal("1")
_TENTH = Decimal("0.1")


def _quantize(value: Any, exponent: Decimal) -> Decimal:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Cannot round non-finite value: {value!r}")
    # repr() gives the shortest decimal form, so 2.45 rounds as written.
    return Decimal(repr(number)).quantize(exponent, rounding=ROUND_HALF_UP)


def round_whole(value: Any) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(_quantize(value, _WHOLE))


def round_tenth(value: Any) -> float:
    """Round to one decimal place, halves away from zero."""
    return float(_quantize(value, _TENTH))


def cm_to_inches(value: Any) -> float:
    if value is None:
        return 0.0
    return round_tenth(float(value) * CM_TO_INCHES)


DEFAULT_CONDITION = WeatherCondition.PARTLY_CLOUDY

# WMO interpretation codes as reported by Open-Meteo, grouped by condition.
_CODE_GROUPS: Tuple[Tuple[Iterable[int], WeatherCondition], ...] = (
    ((0,), WeatherCondition.SUNNY),
    ((1, 2), WeatherCondition.PARTLY_CLOUDY),
    ((3, 45, 48), WeatherCondition.CLOUDY),
    (range(51, 68), WeatherCondition.RAINING),  # drizzle, rain, freezing rain
    (range(71, 78), WeatherCondition.SNOWING),  # snow fall, snow grains
    (range(80, 83), WeatherCondition.RAINING),  # rain showers
    ((85, 86), WeatherCondition.SNOWING),  # snow showers
    (range(95, 100), WeatherCondition.RAINING),  # thunderstorm
)


def _build_code_table() -> Dict[int, WeatherCondition]:
    table = {code: DEFAULT_CONDITION for code in range(100)}
    for codes, condition in _CODE_GROUPS:
        for code in codes:
            table[code] = condition
    return table


WEATHER_CODES: Dict[int, WeatherCondition] = _build_code_table()


def map_weather_code(code: Any) -> WeatherCondition:
    """Translate a provider condition code into a :class:`WeatherCondition`.

    Unknown, missing and out-of-range codes map to ``partly-cloudy``.
    """
    if code is None or isinstance(code, bool):
        return DEFAULT_CONDITION
    try:
        numeric = float(code)
    except (TypeError, ValueError):
        return DEFAULT_CONDITION
    if not numeric.is_integer():
        return DEFAULT_CONDITION
    return WEATHER_CODES.get(int(numeric), DEFAULT_CONDITION)


@dataclass(frozen=True)
class FieldMapping:
    """Describes how to pull and transform a raw metric into a normalized field."""

    source: str
    converter: Optional[Converter] = None
    required: bool = True

    def extract(self, payload: Mapping[str, Any], *, section: str = "") -> Any:
        value = payload.get(self.source)
        if value is None:
            if self.required:
                raise ProviderError(f"Missing {section}.{self.source} in provider response")
            return None
        if self.converter:
            value = self.converter(value)
        return value


CURRENT_FIELDS: Dict[str, FieldMapping] = {
    "current_temp": FieldMapping("temperature_2m", converter=round_whole),
    "wind_speed": FieldMapping("wind_speed_10m", converter=round_whole),
    "weather_condition": FieldMapping("weather_code", converter=map_weather_code, required=False),
    "uv_index": FieldMapping("uv_index", converter=round_whole),
}

DAILY_FIELDS: Dict[str, FieldMapping] = {
    "date": FieldMapping("time", converter=date.fromisoformat),
    "snowfall": FieldMapping("snowfall_sum", converter=cm_to_inches, required=False),
    "temp_high": FieldMapping("temperature_2m_max", converter=round_whole),
    "temp_low": FieldMapping("temperature_2m_min", converter=round_whole),
    "weather_condition": FieldMapping("weather_code", converter=map_weather_code, required=False),
    "wind_speed": FieldMapping("wind_speed_10m_max", converter=round_whole),
}


def normalize_current(current: Mapping[str, Any]) -> Dict[str, Any]:
    """Normalize the provider's ``current`` section into summary fields."""
    fields = {name: spec.extract(current, section="current") for name, spec in CURRENT_FIELDS.items()}
    if fields["weather_condition"] is None:
        fields["weather_condition"] = DEFAULT_CONDITION
    return fields


def normalize_daily(daily: Mapping[str, Any]) -> Tuple[DailyForecast, ...]:
    """Turn the provider's parallel daily arrays into one entry per day.

    Entries keep the provider's order. A missing snowfall sum counts as zero
    and a missing code falls back to the default condition.
    """
    days = daily.get("time") or []
    forecast = []
    for index in range(len(days)):
        row = {spec.source: _at(daily.get(spec.source), index) for spec in DAILY_FIELDS.values()}
        values = {name: spec.extract(row, section="daily") for name, spec in DAILY_FIELDS.items()}
        if values["snowfall"] is None:
            values["snowfall"] = 0.0
        if values["weather_condition"] is None:
            values["weather_condition"] = DEFAULT_CONDITION
        forecast.append(DailyForecast(**values))
    return tuple(forecast)


def _at(values: Any, index: int) -> Any:
    if not values or index >= len(values):
        return None
    return values[index]
