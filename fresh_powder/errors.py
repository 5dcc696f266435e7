from __future__ import annotations

from typing import Optional


class WeatherError(Exception):
    """Base class for failures while normalizing resort weather."""


class MissingCoordinatesError(WeatherError):
    def __init__(self, resort_id: Optional[str]) -> None:
        self.resort_id = resort_id
        super().__init__(f"Resort coordinates are required: {resort_id}")


class ProviderError(WeatherError):
    """The weather provider returned an error status or an unusable payload."""

    def __init__(self, message: str, *, status: Optional[int] = None, url: Optional[str] = None) -> None:
        self.status = status
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.status is not None:
            return f"{message} (status={self.status})"
        return message
