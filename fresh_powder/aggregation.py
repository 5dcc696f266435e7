from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence, Tuple

from .errors import ProviderError
from .normalization import cm_to_inches, round_whole

HOURS_FOR_TODAY = 24


@dataclass(frozen=True)
class Sample:
    """A single hourly reading; ``depth`` is in the provider's unit (cm)."""

    timestamp: datetime
    depth: Optional[float] = None


def sum_window(samples: Iterable[Sample], window_hours: float, now: datetime) -> float:
    """Sum sample depths falling in ``[now - window_hours, now]``.

    Both boundaries are inclusive. Missing depths count as zero and an empty
    window sums to ``0.0``.
    """
    cutoff = now - timedelta(hours=window_hours)
    total = 0.0
    for sample in samples:
        if cutoff <= sample.timestamp <= now:
            total += sample.depth or 0.0
    return total


def snowfall_in_window(samples: Iterable[Sample], window_hours: float, now: datetime) -> float:
    """Trailing snowfall in inches, rounded to one decimal."""
    return cm_to_inches(sum_window(samples, window_hours, now))


def high_low(temperatures: Sequence[Optional[float]]) -> Tuple[int, int]:
    """High and low of the first 24 hourly readings of the series."""
    readings = [value for value in temperatures[:HOURS_FOR_TODAY] if value is not None]
    if not readings:
        raise ProviderError("No hourly temperatures in provider response")
    return round_whole(max(readings)), round_whole(min(readings))
