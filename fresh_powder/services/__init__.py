"""Weather fetching and batch refresh for the resort dashboard."""

from .refresh import FetchOutcome, fetch_outcomes, normalize_all
from .weather import build_summary, forecast_params, normalize

__all__ = [
    "FetchOutcome",
    "build_summary",
    "fetch_outcomes",
    "forecast_params",
    "normalize",
    "normalize_all",
]
