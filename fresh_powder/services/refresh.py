from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import httpx

from fresh_powder.errors import MissingCoordinatesError, ProviderError, WeatherError
from fresh_powder.http_client import build_client
from fresh_powder.logging import get_logger
from fresh_powder.models import Resort, WeatherSummary
from fresh_powder.services.weather import normalize

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one resort's live fetch within a batch."""

    resort: Resort
    summary: Optional[WeatherSummary] = None
    error: Optional[WeatherError] = None

    @property
    def ok(self) -> bool:
        return self.summary is not None

    def merged(self) -> Resort:
        """The live record on success, the untouched static record otherwise."""
        if self.summary is None:
            return self.resort
        return self.resort.with_weather(self.summary)


async def _attempt(resort: Resort, client: httpx.AsyncClient, now: datetime) -> FetchOutcome:
    trace_id = uuid.uuid4().hex
    try:
        summary = await normalize(resort, client=client, now=now, trace_id=trace_id)
    except (MissingCoordinatesError, ProviderError) as exc:
        logger.warning(
            "refresh.fallback",
            trace_id=trace_id,
            resort_id=resort.id,
            name=resort.name,
            error=str(exc),
        )
        return FetchOutcome(resort=resort, error=exc)
    return FetchOutcome(resort=resort, summary=summary)


async def fetch_outcomes(
    resorts: Sequence[Resort],
    *,
    client: Optional[httpx.AsyncClient] = None,
    now: Optional[datetime] = None,
) -> List[FetchOutcome]:
    """Fetch every resort concurrently; one outcome per resort, input order."""

    now = now or datetime.now(timezone.utc)
    if client is None:
        async with build_client() as owned_client:
            return await fetch_outcomes(resorts, client=owned_client, now=now)

    return list(await asyncio.gather(*(_attempt(resort, client, now) for resort in resorts)))


async def normalize_all(
    resorts: Sequence[Resort],
    *,
    client: Optional[httpx.AsyncClient] = None,
    now: Optional[datetime] = None,
) -> List[Resort]:
    """Overlay live weather onto each resort, keeping static data on failure."""

    logger.info("refresh.start", resorts=len(resorts))
    outcomes = await fetch_outcomes(resorts, client=client, now=now)
    logger.info(
        "refresh.complete",
        resorts=len(outcomes),
        failed=[outcome.resort.id for outcome in outcomes if not outcome.ok],
    )
    return [outcome.merged() for outcome in outcomes]
