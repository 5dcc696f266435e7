from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from .config import HttpConfig, app_config
from .errors import ProviderError
from .logging import get_logger

logger = get_logger(__name__)


def build_client(config: Optional[HttpConfig] = None) -> httpx.AsyncClient:
    config = config or app_config.http
    return httpx.AsyncClient(
        timeout=config.timeout,
        headers={"User-Agent": config.user_agent},
    )


class ProviderFetcher:
    """Single-shot JSON GETs against the weather provider.

    Every failure surfaces as :class:`ProviderError`; retrying is left to the
    caller.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def get_json(
        self, url: str, params: Mapping[str, Any], *, trace_id: str | None = None
    ) -> Any:
        logger.info("http.fetch", trace_id=trace_id, url=url)
        try:
            response = await self.client.get(url, params=params)
        except httpx.RequestError as exc:
            raise ProviderError(f"Request to weather provider failed: {exc}", url=url) from exc

        if not response.is_success:
            raise ProviderError(
                "Weather provider error",
                status=response.status_code,
                url=url,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(
                "Weather provider returned invalid JSON",
                status=response.status_code,
                url=url,
            ) from exc
