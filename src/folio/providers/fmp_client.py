"""Financial Modeling Prep REST client with timeout and retry."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from folio.config.settings import FMP_BASE_URL
from folio.core.exceptions import MarketDataError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_BACKOFF_SECONDS = 1.0


class FmpClient:
    """
    Async client for the FMP "stable" API.

    Every call is retried up to `max_retries` times (3 attempts by default),
    sleeping `backoff_seconds * attempt_number` between attempts. Non-2xx
    responses, timeouts and transport errors all count as failures. Once the
    last attempt fails a MarketDataError is raised.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = FMP_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._max_retries = max_retries
        self._backoff = backoff_seconds
        self._sleep = sleep
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds)
        )

    async def get(self, endpoint: str, **params: Any) -> Any:
        """Fetch `endpoint` and return the decoded JSON body."""
        url = f"{self._base_url}/{endpoint.lstrip('/')}"
        query = {**params, "apikey": self._api_key}

        for attempt in range(self._max_retries + 1):
            try:
                response = await self._client.get(url, params=query)
                response.raise_for_status()
                return response.json()
            except (httpx.HTTPError, ValueError) as e:
                if attempt == self._max_retries:
                    logger.error(
                        "[FMP] %s failed after %d attempts: %s",
                        endpoint,
                        attempt + 1,
                        e,
                    )
                    raise MarketDataError(endpoint, str(e)) from e
                logger.warning("[FMP] %s attempt %d failed, retrying: %s", endpoint, attempt + 1, e)
                await self._sleep(self._backoff * (attempt + 1))

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "FmpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
