"""Company profile retrieval with long-lived caching."""

import asyncio
import logging
from typing import Optional

from folio.domain.views import CompanyProfile
from folio.providers.market_data_provider import MarketDataClient
from folio.services.quote_cache import MemoryCache

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Fetches company metadata from the provider's `profile` endpoint.

    Profiles change rarely, so the injected cache is expected to carry a long
    TTL. Unknown symbols and failures both return None.
    """

    def __init__(self, client: MarketDataClient, cache: MemoryCache[CompanyProfile]):
        self._client = client
        self._cache = cache

    async def get_company_profile(self, symbol: str) -> Optional[CompanyProfile]:
        cached = self._cache.get(symbol)
        if cached is not None:
            return cached

        try:
            data = await self._client.get("profile", symbol=symbol)
        except Exception as e:
            logger.error("[MarketData] Failed to fetch profile for %s: %s", symbol, e)
            return None

        if not isinstance(data, list) or not data:
            return None

        item = data[0]
        if not isinstance(item, dict):
            logger.error("[MarketData] Malformed profile for %s: %r", symbol, item)
            return None

        profile = CompanyProfile(
            symbol=item.get("symbol") or symbol,
            company_name=item.get("companyName") or "",
            sector=item.get("sector") or "",
            country=item.get("country") or "",
            industry=item.get("industry") or "",
            market_cap=item.get("marketCap") or 0,
        )
        self._cache.set(symbol, profile)
        return profile

    async def get_company_profiles(self, symbols: list[str]) -> list[CompanyProfile]:
        """Cached profiles plus concurrently fetched ones; failures are dropped."""
        results: list[CompanyProfile] = []
        uncached: list[str] = []
        for symbol in symbols:
            cached = self._cache.get(symbol)
            if cached is not None:
                results.append(cached)
            else:
                uncached.append(symbol)

        if not uncached:
            return results

        fetched = await asyncio.gather(
            *(self.get_company_profile(s) for s in uncached),
            return_exceptions=True,
        )
        results.extend(p for p in fetched if isinstance(p, CompanyProfile))
        return results
