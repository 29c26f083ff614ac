"""Quote retrieval with TTL caching and per-symbol failure isolation."""

import asyncio
import logging
from typing import Optional

from folio.domain.views import Quote
from folio.providers.market_data_provider import MarketDataClient
from folio.services.quote_cache import MemoryCache

logger = logging.getLogger(__name__)


def _to_quote(item: dict) -> Quote:
    """Map a provider quote row into a Quote, defaulting missing metrics to 0."""
    return Quote(
        symbol=item["symbol"],
        price=item.get("price") or 0.0,
        change_percent=item.get("changePercentage") or 0.0,
        day_change=item.get("change") or 0.0,
    )


class QuoteService:
    """
    Fetches quotes from the provider's `quote` endpoint.

    An unknown symbol (empty array) and a failed fetch both come back as None;
    market data is best-effort, so neither is raised to the caller.
    """

    def __init__(self, client: MarketDataClient, cache: MemoryCache[Quote]):
        self._client = client
        self._cache = cache

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        """Return the quote for a normalized symbol, from cache when fresh."""
        cached = self._cache.get(symbol)
        if cached is not None:
            return cached
        return await self._fetch_quote(symbol)

    async def get_quotes(self, symbols: list[str]) -> list[Quote]:
        """
        Return quotes for every symbol that could be resolved.

        Uncached symbols are fetched concurrently, one request each. A failed
        symbol is omitted; it never aborts the batch. Cached quotes come first,
        so output order does not follow input order.
        """
        if not symbols:
            return []

        cached_results: list[Quote] = []
        uncached: list[str] = []
        for symbol in symbols:
            cached = self._cache.get(symbol)
            if cached is not None:
                cached_results.append(cached)
            else:
                uncached.append(symbol)

        if not uncached:
            return cached_results

        results = await asyncio.gather(
            *(self._fetch_quote(s) for s in uncached),
            return_exceptions=True,
        )
        fetched = [r for r in results if isinstance(r, Quote)]
        return cached_results + fetched

    async def _fetch_quote(self, symbol: str) -> Optional[Quote]:
        try:
            data = await self._client.get("quote", symbol=symbol)
        except Exception as e:
            logger.error("[MarketData] Failed to fetch quote for %s: %s", symbol, e)
            return None

        if not isinstance(data, list) or not data:
            return None

        try:
            quote = _to_quote(data[0])
        except (KeyError, TypeError) as e:
            logger.error("[MarketData] Malformed quote for %s: %s", symbol, e)
            return None

        # Cached under the symbol the provider answered with
        self._cache.set(quote.symbol, quote)
        return quote
