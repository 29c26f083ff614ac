"""Market data service: symbol fan-out/fan-in over the retrieval services."""

import logging
from typing import Optional, Union

from folio.domain.models import HistoricalRange
from folio.domain.views import (
    CompanyProfile,
    HistoricalPoint,
    MarketDataRequest,
    MarketDataResult,
    Quote,
)
from folio.services.historical_service import HistoricalPriceService
from folio.services.profile_service import ProfileService
from folio.services.quote_service import QuoteService
from folio.services.symbol_normalizer import normalize_symbol

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Entry point for market data used by the portfolio and the API.

    Normalizes user-facing symbols, deduplicates them, fetches quotes once per
    canonical symbol and maps the results back to what the user entered.
    """

    def __init__(
        self,
        quotes: QuoteService,
        profiles: ProfileService,
        historical: HistoricalPriceService,
    ):
        self._quotes = quotes
        self._profiles = profiles
        self._historical = historical

    async def get_market_data_for_symbols(
        self,
        requests: list[MarketDataRequest],
    ) -> list[MarketDataResult]:
        """
        Return a result for every requested symbol that could be quoted.

        Symbols are fetched once per canonical symbol. When several originals
        normalize to the same canonical symbol (BTC and BTCUSD), each gets its
        own result carrying the same price. A quote whose symbol is not in the
        map falls back to its own symbol as original_symbol.
        """
        if not requests:
            return []

        originals: dict[str, list[str]] = {}
        for req in requests:
            normalized = normalize_symbol(req.symbol, req.asset_type)
            bucket = originals.setdefault(normalized, [])
            if req.symbol not in bucket:
                bucket.append(req.symbol)

        quotes = await self._quotes.get_quotes(list(originals))
        logger.debug("Resolved %d of %d symbols", len(quotes), len(originals))

        return [
            MarketDataResult(
                symbol=q.symbol,
                original_symbol=original,
                price=q.price,
                change_percent=q.change_percent,
                day_change=q.day_change,
            )
            for q in quotes
            for original in originals.get(q.symbol, [q.symbol])
        ]

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        return await self._quotes.get_quote(symbol)

    async def get_quotes(self, symbols: list[str]) -> list[Quote]:
        return await self._quotes.get_quotes(symbols)

    async def get_historical_prices(
        self,
        symbol: str,
        range_code: Union[str, HistoricalRange] = HistoricalRange.ONE_YEAR,
    ) -> list[HistoricalPoint]:
        """History for a user-facing symbol; the symbol is normalized first."""
        return await self._historical.get_historical_prices(normalize_symbol(symbol), range_code)

    async def get_company_profile(self, symbol: str) -> Optional[CompanyProfile]:
        return await self._profiles.get_company_profile(symbol)

    async def get_company_profiles(self, symbols: list[str]) -> list[CompanyProfile]:
        return await self._profiles.get_company_profiles(symbols)
