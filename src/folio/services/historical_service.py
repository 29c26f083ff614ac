"""Historical end-of-day prices for charting and sparklines."""

import logging
from datetime import date
from typing import Callable, Union

from folio.core.exceptions import ValidationError
from folio.core.timezone import cutoff_date, today_utc
from folio.domain.models import HistoricalRange
from folio.domain.views import HistoricalPoint
from folio.providers.market_data_provider import MarketDataClient
from folio.services.quote_cache import MemoryCache

logger = logging.getLogger(__name__)


def parse_range(value: Union[str, HistoricalRange]) -> HistoricalRange:
    """Validate a range code such as "1M" or "5Y"."""
    try:
        return HistoricalRange(value)
    except ValueError:
        allowed = ", ".join(r.value for r in HistoricalRange)
        raise ValidationError(f"Invalid range {value!r}; expected one of {allowed}") from None


class HistoricalPriceService:
    """
    Fetches the full daily history for a symbol and trims it to a lookback window.

    Results are ascending by date and cached per (symbol, range). An empty
    upstream answer and a failed fetch both yield an empty list.
    """

    def __init__(
        self,
        client: MarketDataClient,
        cache: MemoryCache[list[HistoricalPoint]],
        today: Callable[[], date] = today_utc,
    ):
        self._client = client
        self._cache = cache
        self._today = today

    async def get_historical_prices(
        self,
        symbol: str,
        range_code: Union[str, HistoricalRange] = HistoricalRange.ONE_YEAR,
    ) -> list[HistoricalPoint]:
        """
        Return (date, close) points within the range, oldest first.

        Raises ValidationError for an unknown range code.
        """
        lookback = parse_range(range_code)
        cache_key = f"{symbol}_{lookback.value}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            data = await self._client.get("historical-price-eod/full", symbol=symbol)
            if not isinstance(data, list) or not data:
                return []

            cutoff = cutoff_date(lookback.days, self._today())
            points = [
                HistoricalPoint(date=item["date"], price=item["close"])
                for item in data
                if item["date"] >= cutoff
            ]
        except Exception as e:
            logger.error("[MarketData] Failed to fetch historical for %s: %s", symbol, e)
            return []

        # Provider answers newest first
        points.sort(key=lambda p: p.date)
        self._cache.set(cache_key, points)
        return points
