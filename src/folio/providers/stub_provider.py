"""Stub market data client for offline/testing use."""

import random
from datetime import date, timedelta
from typing import Any, Callable

from folio.core.timezone import today_utc

_HISTORY_DAYS = 1825


# Deterministic fake quotes: symbol -> (price, change)
_STUB_QUOTES: dict[str, tuple[float, float]] = {
    "AAPL": (185.50, 1.25),
    "GOOGL": (142.75, 1.25),
    "MSFT": (378.25, 1.45),
    "AMZN": (178.50, 1.25),
    "TSLA": (248.75, -1.35),
    "NVDA": (485.25, 2.75),
    "SPY": (485.25, 1.15),
    "QQQ": (418.75, 1.25),
    "VTI": (252.30, 0.50),
    "BTCUSD": (52000.00, 850.00),
    "ETHUSD": (2800.00, -35.00),
    "SOLUSD": (105.40, 3.10),
    "XAUUSD": (2050.00, 6.50),
    "XAGUSD": (25.50, -0.12),
}

_STUB_PROFILES: dict[str, tuple[str, str, str, str, float]] = {
    "AAPL": ("Apple Inc.", "Technology", "US", "Consumer Electronics", 2.9e12),
    "GOOGL": ("Alphabet Inc.", "Communication Services", "US", "Internet Content & Information", 1.8e12),
    "MSFT": ("Microsoft Corporation", "Technology", "US", "Software - Infrastructure", 2.8e12),
    "AMZN": ("Amazon.com, Inc.", "Consumer Cyclical", "US", "Internet Retail", 1.9e12),
    "TSLA": ("Tesla, Inc.", "Consumer Cyclical", "US", "Auto - Manufacturers", 7.9e11),
    "NVDA": ("NVIDIA Corporation", "Technology", "US", "Semiconductors", 1.2e12),
    "SPY": ("SPDR S&P 500 ETF Trust", "Financial Services", "US", "Asset Management", 4.9e11),
}


class StubMarketDataClient:
    """
    Stub client answering provider endpoints with deterministic payloads.

    Payloads use the provider's field names so the retrieval services run
    their real mapping code. Unknown symbols answer with an empty array.
    """

    def __init__(self, seed: int = 42, today: Callable[[], date] = today_utc):
        self._seed = seed
        self._today = today

    async def get(self, endpoint: str, **params: Any) -> Any:
        """Return the stub payload for a provider endpoint."""
        symbol = str(params.get("symbol", "")).upper()
        if endpoint == "quote":
            return self._quote(symbol)
        if endpoint == "profile":
            return self._profile(symbol)
        if endpoint == "historical-price-eod/full":
            return self._historical(symbol)
        return []

    def _quote(self, symbol: str) -> list[dict]:
        if symbol not in _STUB_QUOTES:
            return []
        price, change = _STUB_QUOTES[symbol]
        previous = price - change
        return [
            {
                "symbol": symbol,
                "price": price,
                "change": change,
                "changePercentage": round(change / previous * 100, 4),
            }
        ]

    def _profile(self, symbol: str) -> list[dict]:
        if symbol not in _STUB_PROFILES:
            return []
        name, sector, country, industry, market_cap = _STUB_PROFILES[symbol]
        return [
            {
                "symbol": symbol,
                "companyName": name,
                "sector": sector,
                "country": country,
                "industry": industry,
                "marketCap": market_cap,
            }
        ]

    def _historical(self, symbol: str) -> list[dict]:
        """Daily closes for the last five years, newest first like the provider."""
        if symbol not in _STUB_QUOTES:
            return []
        rng = random.Random(f"{self._seed}:{symbol}")
        price, _ = _STUB_QUOTES[symbol]
        today = self._today()
        rows = []
        for offset in range(_HISTORY_DAYS):
            rows.append(
                {
                    "symbol": symbol,
                    "date": (today - timedelta(days=offset)).isoformat(),
                    "close": round(price, 2),
                }
            )
            # Walk backwards with a small deterministic drift
            price = price / (1 + (rng.random() - 0.5) * 0.02)
        return rows
