"""
Unit tests for the offline stub client.

Tests cover:
- Provider-shaped payloads for each endpoint
- Deterministic history
- Unknown symbols
"""

from datetime import date

from folio.providers.stub_provider import StubMarketDataClient
from folio.services import MemoryCache, QuoteService


class TestStubMarketDataClient:
    """Tests for StubMarketDataClient."""

    async def test_quote_payload_is_mappable(self):
        """
        GIVEN the stub client behind a real QuoteService
        WHEN AAPL is requested
        THEN a quote with the stub price comes back
        """
        service = QuoteService(StubMarketDataClient(), MemoryCache(300))

        quote = await service.get_quote("AAPL")

        assert quote.symbol == "AAPL"
        assert quote.price == 185.50
        assert quote.day_change == 1.25

    async def test_unknown_symbol_is_empty(self):
        client = StubMarketDataClient()

        assert await client.get("quote", symbol="NOPE") == []
        assert await client.get("profile", symbol="NOPE") == []
        assert await client.get("unknown-endpoint", symbol="AAPL") == []

    async def test_history_is_deterministic_and_newest_first(self):
        today = date(2024, 6, 15)
        first = await StubMarketDataClient(seed=7, today=lambda: today).get(
            "historical-price-eod/full", symbol="MSFT"
        )
        second = await StubMarketDataClient(seed=7, today=lambda: today).get(
            "historical-price-eod/full", symbol="MSFT"
        )

        assert first == second
        assert first[0]["date"] == "2024-06-15"
        assert first[0]["date"] > first[1]["date"]
        assert first[0]["close"] == 378.25

    async def test_profile_payload(self):
        data = await StubMarketDataClient().get("profile", symbol="aapl")

        assert data[0]["companyName"] == "Apple Inc."
        assert data[0]["country"] == "US"
