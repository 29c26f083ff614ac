"""Market data providers module."""

from folio.providers.market_data_provider import MarketDataClient
from folio.providers.fmp_client import FmpClient
from folio.providers.stub_provider import StubMarketDataClient

__all__ = [
    "MarketDataClient",
    "FmpClient",
    "StubMarketDataClient",
]
