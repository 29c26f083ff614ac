"""Service layer - market data retrieval, valuation and risk analysis."""

from folio.services.quote_cache import MemoryCache
from folio.services.quote_service import QuoteService
from folio.services.profile_service import ProfileService
from folio.services.historical_service import HistoricalPriceService
from folio.services.market_data_service import MarketDataService
from folio.services.portfolio_service import PortfolioService, AssetCreate, AssetUpdate
from folio.services.risk_fingerprint import calculate_risk_fingerprint

__all__ = [
    "MemoryCache",
    "QuoteService",
    "ProfileService",
    "HistoricalPriceService",
    "MarketDataService",
    "PortfolioService",
    "AssetCreate",
    "AssetUpdate",
    "calculate_risk_fingerprint",
]
