"""View models for service outputs."""

from folio.domain.views.market import (
    Quote,
    CompanyProfile,
    HistoricalPoint,
    MarketDataRequest,
    MarketDataResult,
)
from folio.domain.views.portfolio import (
    PortfolioSummary,
    RiskDimension,
    RiskFingerprint,
    LiveQuote,
    PriceRefreshResult,
)

__all__ = [
    "Quote",
    "CompanyProfile",
    "HistoricalPoint",
    "MarketDataRequest",
    "MarketDataResult",
    "PortfolioSummary",
    "RiskDimension",
    "RiskFingerprint",
    "LiveQuote",
    "PriceRefreshResult",
]
