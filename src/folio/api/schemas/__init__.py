"""Pydantic schemas for API request/response."""

from folio.api.schemas.market_data import (
    Envelope,
    QuoteResponse,
    CompanyProfileResponse,
    HistoricalPointResponse,
    MarketDataResultResponse,
    MarketDataAssetRequest,
    MarketDataRequestBody,
)
from folio.api.schemas.portfolio import (
    AssetCreateRequest,
    AssetUpdateRequest,
    AssetResponse,
    AssetListResponse,
    PortfolioSummaryResponse,
    RiskDimensionResponse,
    RiskFingerprintResponse,
    LiveQuoteResponse,
    PriceRefreshResponse,
    SparklinesResponse,
    ConnectionRemovalResponse,
)

__all__ = [
    "Envelope",
    "QuoteResponse",
    "CompanyProfileResponse",
    "HistoricalPointResponse",
    "MarketDataResultResponse",
    "MarketDataAssetRequest",
    "MarketDataRequestBody",
    "AssetCreateRequest",
    "AssetUpdateRequest",
    "AssetResponse",
    "AssetListResponse",
    "PortfolioSummaryResponse",
    "RiskDimensionResponse",
    "RiskFingerprintResponse",
    "LiveQuoteResponse",
    "PriceRefreshResponse",
    "SparklinesResponse",
    "ConnectionRemovalResponse",
]
