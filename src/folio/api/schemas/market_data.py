"""Pydantic schemas for market data endpoints."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Every market data response: a payload plus a success flag."""

    success: bool
    data: T
    error: Optional[str] = None


class QuoteResponse(BaseModel):
    """Response schema for a quote."""

    model_config = {"from_attributes": True}

    symbol: str
    price: float
    change_percent: float
    day_change: float


class CompanyProfileResponse(BaseModel):
    """Response schema for a company profile."""

    model_config = {"from_attributes": True}

    symbol: str
    company_name: str
    sector: str
    country: str
    industry: str
    market_cap: float


class HistoricalPointResponse(BaseModel):
    """Response schema for one historical close."""

    model_config = {"from_attributes": True}

    date: str
    price: float


class MarketDataResultResponse(BaseModel):
    """Response schema for a priced user-facing symbol."""

    model_config = {"from_attributes": True}

    symbol: str
    original_symbol: str
    price: float
    change_percent: float
    day_change: float


class MarketDataAssetRequest(BaseModel):
    """One symbol to price, with the asset type used for normalization."""

    symbol: str
    asset_type: Optional[str] = None


class MarketDataRequestBody(BaseModel):
    """Request schema for batch market data."""

    assets: list[MarketDataAssetRequest] = Field(default_factory=list)
