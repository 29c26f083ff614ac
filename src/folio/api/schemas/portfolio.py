"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from folio.core.timezone import parse_date
from folio.domain.models import AssetType, RiskLevel


def _iso_date(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    return parse_date(value).isoformat()


class AssetCreateRequest(BaseModel):
    """Request schema for adding an asset."""

    asset_type: AssetType
    name: str = Field(..., min_length=1, max_length=255)
    quantity: float = Field(..., ge=0)
    purchase_price: float = Field(..., ge=0)
    current_price: float = Field(..., ge=0)
    symbol: Optional[str] = Field(default=None, max_length=20)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    purchase_date: Optional[str] = None
    address: Optional[str] = None
    monthly_income: Optional[float] = None
    monthly_rent: Optional[float] = None
    due_date: Optional[str] = None
    estimated_value: Optional[float] = None
    interest_rate: Optional[float] = None
    plaid_account_id: Optional[str] = None
    plaid_item_id: Optional[str] = None
    snaptrade_account_id: Optional[str] = None
    coinbase_account_id: Optional[str] = None

    @field_validator("purchase_date", "due_date")
    @classmethod
    def normalize_date(cls, v: Optional[str]) -> Optional[str]:
        return _iso_date(v)


class AssetUpdateRequest(BaseModel):
    """Request schema for a partial asset update."""

    asset_type: Optional[AssetType] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    quantity: Optional[float] = Field(default=None, ge=0)
    purchase_price: Optional[float] = Field(default=None, ge=0)
    current_price: Optional[float] = Field(default=None, ge=0)
    symbol: Optional[str] = Field(default=None, max_length=20)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    purchase_date: Optional[str] = None
    address: Optional[str] = None
    monthly_income: Optional[float] = None
    monthly_rent: Optional[float] = None
    due_date: Optional[str] = None
    estimated_value: Optional[float] = None
    interest_rate: Optional[float] = None

    @field_validator("purchase_date", "due_date")
    @classmethod
    def normalize_date(cls, v: Optional[str]) -> Optional[str]:
        return _iso_date(v)


class AssetResponse(BaseModel):
    """Response schema for a single asset, including derived value and cost."""

    model_config = {"from_attributes": True}

    asset_id: str
    asset_type: AssetType
    name: str
    symbol: Optional[str] = None
    quantity: float
    purchase_price: float
    current_price: float
    currency: str
    added_at: Optional[int] = None
    purchase_date: Optional[str] = None
    address: Optional[str] = None
    monthly_income: Optional[float] = None
    monthly_rent: Optional[float] = None
    due_date: Optional[str] = None
    estimated_value: Optional[float] = None
    interest_rate: Optional[float] = None
    plaid_account_id: Optional[str] = None
    plaid_item_id: Optional[str] = None
    snaptrade_account_id: Optional[str] = None
    coinbase_account_id: Optional[str] = None
    value: float
    cost: float


class AssetListResponse(BaseModel):
    """Response schema for listing assets."""

    assets: list[AssetResponse]
    count: int


class PortfolioSummaryResponse(BaseModel):
    """Response schema for portfolio valuation."""

    total_value: float
    total_cost: float
    total_gain: float
    total_gain_percent: float
    asset_allocation: dict[AssetType, float]
    assets_by_type: dict[AssetType, list[AssetResponse]]


class RiskDimensionResponse(BaseModel):
    """Response schema for one risk dimension."""

    model_config = {"from_attributes": True}

    key: str
    label: str
    score: float
    description: str


class RiskFingerprintResponse(BaseModel):
    """Response schema for the risk fingerprint."""

    model_config = {"from_attributes": True}

    dimensions: list[RiskDimensionResponse]
    interpretation: str
    badges: list[str]
    overall_risk_level: RiskLevel


class LiveQuoteResponse(BaseModel):
    """Latest quote metrics for a symbol."""

    model_config = {"from_attributes": True}

    price: float
    change_percent: float
    day_change: float


class PriceRefreshResponse(BaseModel):
    """Response schema for a price refresh."""

    fetched_count: int
    updated_count: int
    skipped: bool
    refreshed_at: Optional[datetime] = None
    quotes: dict[str, LiveQuoteResponse] = Field(default_factory=dict)


class SparklinesResponse(BaseModel):
    """Response schema for sparkline series keyed by symbol."""

    sparklines: dict[str, list[float]]


class ConnectionRemovalResponse(BaseModel):
    """Response schema for removing a connection's assets."""

    source: str
    removed: int
