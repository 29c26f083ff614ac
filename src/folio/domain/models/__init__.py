"""Domain models package."""

from folio.domain.models.enums import (
    AssetType,
    ConnectionSource,
    HistoricalRange,
    RiskLevel,
    MARKET_PRICE_TYPES,
)
from folio.domain.models.asset import Asset

__all__ = [
    "AssetType",
    "ConnectionSource",
    "HistoricalRange",
    "RiskLevel",
    "MARKET_PRICE_TYPES",
    "Asset",
]
