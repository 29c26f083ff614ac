"""Domain layer - pure business models with no external dependencies."""

from folio.domain.models import (
    Asset,
    AssetType,
    ConnectionSource,
    HistoricalRange,
    RiskLevel,
    MARKET_PRICE_TYPES,
)

__all__ = [
    "Asset",
    "AssetType",
    "ConnectionSource",
    "HistoricalRange",
    "RiskLevel",
    "MARKET_PRICE_TYPES",
]
