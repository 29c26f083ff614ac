"""View models for portfolio valuation and risk outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from folio.domain.models import Asset, AssetType, RiskLevel


@dataclass
class PortfolioSummary:
    """Valuation totals and per-type breakdown of the asset collection."""

    total_value: float = 0.0
    total_cost: float = 0.0
    total_gain: float = 0.0
    total_gain_percent: float = 0.0
    assets_by_type: dict[AssetType, list[Asset]] = field(default_factory=dict)
    asset_allocation: dict[AssetType, float] = field(default_factory=dict)


@dataclass
class RiskDimension:
    """One scored axis of the risk fingerprint."""

    key: str
    label: str
    score: float
    description: str


@dataclass
class RiskFingerprint:
    """Six-dimension risk profile with interpretation and badges."""

    dimensions: list[RiskDimension]
    interpretation: str
    badges: list[str] = field(default_factory=list)
    overall_risk_level: RiskLevel = RiskLevel.MODERATE

    def score(self, key: str) -> float:
        """Score of the dimension with `key`, 0 when absent."""
        for dimension in self.dimensions:
            if dimension.key == key:
                return dimension.score
        return 0.0


@dataclass
class LiveQuote:
    """Latest quote metrics kept after a price refresh."""

    price: float
    change_percent: float = 0.0
    day_change: float = 0.0


@dataclass
class PriceRefreshResult:
    """Outcome of a market price refresh cycle."""

    fetched_count: int = 0
    updated_count: int = 0
    skipped: bool = False
    refreshed_at: Optional[datetime] = None
