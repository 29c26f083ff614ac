"""View models for market data outputs."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Quote:
    """Point-in-time market quote for a normalized symbol."""

    symbol: str
    price: float
    change_percent: float = 0.0
    day_change: float = 0.0


@dataclass
class CompanyProfile:
    """Slow-changing company metadata."""

    symbol: str
    company_name: str = ""
    sector: str = ""
    country: str = ""
    industry: str = ""
    market_cap: float = 0.0


@dataclass
class HistoricalPoint:
    """Closing price on a calendar date (ISO YYYY-MM-DD)."""

    date: str
    price: float


@dataclass
class MarketDataRequest:
    """A user-facing symbol to price, with its asset type when known."""

    symbol: str
    asset_type: Optional[str] = None


@dataclass
class MarketDataResult:
    """Quote mapped back to the symbol the user entered."""

    symbol: str
    original_symbol: str
    price: float
    change_percent: float
    day_change: float
