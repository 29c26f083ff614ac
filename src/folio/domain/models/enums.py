"""Enumerations for domain models."""

from enum import Enum


class AssetType(str, Enum):
    """Closed set of holding categories."""

    STOCKS = "stocks"  # equities and ETFs
    CRYPTO = "crypto"
    COMMODITIES = "commodities"
    FIXED_INCOME = "fixed-income"
    REAL_ESTATE = "real-estate"
    CASH = "cash"
    OTHER = "other"


# Types whose current price comes from market data refreshes
MARKET_PRICE_TYPES: tuple[AssetType, ...] = (AssetType.STOCKS, AssetType.CRYPTO)


class HistoricalRange(str, Enum):
    """Lookback windows for historical price series."""

    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"

    @property
    def days(self) -> int:
        return _RANGE_DAYS[self]


_RANGE_DAYS: dict[HistoricalRange, int] = {
    HistoricalRange.ONE_MONTH: 30,
    HistoricalRange.THREE_MONTHS: 90,
    HistoricalRange.SIX_MONTHS: 180,
    HistoricalRange.ONE_YEAR: 365,
    HistoricalRange.FIVE_YEARS: 1825,
}


class RiskLevel(str, Enum):
    """Overall portfolio risk classification."""

    CONSERVATIVE = "Conservative"
    MODERATE = "Moderate"
    AGGRESSIVE = "Aggressive"


class ConnectionSource(str, Enum):
    """External account connections that can own assets."""

    PLAID = "plaid"
    SNAPTRADE = "snaptrade"
    COINBASE = "coinbase"
