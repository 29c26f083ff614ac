"""Core utilities and shared functionality."""

from folio.core.timezone import (
    now_utc,
    today_utc,
    now_millis,
    cutoff_date,
    parse_date,
    UTC,
)
from folio.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    MarketDataError,
)

__all__ = [
    "now_utc",
    "today_utc",
    "now_millis",
    "cutoff_date",
    "parse_date",
    "UTC",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "MarketDataError",
]
