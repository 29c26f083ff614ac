"""Dependency injection for FastAPI."""

from folio.app_context import AppContext, get_app_context
from folio.services import MarketDataService, PortfolioService


def get_context() -> AppContext:
    """Provide the process-wide AppContext."""
    return get_app_context()


def get_market_data_service() -> MarketDataService:
    """Provide the shared MarketDataService (caches live for the process)."""
    return get_context().market_data


def get_portfolio_service() -> PortfolioService:
    """Provide the shared PortfolioService."""
    return get_context().portfolio
