"""API routers package."""

from folio.api.routers.market_data import router as market_data_router
from folio.api.routers.portfolio import router as portfolio_router

__all__ = [
    "market_data_router",
    "portfolio_router",
]
