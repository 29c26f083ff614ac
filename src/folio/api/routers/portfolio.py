"""Portfolio endpoints: assets, valuation, risk and price refresh.

Handlers are async so every PortfolioService call, and the SQLAlchemy
session behind it, stays on the event loop thread.
"""

from fastapi import APIRouter, Depends, Query

from folio.api.deps import get_portfolio_service
from folio.api.schemas import (
    AssetCreateRequest,
    AssetUpdateRequest,
    AssetResponse,
    AssetListResponse,
    PortfolioSummaryResponse,
    RiskFingerprintResponse,
    LiveQuoteResponse,
    PriceRefreshResponse,
    SparklinesResponse,
    ConnectionRemovalResponse,
)
from folio.domain.models import ConnectionSource
from folio.services import AssetCreate, AssetUpdate, PortfolioService
from folio.services.portfolio_service import SPARKLINE_POINTS

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/assets", response_model=AssetListResponse)
async def list_assets(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> AssetListResponse:
    assets = portfolio.assets
    return AssetListResponse(
        assets=[AssetResponse.model_validate(a) for a in assets],
        count=len(assets),
    )


@router.post("/assets", response_model=AssetResponse, status_code=201)
async def create_asset(
    data: AssetCreateRequest,
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> AssetResponse:
    """Add a manually entered asset."""
    asset = portfolio.add_asset(AssetCreate(**data.model_dump()))
    return AssetResponse.model_validate(asset)


@router.patch("/assets/{asset_id}", response_model=AssetResponse)
async def update_asset(
    asset_id: str,
    data: AssetUpdateRequest,
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> AssetResponse:
    """Update the fields present in the body."""
    asset = portfolio.update_asset(asset_id, AssetUpdate(**data.model_dump(exclude_unset=True)))
    return AssetResponse.model_validate(asset)


@router.delete("/assets/{asset_id}", status_code=204)
async def delete_asset(
    asset_id: str,
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> None:
    portfolio.delete_asset(asset_id)


@router.delete("/connections/{source}", response_model=ConnectionRemovalResponse)
async def remove_connection(
    source: ConnectionSource,
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> ConnectionRemovalResponse:
    """Remove every asset synced from an external connection."""
    removed = portfolio.remove_connected_assets(source)
    return ConnectionRemovalResponse(source=source.value, removed=removed)


@router.get("/summary", response_model=PortfolioSummaryResponse)
async def get_summary(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioSummaryResponse:
    summary = portfolio.summary()
    return PortfolioSummaryResponse(
        total_value=summary.total_value,
        total_cost=summary.total_cost,
        total_gain=summary.total_gain,
        total_gain_percent=summary.total_gain_percent,
        asset_allocation=summary.asset_allocation,
        assets_by_type={
            asset_type: [AssetResponse.model_validate(a) for a in assets]
            for asset_type, assets in summary.assets_by_type.items()
        },
    )


@router.get("/risk-fingerprint", response_model=RiskFingerprintResponse)
async def get_risk_fingerprint(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> RiskFingerprintResponse:
    return RiskFingerprintResponse.model_validate(portfolio.risk_fingerprint())


@router.post("/refresh-prices", response_model=PriceRefreshResponse)
async def refresh_prices(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PriceRefreshResponse:
    """Refresh stock and crypto prices from market data."""
    result = await portfolio.refresh_market_prices()
    return PriceRefreshResponse(
        fetched_count=result.fetched_count,
        updated_count=result.updated_count,
        skipped=result.skipped,
        refreshed_at=result.refreshed_at,
        quotes={
            symbol: LiveQuoteResponse.model_validate(quote)
            for symbol, quote in portfolio.market_quotes.items()
        },
    )


@router.get("/sparklines", response_model=SparklinesResponse)
async def get_sparklines(
    points: int = Query(SPARKLINE_POINTS, ge=2, le=100),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> SparklinesResponse:
    """One-month sampled price series for each market-priced symbol."""
    return SparklinesResponse(sparklines=await portfolio.fetch_sparklines(points))
