"""Portfolio service: asset management, valuation and market price refresh."""

import asyncio
import logging
import uuid
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Optional, Union

from folio.core.exceptions import NotFoundError, ValidationError
from folio.core.timezone import now_millis, now_utc
from folio.domain.models import Asset, AssetType, ConnectionSource, HistoricalRange
from folio.domain.views import (
    LiveQuote,
    PortfolioSummary,
    PriceRefreshResult,
    RiskFingerprint,
)
from folio.repositories.protocols import AssetRepository
from folio.services import valuation
from folio.services.market_data_service import MarketDataService
from folio.services.risk_fingerprint import calculate_risk_fingerprint

logger = logging.getLogger(__name__)

SPARKLINE_POINTS = 12


@dataclass
class AssetCreate:
    """Input data for adding an asset."""

    asset_type: AssetType
    name: str
    quantity: float
    purchase_price: float
    current_price: float
    symbol: Optional[str] = None
    currency: str = "USD"
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


@dataclass
class AssetUpdate:
    """Partial update for an asset. None means "leave unchanged"."""

    asset_type: Optional[AssetType] = None
    name: Optional[str] = None
    quantity: Optional[float] = None
    purchase_price: Optional[float] = None
    current_price: Optional[float] = None
    symbol: Optional[str] = None
    currency: Optional[str] = None
    purchase_date: Optional[str] = None
    address: Optional[str] = None
    monthly_income: Optional[float] = None
    monthly_rent: Optional[float] = None
    due_date: Optional[str] = None
    estimated_value: Optional[float] = None
    interest_rate: Optional[float] = None


def sample_prices(prices: list[float], points: int = SPARKLINE_POINTS) -> list[float]:
    """Evenly sample `prices` down to `points` values, keeping first and last."""
    if len(prices) <= points:
        return list(prices)
    if points < 2:
        return prices[-points:] if points else []
    last = len(prices) - 1
    return [prices[int(i / (points - 1) * last)] for i in range(points)]


class PortfolioService:
    """
    Owns the asset collection for a single user.

    Assets are loaded once from the repository and written back in full
    after every change. Valuation and the risk fingerprint are recomputed
    from the current assets on every read.
    """

    def __init__(
        self,
        repository: AssetRepository,
        market_data: MarketDataService,
    ):
        self._repo = repository
        self._market = market_data
        self._assets: list[Asset] = repository.load_assets()
        self.market_quotes: dict[str, LiveQuote] = {}
        self.last_price_refresh: Optional[datetime] = None
        self.is_refreshing_prices = False

    # -- asset management -------------------------------------------------

    @property
    def assets(self) -> list[Asset]:
        return list(self._assets)

    def get_asset(self, asset_id: str) -> Asset:
        for asset in self._assets:
            if asset.asset_id == asset_id:
                return asset
        raise NotFoundError("Asset", asset_id)

    def add_asset(self, data: AssetCreate) -> Asset:
        """Add a manually entered asset; id and timestamp are generated."""
        self._validate(data.name, data.quantity, data.purchase_price, data.current_price)
        asset = Asset(
            asset_id=str(uuid.uuid4()),
            added_at=now_millis(),
            **{f.name: getattr(data, f.name) for f in fields(AssetCreate)},
        )
        self._set_assets(self._assets + [asset])
        return asset

    def update_asset(self, asset_id: str, patch: AssetUpdate) -> Asset:
        current = self.get_asset(asset_id)
        changes = {
            f.name: getattr(patch, f.name)
            for f in fields(AssetUpdate)
            if getattr(patch, f.name) is not None
        }
        updated = replace(current, **changes)
        self._validate(updated.name, updated.quantity, updated.purchase_price, updated.current_price)

        self._set_assets([updated if a.asset_id == asset_id else a for a in self._assets])
        return updated

    def delete_asset(self, asset_id: str) -> None:
        self.get_asset(asset_id)
        self._set_assets([a for a in self._assets if a.asset_id != asset_id])

    def remove_connected_assets(self, source: Union[str, ConnectionSource]) -> int:
        """Drop every asset synced from `source`. Returns how many were removed."""
        source = ConnectionSource(source)
        kept = [a for a in self._assets if a.source != source]
        removed = len(self._assets) - len(kept)
        if removed:
            self._set_assets(kept)
            logger.info("[Portfolio] Removed %d %s assets", removed, source.value)
        return removed

    def replace_connected_assets(
        self,
        source: Union[str, ConnectionSource],
        new_assets: list[Asset],
    ) -> None:
        """Swap the assets of one connection for a fresh sync result."""
        source = ConnectionSource(source)
        kept = [a for a in self._assets if a.source != source]
        self._set_assets(kept + list(new_assets))
        logger.info("[Portfolio] Synced %d %s assets", len(new_assets), source.value)

    # -- valuation --------------------------------------------------------

    @property
    def total_value(self) -> float:
        return valuation.total_value(self._assets)

    @property
    def total_cost(self) -> float:
        return valuation.total_cost(self._assets)

    @property
    def total_gain(self) -> float:
        return valuation.total_gain(self._assets)

    @property
    def total_gain_percent(self) -> float:
        return valuation.total_gain_percent(self._assets)

    @property
    def assets_by_type(self) -> dict[AssetType, list[Asset]]:
        return valuation.group_by_type(self._assets)

    @property
    def asset_allocation(self) -> dict[AssetType, float]:
        return valuation.asset_allocation(self._assets)

    def summary(self) -> PortfolioSummary:
        return valuation.summarize(self._assets)

    def risk_fingerprint(self) -> RiskFingerprint:
        return calculate_risk_fingerprint(self._assets)

    # -- market data ------------------------------------------------------

    async def refresh_market_prices(self) -> PriceRefreshResult:
        """
        Pull live prices for stock and crypto assets and merge them in.

        Never raises: a failed refresh is logged and leaves prices as they
        were. Assets are persisted only when at least one price changed.
        """
        requests = valuation.market_price_requests(self._assets)
        if not requests:
            logger.info("[Portfolio] No tradeable assets with symbols to refresh")
            return PriceRefreshResult(skipped=True)
        if self.is_refreshing_prices:
            logger.info("[Portfolio] Price refresh already in progress")
            return PriceRefreshResult(skipped=True)

        self.is_refreshing_prices = True
        try:
            results = await self._market.get_market_data_for_symbols(requests)

            for item in results:
                quote = LiveQuote(
                    price=item.price,
                    change_percent=item.change_percent,
                    day_change=item.day_change,
                )
                self.market_quotes[item.original_symbol.upper()] = quote
                self.market_quotes[item.symbol.upper()] = quote

            updated, changed = valuation.apply_market_prices(self._assets, results)
            if changed:
                self._set_assets(updated)
                logger.info("[Portfolio] Market prices updated for %d symbols", len(results))
            else:
                logger.info("[Portfolio] Market prices unchanged")

            self.last_price_refresh = now_utc()
            return PriceRefreshResult(
                fetched_count=len(results),
                updated_count=changed,
                refreshed_at=self.last_price_refresh,
            )
        except Exception as e:
            logger.error("[Portfolio] Error refreshing market prices: %s", e)
            return PriceRefreshResult()
        finally:
            self.is_refreshing_prices = False

    async def fetch_sparklines(self, points: int = SPARKLINE_POINTS) -> dict[str, list[float]]:
        """
        One-month price series per unique market-priced symbol.

        Keys are upper-cased symbols. Symbols with no history are left out.
        """
        symbols = list(dict.fromkeys(
            a.symbol.upper() for a in self._assets if a.is_market_priced
        ))
        if not symbols:
            return {}

        histories = await asyncio.gather(
            *(self._market.get_historical_prices(s, HistoricalRange.ONE_MONTH) for s in symbols),
            return_exceptions=True,
        )

        sparklines: dict[str, list[float]] = {}
        for symbol, history in zip(symbols, histories):
            if isinstance(history, BaseException) or not history:
                continue
            sparklines[symbol] = sample_prices([p.price for p in history], points)

        if sparklines:
            logger.info("[Portfolio] Sparkline data loaded for %d symbols", len(sparklines))
        return sparklines

    # -- internals --------------------------------------------------------

    def _set_assets(self, assets: list[Asset]) -> None:
        # In-memory state only follows a successful save
        self._repo.save_assets(assets)
        self._assets = assets

    @staticmethod
    def _validate(name: str, quantity: float, purchase_price: float, current_price: float) -> None:
        if not name or not name.strip():
            raise ValidationError("Asset name is required")
        if quantity < 0:
            raise ValidationError("Quantity cannot be negative")
        if purchase_price < 0 or current_price < 0:
            raise ValidationError("Prices cannot be negative")
