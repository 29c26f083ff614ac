"""Asset domain model."""

from dataclasses import dataclass
from typing import Optional

from folio.domain.models.enums import AssetType, ConnectionSource, MARKET_PRICE_TYPES


@dataclass
class Asset:
    """
    A single holding in the portfolio.

    Value and cost are always derived from quantity and per-unit prices;
    nothing stores them separately. Assets created by an external account
    sync carry the linkage id of that connection.
    """

    asset_id: str
    asset_type: AssetType
    name: str
    quantity: float
    purchase_price: float
    current_price: float
    symbol: Optional[str] = None
    currency: str = "USD"
    added_at: Optional[int] = None  # epoch milliseconds
    purchase_date: Optional[str] = None

    # Type-specific details
    address: Optional[str] = None
    monthly_income: Optional[float] = None
    monthly_rent: Optional[float] = None
    due_date: Optional[str] = None
    estimated_value: Optional[float] = None
    interest_rate: Optional[float] = None

    # External account linkage
    plaid_account_id: Optional[str] = None
    plaid_item_id: Optional[str] = None
    snaptrade_account_id: Optional[str] = None
    coinbase_account_id: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.asset_type, str):
            self.asset_type = AssetType(self.asset_type)

    @property
    def value(self) -> float:
        return self.quantity * self.current_price

    @property
    def cost(self) -> float:
        return self.quantity * self.purchase_price

    @property
    def is_market_priced(self) -> bool:
        """True when the asset's price is refreshed from market data."""
        return bool(self.symbol) and self.asset_type in MARKET_PRICE_TYPES

    @property
    def monthly_cash_flow(self) -> float:
        """Monthly income, falling back to rent, or 0."""
        return self.monthly_income or self.monthly_rent or 0.0

    @property
    def source(self) -> Optional[ConnectionSource]:
        """External connection this asset was synced from, if any."""
        if self.plaid_account_id:
            return ConnectionSource.PLAID
        if self.snaptrade_account_id:
            return ConnectionSource.SNAPTRADE
        if self.coinbase_account_id:
            return ConnectionSource.COINBASE
        return None
