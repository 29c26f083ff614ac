"""Portfolio valuation: totals, per-type breakdown and live price merge.

Everything here is a pure function of the asset list. Callers replace their
asset list with the returned one; inputs are never mutated.
"""

from dataclasses import replace

from folio.domain.models import Asset, AssetType
from folio.domain.views import MarketDataRequest, MarketDataResult, PortfolioSummary


def total_value(assets: list[Asset]) -> float:
    return sum(a.value for a in assets)


def total_cost(assets: list[Asset]) -> float:
    return sum(a.cost for a in assets)


def total_gain(assets: list[Asset]) -> float:
    return total_value(assets) - total_cost(assets)


def total_gain_percent(assets: list[Asset]) -> float:
    """Gain as a percentage of cost; 0 when there is no positive cost basis."""
    cost = total_cost(assets)
    if cost <= 0:
        return 0.0
    return (total_value(assets) - cost) / cost * 100


def group_by_type(assets: list[Asset]) -> dict[AssetType, list[Asset]]:
    """Bucket assets by type, keeping insertion order. Every type is present."""
    grouped: dict[AssetType, list[Asset]] = {t: [] for t in AssetType}
    for asset in assets:
        grouped[asset.asset_type].append(asset)
    return grouped


def asset_allocation(assets: list[Asset]) -> dict[AssetType, float]:
    """Market value per asset type. Every type is present."""
    allocation: dict[AssetType, float] = {t: 0.0 for t in AssetType}
    for asset in assets:
        allocation[asset.asset_type] += asset.value
    return allocation


def allocation_percentages(assets: list[Asset]) -> dict[AssetType, float]:
    """Share of total value per type in 0-100; all zero when the total is 0."""
    allocation = asset_allocation(assets)
    total = sum(allocation.values())
    if total == 0:
        return {t: 0.0 for t in AssetType}
    return {t: value / total * 100 for t, value in allocation.items()}


def summarize(assets: list[Asset]) -> PortfolioSummary:
    value = total_value(assets)
    cost = total_cost(assets)
    gain = value - cost
    return PortfolioSummary(
        total_value=value,
        total_cost=cost,
        total_gain=gain,
        total_gain_percent=gain / cost * 100 if cost > 0 else 0.0,
        assets_by_type=group_by_type(assets),
        asset_allocation=asset_allocation(assets),
    )


def market_price_requests(assets: list[Asset]) -> list[MarketDataRequest]:
    """Requests for every symbol-bearing stock or crypto asset."""
    return [
        MarketDataRequest(symbol=a.symbol, asset_type=a.asset_type.value)
        for a in assets
        if a.is_market_priced
    ]


def build_price_map(results: list[MarketDataResult]) -> dict[str, float]:
    """Prices keyed by upper-cased original and canonical symbols."""
    prices: dict[str, float] = {}
    for item in results:
        prices[item.original_symbol.upper()] = item.price
        prices[item.symbol.upper()] = item.price
    return prices


def apply_market_prices(
    assets: list[Asset],
    results: list[MarketDataResult],
) -> tuple[list[Asset], int]:
    """
    Merge refreshed prices into market-priced assets.

    Only stock and crypto assets with a symbol are touched, and only when the
    new price is positive and differs from the stored one. Returns the new
    asset list and how many assets changed.
    """
    prices = build_price_map(results)
    updated: list[Asset] = []
    changed = 0
    for asset in assets:
        if not asset.is_market_priced:
            updated.append(asset)
            continue
        live_price = prices.get(asset.symbol.upper())
        if live_price is not None and live_price > 0 and live_price != asset.current_price:
            updated.append(replace(asset, current_price=live_price))
            changed += 1
        else:
            updated.append(asset)
    return updated, changed
