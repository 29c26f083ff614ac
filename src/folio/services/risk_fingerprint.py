"""Risk fingerprint: a six-dimension risk profile derived from allocation.

All scores are fixed, deterministic formulas over per-type percentages of
total value. Geography and sector are proxies: there is no per-holding
country or sector data here, so they are estimated from the asset types
(stocks read as US-listed tech-heavy equity, crypto as tech). The
interpretation text and badges are tuned to these exact thresholds.
"""

from folio.domain.models import Asset, AssetType, RiskLevel
from folio.domain.views import RiskDimension, RiskFingerprint
from folio.services.valuation import allocation_percentages

EMPTY_DESCRIPTION = "No assets"
EMPTY_INTERPRETATION = "Add assets to see your portfolio risk profile"

# (key, label) in display order
DIMENSIONS: tuple[tuple[str, str], ...] = (
    ("concentration", "Asset Class Concentration"),
    ("geography", "Geographic Concentration"),
    ("sector", "Sector Concentration"),
    ("volatility", "Volatility Proxy"),
    ("liquidity", "Liquidity"),
    ("incomeGrowth", "Income vs Growth"),
)

MAX_BADGES = 4

STOCKS = AssetType.STOCKS
CRYPTO = AssetType.CRYPTO
COMMODITIES = AssetType.COMMODITIES
FIXED_INCOME = AssetType.FIXED_INCOME
REAL_ESTATE = AssetType.REAL_ESTATE
CASH = AssetType.CASH


def _bucket(value: float, buckets: tuple[tuple[float, float], ...], default: float) -> float:
    """Score for the first (threshold, score) whose threshold `value` exceeds."""
    for threshold, score in buckets:
        if value > threshold:
            return score
    return default


# -- scores ---------------------------------------------------------------

def concentration_score(pct: dict[AssetType, float]) -> float:
    values = [v for v in pct.values() if v > 0]
    if not values:
        return 0
    return _bucket(max(values), ((70, 85), (50, 60), (30, 35)), 15)


def geography_score(pct: dict[AssetType, float]) -> float:
    us_exposure = pct[STOCKS] + pct[CRYPTO] * 0.6 + pct[FIXED_INCOME] * 0.8
    return _bucket(us_exposure, ((70, 80), (50, 55), (30, 30)), 15)


def sector_score(pct: dict[AssetType, float]) -> float:
    tech_exposure = pct[STOCKS] * 0.7 + pct[CRYPTO]
    return _bucket(tech_exposure, ((60, 75), (40, 50), (20, 30)), 20)


def volatility_score(pct: dict[AssetType, float]) -> float:
    volatile = pct[CRYPTO] * 1.0 + pct[STOCKS] * 0.6 + pct[COMMODITIES] * 0.5
    stable = pct[CASH] * 0.1 + pct[FIXED_INCOME] * 0.2 + pct[REAL_ESTATE] * 0.3
    return _bucket(volatile - stable, ((60, 85), (40, 65), (20, 40)), 20)


def liquidity_score(pct: dict[AssetType, float]) -> float:
    """Continuous score clamped to 0-100."""
    high = pct[CASH] + pct[STOCKS] * 0.9 + pct[CRYPTO] * 0.8
    low = pct[REAL_ESTATE] + pct[COMMODITIES] * 0.6 + pct[FIXED_INCOME] * 0.4
    return max(0.0, min(100.0, high - low * 0.5))


def income_growth_score(pct: dict[AssetType, float], assets: list[Asset]) -> float:
    income_assets = pct[FIXED_INCOME] + pct[REAL_ESTATE] + pct[CASH] * 0.2
    growth_assets = pct[STOCKS] + pct[CRYPTO] + pct[COMMODITIES]
    has_income = sum(a.monthly_cash_flow for a in assets) > 0

    if growth_assets > 70 and not has_income:
        return 85
    if growth_assets > 50:
        return 65
    if income_assets > 50:
        return 25
    return 50


# -- descriptions ----------------------------------------------------------
# Thresholds here are independent of the scoring buckets above.

_DESCRIPTIONS: dict[str, tuple[float, float, str, str, str]] = {
    "concentration": (
        70, 40,
        "Highly concentrated in one asset class",
        "Moderate concentration",
        "Well diversified across asset classes",
    ),
    "geography": (
        70, 40,
        "Heavily concentrated in US markets",
        "Moderate US exposure",
        "Geographically diversified",
    ),
    "sector": (
        60, 35,
        "High tech/growth sector exposure",
        "Balanced sector allocation",
        "Conservative sector mix",
    ),
    "volatility": (
        70, 40,
        "High volatility expected",
        "Moderate volatility",
        "Low volatility portfolio",
    ),
    "liquidity": (
        70, 40,
        "Highly liquid",
        "Moderately liquid",
        "Limited liquidity",
    ),
    "incomeGrowth": (
        70, 40,
        "Growth-focused",
        "Balanced growth and income",
        "Income-focused",
    ),
}


def describe(key: str, score: float) -> str:
    high, mid, high_text, mid_text, low_text = _DESCRIPTIONS[key]
    if score > high:
        return high_text
    if score > mid:
        return mid_text
    return low_text


# -- narrative -------------------------------------------------------------

def _interpretation(fp_scores: dict[str, float], pct: dict[AssetType, float]) -> str:
    income_growth = fp_scores["incomeGrowth"]
    geography = fp_scores["geography"]
    volatility = fp_scores["volatility"]

    growth_type = "balanced"
    if income_growth > 65:
        growth_type = "growth-oriented"
    elif income_growth < 35:
        growth_type = "income-focused"

    geo_focus = "diversified"
    if geography > 65:
        geo_focus = "US-centric"
    elif geography > 40:
        geo_focus = "US-leaning"

    volatility_level = "moderately volatile"
    if volatility > 65:
        volatility_level = "highly volatile"
    elif volatility < 35:
        volatility_level = "low volatility"

    income_share = pct[FIXED_INCOME] + pct[REAL_ESTATE]
    income_protection = "moderate income"
    if income_share > 30:
        income_protection = "strong income protection"
    elif income_share < 10:
        income_protection = "limited income protection"

    return (
        f"Your portfolio is {growth_type}, {geo_focus}, and "
        f"{volatility_level} with {income_protection}."
    )


def _badges(fp_scores: dict[str, float], pct: dict[AssetType, float]) -> list[str]:
    badges: list[str] = []

    income_growth = fp_scores["incomeGrowth"]
    if income_growth > 65:
        badges.append("Growth-Heavy")
    elif income_growth < 35:
        badges.append("Income-Focused")

    geography = fp_scores["geography"]
    if geography > 65:
        badges.append("US Exposure: High")
    elif geography < 35:
        badges.append("Global Diversification")

    liquidity = fp_scores["liquidity"]
    if liquidity > 65:
        badges.append("Liquidity: High")
    elif liquidity < 35:
        badges.append("Liquidity: Low")
    else:
        badges.append("Liquidity: Medium")

    volatility = fp_scores["volatility"]
    if volatility > 65:
        badges.append("High Risk")
    elif volatility < 35:
        badges.append("Conservative")

    if pct[CRYPTO] > 20:
        badges.append("Crypto Exposure")
    if pct[REAL_ESTATE] > 30:
        badges.append("Real Estate Heavy")

    return badges[:MAX_BADGES]


def overall_risk_level(dimensions: list[RiskDimension]) -> RiskLevel:
    average = sum(d.score for d in dimensions) / len(dimensions)
    if average > 60:
        return RiskLevel.AGGRESSIVE
    if average < 35:
        return RiskLevel.CONSERVATIVE
    return RiskLevel.MODERATE


def empty_fingerprint() -> RiskFingerprint:
    return RiskFingerprint(
        dimensions=[
            RiskDimension(key=key, label=label, score=0, description=EMPTY_DESCRIPTION)
            for key, label in DIMENSIONS
        ],
        interpretation=EMPTY_INTERPRETATION,
        badges=[],
        overall_risk_level=RiskLevel.MODERATE,
    )


def calculate_risk_fingerprint(assets: list[Asset]) -> RiskFingerprint:
    """
    Score the portfolio on six risk dimensions.

    An empty asset list returns all-zero dimensions and a Moderate level.
    """
    if not assets:
        return empty_fingerprint()

    pct = allocation_percentages(assets)
    scores = {
        "concentration": concentration_score(pct),
        "geography": geography_score(pct),
        "sector": sector_score(pct),
        "volatility": volatility_score(pct),
        "liquidity": liquidity_score(pct),
        "incomeGrowth": income_growth_score(pct, assets),
    }

    dimensions = [
        RiskDimension(key=key, label=label, score=scores[key], description=describe(key, scores[key]))
        for key, label in DIMENSIONS
    ]

    return RiskFingerprint(
        dimensions=dimensions,
        interpretation=_interpretation(scores, pct),
        badges=_badges(scores, pct),
        overall_risk_level=overall_risk_level(dimensions),
    )
