"""Map user-entered tickers and asset names to provider symbols."""

from typing import Optional

from folio.domain.models import AssetType

CRYPTO_SUFFIX = "USD"

# Keys are matched exactly (case-sensitive)
COMMODITY_MAP: dict[str, str] = {
    "gold": "XAUUSD",
    "silver": "XAGUSD",
    "Gold": "XAUUSD",
    "Silver": "XAGUSD",
    "GOLD": "XAUUSD",
    "SILVER": "XAGUSD",
    "XAU": "XAUUSD",
    "XAG": "XAGUSD",
}

KNOWN_CRYPTO: frozenset[str] = frozenset(
    {
        "BTC", "ETH", "SOL", "DOGE", "ADA", "XRP", "DOT", "AVAX", "MATIC",
        "LINK", "UNI", "ATOM", "LTC", "BCH", "ALGO", "FIL", "NEAR", "APT",
        "ARB", "OP", "SUI", "SEI", "TIA", "JUP", "RENDER", "FET", "INJ",
        "SHIB", "PEPE", "WIF", "BONK",
    }
)


def _strip_quote_suffix(symbol: str) -> str:
    upper = symbol.upper()
    if upper.endswith(CRYPTO_SUFFIX):
        return upper[: -len(CRYPTO_SUFFIX)]
    return upper


def map_crypto_symbol(symbol: str) -> str:
    """BTC, btc and BTCUSD all map to BTCUSD."""
    return f"{_strip_quote_suffix(symbol)}{CRYPTO_SUFFIX}"


def map_commodity_symbol(name: str) -> Optional[str]:
    return COMMODITY_MAP.get(name)


def is_crypto_symbol(symbol: str) -> bool:
    return _strip_quote_suffix(symbol) in KNOWN_CRYPTO


def normalize_symbol(symbol: str, asset_type: Optional[str] = None) -> str:
    """
    Return the canonical provider symbol for a user-facing symbol.

    Crypto (by asset type or known base symbol) gets the USD quote suffix,
    commodity names and codes map through COMMODITY_MAP, everything else
    is uppercased.
    """
    if asset_type == AssetType.CRYPTO.value or is_crypto_symbol(symbol):
        return map_crypto_symbol(symbol)

    commodity_symbol = map_commodity_symbol(symbol)
    if commodity_symbol:
        return commodity_symbol

    return symbol.upper()
