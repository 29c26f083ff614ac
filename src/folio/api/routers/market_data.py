"""Market data endpoints.

Every endpoint answers with a `{success, data, error}` envelope. Upstream
failures degrade to empty data instead of an HTTP error; only malformed
input is rejected.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from folio.api.deps import get_market_data_service
from folio.api.schemas import (
    Envelope,
    QuoteResponse,
    CompanyProfileResponse,
    HistoricalPointResponse,
    MarketDataResultResponse,
    MarketDataRequestBody,
)
from folio.core.exceptions import ValidationError
from folio.domain.models import HistoricalRange
from folio.domain.views import MarketDataRequest
from folio.services import MarketDataService
from folio.services.historical_service import parse_range

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/market-data", tags=["market-data"])

MAX_QUOTE_SYMBOLS = 100
MAX_PROFILE_SYMBOLS = 50


def _parse_symbols(raw: str, limit: int) -> list[str]:
    """Split a comma-separated symbol list, enforcing 1..limit entries."""
    symbols = [s.strip() for s in raw.split(",") if s.strip()]
    if not symbols:
        raise ValidationError("At least one symbol is required")
    if len(symbols) > limit:
        raise ValidationError(f"At most {limit} symbols per request")
    return symbols


@router.get("/quotes", response_model=Envelope[list[QuoteResponse]])
async def get_quotes(
    symbols: str = Query(..., description="Comma-separated symbols"),
    market: MarketDataService = Depends(get_market_data_service),
) -> Envelope[list[QuoteResponse]]:
    """Quotes for up to 100 symbols; unknown symbols are omitted."""
    symbol_list = _parse_symbols(symbols, MAX_QUOTE_SYMBOLS)
    try:
        quotes = await market.get_quotes(symbol_list)
        return Envelope(success=True, data=[QuoteResponse.model_validate(q) for q in quotes])
    except Exception as e:
        logger.error("[MarketData] getQuotes error: %s", e)
        return Envelope(success=False, data=[], error=str(e))


@router.get("/quote/{symbol}", response_model=Envelope[Optional[QuoteResponse]])
async def get_quote(
    symbol: str,
    market: MarketDataService = Depends(get_market_data_service),
) -> Envelope[Optional[QuoteResponse]]:
    try:
        quote = await market.get_quote(symbol)
        data = QuoteResponse.model_validate(quote) if quote else None
        return Envelope(success=True, data=data)
    except Exception as e:
        logger.error("[MarketData] getQuote error: %s", e)
        return Envelope(success=False, data=None, error=str(e))


@router.get("/historical/{symbol}", response_model=Envelope[list[HistoricalPointResponse]])
async def get_historical_prices(
    symbol: str,
    range_code: str = Query(
        HistoricalRange.ONE_YEAR.value, alias="range", description="1M, 3M, 6M, 1Y or 5Y"
    ),
    market: MarketDataService = Depends(get_market_data_service),
) -> Envelope[list[HistoricalPointResponse]]:
    """Daily closes within the range, oldest first. The symbol is normalized."""
    lookback = parse_range(range_code)
    try:
        points = await market.get_historical_prices(symbol, lookback)
        return Envelope(
            success=True,
            data=[HistoricalPointResponse.model_validate(p) for p in points],
        )
    except Exception as e:
        logger.error("[MarketData] getHistoricalPrices error: %s", e)
        return Envelope(success=False, data=[], error=str(e))


@router.get("/profile/{symbol}", response_model=Envelope[Optional[CompanyProfileResponse]])
async def get_profile(
    symbol: str,
    market: MarketDataService = Depends(get_market_data_service),
) -> Envelope[Optional[CompanyProfileResponse]]:
    try:
        profile = await market.get_company_profile(symbol)
        data = CompanyProfileResponse.model_validate(profile) if profile else None
        return Envelope(success=True, data=data)
    except Exception as e:
        logger.error("[MarketData] getProfile error: %s", e)
        return Envelope(success=False, data=None, error=str(e))


@router.get("/profiles", response_model=Envelope[list[CompanyProfileResponse]])
async def get_profiles(
    symbols: str = Query(..., description="Comma-separated symbols"),
    market: MarketDataService = Depends(get_market_data_service),
) -> Envelope[list[CompanyProfileResponse]]:
    symbol_list = _parse_symbols(symbols, MAX_PROFILE_SYMBOLS)
    try:
        profiles = await market.get_company_profiles(symbol_list)
        return Envelope(
            success=True,
            data=[CompanyProfileResponse.model_validate(p) for p in profiles],
        )
    except Exception as e:
        logger.error("[MarketData] getProfiles error: %s", e)
        return Envelope(success=False, data=[], error=str(e))


@router.post("/market-data", response_model=Envelope[list[MarketDataResultResponse]])
async def get_market_data(
    body: MarketDataRequestBody,
    market: MarketDataService = Depends(get_market_data_service),
) -> Envelope[list[MarketDataResultResponse]]:
    """Price user-entered symbols, mapping results back to what was entered."""
    requests = [MarketDataRequest(symbol=a.symbol, asset_type=a.asset_type) for a in body.assets]
    try:
        results = await market.get_market_data_for_symbols(requests)
        return Envelope(
            success=True,
            data=[MarketDataResultResponse.model_validate(r) for r in results],
        )
    except Exception as e:
        logger.error("[MarketData] getMarketData error: %s", e)
        return Envelope(success=False, data=[], error=str(e))
