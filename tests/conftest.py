"""
Pytest configuration and fixtures for portfolio tracker tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic and failing market data clients
- A controllable clock for cache expiry
- An in-memory asset repository and asset factory
- Service fixtures and the FastAPI test client
"""

import asyncio
import uuid
from datetime import date, timedelta
from typing import Any, Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from folio.main import app
from folio.api.deps import get_market_data_service, get_portfolio_service
from folio.app_context import AppContext, set_app_context
from folio.config.settings import Settings, set_settings, reset_settings
from folio.core.exceptions import MarketDataError
from folio.domain.models import Asset, AssetType
from folio.domain.views import CompanyProfile, HistoricalPoint, Quote
from folio.repositories.sqlalchemy.database import Base, reset_database
# Import ORM models to register them with Base before creating tables
from folio.repositories.sqlalchemy import orm_models  # noqa: F401
from folio.repositories.sqlalchemy import SqlAlchemyAssetRepository
from folio.services import (
    HistoricalPriceService,
    MarketDataService,
    MemoryCache,
    PortfolioService,
    ProfileService,
    QuoteService,
)


FIXED_TODAY = date(2024, 6, 15)


# =============================================================================
# CLOCK HELPERS
# =============================================================================


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Controllable clock for TTL tests."""
    return FakeClock()


@pytest.fixture
def fixed_today() -> date:
    """Fixed 'today' for deterministic history windows."""
    return FIXED_TODAY


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def asset_repo(test_session) -> SqlAlchemyAssetRepository:
    """Provide SQLite-backed AssetRepository."""
    return SqlAlchemyAssetRepository(test_session)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketClient:
    """
    Deterministic market data client for testing.

    Answers provider endpoints with fixed payloads and records every call.
    """

    # symbol -> (price, change, changePercentage)
    FIXED_QUOTES = {
        "AAPL": (185.50, 1.25, 0.68),
        "MSFT": (378.25, 1.45, 0.38),
        "TSLA": (248.75, -1.35, -0.54),
        "BTCUSD": (52000.00, 850.00, 1.66),
        "ETHUSD": (2800.00, -35.00, -1.23),
        "XAUUSD": (2050.00, 6.50, 0.32),
    }

    FIXED_PROFILES = {
        "AAPL": ("Apple Inc.", "Technology", "US", "Consumer Electronics", 2.9e12),
        "MSFT": ("Microsoft Corporation", "Technology", "US", "Software", 2.8e12),
    }

    HISTORY_DAYS = 400

    def __init__(self, today: date = FIXED_TODAY):
        self._today = today
        self.calls: list[tuple[str, dict]] = []

    async def get(self, endpoint: str, **params: Any) -> Any:
        self.calls.append((endpoint, params))
        symbol = params.get("symbol", "")
        if endpoint == "quote":
            if symbol not in self.FIXED_QUOTES:
                return []
            price, change, pct = self.FIXED_QUOTES[symbol]
            return [{"symbol": symbol, "price": price, "change": change, "changePercentage": pct}]
        if endpoint == "profile":
            if symbol not in self.FIXED_PROFILES:
                return []
            name, sector, country, industry, cap = self.FIXED_PROFILES[symbol]
            return [{
                "symbol": symbol,
                "companyName": name,
                "sector": sector,
                "country": country,
                "industry": industry,
                "marketCap": cap,
            }]
        if endpoint == "historical-price-eod/full":
            if symbol not in self.FIXED_QUOTES:
                return []
            price = self.FIXED_QUOTES[symbol][0]
            # Newest first, one dollar lower per day back
            return [
                {
                    "symbol": symbol,
                    "date": (self._today - timedelta(days=offset)).isoformat(),
                    "close": price - offset,
                }
                for offset in range(self.HISTORY_DAYS)
            ]
        return []

    def calls_for(self, endpoint: str) -> list[str]:
        """Symbols requested from `endpoint`, in call order."""
        return [params.get("symbol") for ep, params in self.calls if ep == endpoint]


class FailingMarketClient:
    """Market data client whose every call fails like an exhausted retry."""

    def __init__(self):
        self.calls = 0

    async def get(self, endpoint: str, **params: Any) -> Any:
        self.calls += 1
        raise MarketDataError(endpoint, "Network unavailable")


class PartiallyFailingMarketClient(DeterministicMarketClient):
    """Deterministic client that fails for selected symbols."""

    def __init__(self, failing: set[str], today: date = FIXED_TODAY):
        super().__init__(today)
        self._failing = failing

    async def get(self, endpoint: str, **params: Any) -> Any:
        if params.get("symbol") in self._failing:
            self.calls.append((endpoint, params))
            raise MarketDataError(endpoint, "Internal Server Error")
        return await super().get(endpoint, **params)


class GatedMarketClient(DeterministicMarketClient):
    """
    Deterministic client that holds every request until `expected` are in flight.

    A caller issuing requests one at a time never opens the gate.
    """

    def __init__(self, expected: int, today: date = FIXED_TODAY):
        super().__init__(today)
        self._expected = expected
        self._in_flight = 0
        self._all_in_flight = asyncio.Event()

    async def get(self, endpoint: str, **params: Any) -> Any:
        self._in_flight += 1
        if self._in_flight >= self._expected:
            self._all_in_flight.set()
        await self._all_in_flight.wait()
        return await super().get(endpoint, **params)


@pytest.fixture
def market_client() -> DeterministicMarketClient:
    """Provide deterministic market data client."""
    return DeterministicMarketClient()


@pytest.fixture
def failing_client() -> FailingMarketClient:
    """Provide a market data client that always fails."""
    return FailingMarketClient()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def quote_cache(clock) -> MemoryCache[Quote]:
    return MemoryCache(300, clock=clock)


@pytest.fixture
def profile_cache(clock) -> MemoryCache[CompanyProfile]:
    return MemoryCache(30 * 24 * 60 * 60, clock=clock)


@pytest.fixture
def historical_cache(clock) -> MemoryCache[list[HistoricalPoint]]:
    return MemoryCache(300, clock=clock)


@pytest.fixture
def quote_service(market_client, quote_cache) -> QuoteService:
    return QuoteService(market_client, quote_cache)


@pytest.fixture
def profile_service(market_client, profile_cache) -> ProfileService:
    return ProfileService(market_client, profile_cache)


@pytest.fixture
def historical_service(market_client, historical_cache, fixed_today) -> HistoricalPriceService:
    return HistoricalPriceService(market_client, historical_cache, today=lambda: fixed_today)


@pytest.fixture
def market_data_service(quote_service, profile_service, historical_service) -> MarketDataService:
    """Provide MarketDataService wired to the deterministic client."""
    return MarketDataService(
        quotes=quote_service,
        profiles=profile_service,
        historical=historical_service,
    )


def make_market_data_service(client: Any, today: date = FIXED_TODAY) -> MarketDataService:
    """Build a MarketDataService around any client, with fresh caches."""
    return MarketDataService(
        quotes=QuoteService(client, MemoryCache(300)),
        profiles=ProfileService(client, MemoryCache(300)),
        historical=HistoricalPriceService(client, MemoryCache(300), today=lambda: today),
    )


# =============================================================================
# REPOSITORY / PORTFOLIO FIXTURES
# =============================================================================


class InMemoryAssetRepository:
    """AssetRepository keeping assets in a list and counting saves."""

    def __init__(self, assets: Optional[list[Asset]] = None):
        self.assets: list[Asset] = list(assets or [])
        self.save_count = 0

    def load_assets(self) -> list[Asset]:
        return list(self.assets)

    def save_assets(self, assets: list[Asset]) -> None:
        self.assets = list(assets)
        self.save_count += 1


@pytest.fixture
def memory_repo() -> InMemoryAssetRepository:
    return InMemoryAssetRepository()


@pytest.fixture
def portfolio_service(memory_repo, market_data_service) -> PortfolioService:
    """Provide PortfolioService over an empty in-memory repository."""
    return PortfolioService(repository=memory_repo, market_data=market_data_service)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


def make_asset(
    asset_type: AssetType = AssetType.STOCKS,
    quantity: float = 10,
    purchase_price: float = 100,
    current_price: float = 150,
    symbol: Optional[str] = None,
    name: Optional[str] = None,
    **extra: Any,
) -> Asset:
    """Build an Asset with sensible defaults."""
    return Asset(
        asset_id=extra.pop("asset_id", None) or str(uuid.uuid4()),
        asset_type=asset_type,
        name=name or f"Test {asset_type.value}",
        quantity=quantity,
        purchase_price=purchase_price,
        current_price=current_price,
        symbol=symbol,
        added_at=extra.pop("added_at", 1718445600000),
        **extra,
    )


@pytest.fixture
def asset_factory() -> Callable[..., Asset]:
    """Factory for creating test assets."""
    return make_asset


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_market_client() -> DeterministicMarketClient:
    """Market data client behind the API test client."""
    return DeterministicMarketClient()


@pytest.fixture
def api_market(api_market_client) -> MarketDataService:
    return make_market_data_service(api_market_client)


@pytest.fixture
def api_portfolio(api_market) -> PortfolioService:
    """PortfolioService used by the API client, backed by an in-memory repository."""
    return PortfolioService(repository=InMemoryAssetRepository(), market_data=api_market)


@pytest.fixture
def client(api_market, api_portfolio) -> TestClient:
    """Provide FastAPI test client with deterministic market data."""
    set_settings(Settings(database_url="sqlite://", use_stub_market_data=True))
    reset_database()
    set_app_context(AppContext(client=DeterministicMarketClient()))

    app.dependency_overrides[get_market_data_service] = lambda: api_market
    app.dependency_overrides[get_portfolio_service] = lambda: api_portfolio
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    set_app_context(None)
    reset_database()
    reset_settings()
