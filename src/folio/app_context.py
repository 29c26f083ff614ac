"""Application context for in-process service management.

Owns the long-lived pieces of the app: the upstream client, the three
market data caches and the portfolio service built on top of them. The
HTTP layer goes through this object so caches are shared for the life of
the process.
"""

from typing import Optional

from folio.config.settings import Settings, get_settings
from folio.domain.views import CompanyProfile, HistoricalPoint, Quote
from folio.providers import FmpClient, MarketDataClient, StubMarketDataClient
from folio.repositories.sqlalchemy import SqlAlchemyAssetRepository, get_session
from folio.services import (
    HistoricalPriceService,
    MarketDataService,
    MemoryCache,
    PortfolioService,
    ProfileService,
    QuoteService,
)


def build_market_client(settings: Settings) -> MarketDataClient:
    """Real FMP client when an API key is configured, offline stub otherwise."""
    if settings.should_use_stub():
        return StubMarketDataClient()
    return FmpClient(
        api_key=settings.fmp_api_key,
        base_url=settings.fmp_base_url,
        timeout_seconds=settings.http_timeout_seconds,
        max_retries=settings.http_max_retries,
        backoff_seconds=settings.http_backoff_seconds,
    )


def build_market_data_service(client: MarketDataClient, settings: Settings) -> MarketDataService:
    """Wire the retrieval services to `client`, each with its own cache."""
    return MarketDataService(
        quotes=QuoteService(client, MemoryCache[Quote](settings.quote_cache_ttl_seconds)),
        profiles=ProfileService(
            client, MemoryCache[CompanyProfile](settings.profile_cache_ttl_seconds)
        ),
        historical=HistoricalPriceService(
            client, MemoryCache[list[HistoricalPoint]](settings.historical_cache_ttl_seconds)
        ),
    )


class AppContext:
    """
    Application context providing in-process access to all services.

    Services are created lazily and reused until `close` is called.
    """

    def __init__(self, client: Optional[MarketDataClient] = None):
        """
        Args:
            client: Optional market data client, mainly for tests.
        """
        self._client = client
        self._session = None

        self._market_data_service: Optional[MarketDataService] = None
        self._portfolio_service: Optional[PortfolioService] = None

    def _get_session(self):
        if self._session is None:
            self._session = get_session()
        return self._session

    @property
    def client(self) -> MarketDataClient:
        if self._client is None:
            self._client = build_market_client(get_settings())
        return self._client

    @property
    def market_data(self) -> MarketDataService:
        """Get the MarketDataService instance."""
        if self._market_data_service is None:
            self._market_data_service = build_market_data_service(self.client, get_settings())
        return self._market_data_service

    @property
    def portfolio(self) -> PortfolioService:
        """Get the PortfolioService instance."""
        if self._portfolio_service is None:
            self._portfolio_service = PortfolioService(
                repository=SqlAlchemyAssetRepository(self._get_session()),
                market_data=self.market_data,
            )
        return self._portfolio_service

    async def close(self) -> None:
        """Release the database session and the HTTP connection pool."""
        if self._session:
            self._session.close()
            self._session = None
        if isinstance(self._client, FmpClient):
            await self._client.aclose()
        self._client = None
        self._market_data_service = None
        self._portfolio_service = None


# Global application context
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear) the global application context."""
    global _app_context
    _app_context = context
