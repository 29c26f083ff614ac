"""
API tests for portfolio endpoints.

Tests cover:
- Asset CRUD (201, 204, 404, 422)
- Summary and risk fingerprint
- Price refresh and sparklines
- Connection removal
- Concurrent writes against a SQLite-backed portfolio
"""

import asyncio
import inspect

import httpx
import pytest
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from folio.api.deps import get_portfolio_service
from folio.main import app
from folio.repositories.sqlalchemy import SqlAlchemyAssetRepository
from folio.services import PortfolioService

from tests.conftest import DeterministicMarketClient, make_asset, make_market_data_service


APPLE = {
    "asset_type": "stocks",
    "name": "Apple",
    "symbol": "AAPL",
    "quantity": 10,
    "purchase_price": 100,
    "current_price": 150,
}


# =============================================================================
# ASSET CRUD TESTS
# =============================================================================


class TestAssetsAPI:
    """Tests for /portfolio/assets."""

    def test_create_asset(self, client: TestClient):
        """
        GIVEN an empty portfolio
        WHEN I POST /portfolio/assets with a stock
        THEN response is 201 with derived value and cost
        """
        response = client.post("/portfolio/assets", json=APPLE)

        assert response.status_code == 201
        data = response.json()
        assert data["asset_id"]
        assert data["value"] == 1500
        assert data["cost"] == 1000
        assert data["added_at"] > 0

    def test_create_asset_validation(self, client: TestClient):
        response = client.post("/portfolio/assets", json={**APPLE, "quantity": -1})

        assert response.status_code == 422

    def test_create_asset_unknown_type(self, client: TestClient):
        response = client.post("/portfolio/assets", json={**APPLE, "asset_type": "art"})

        assert response.status_code == 422

    def test_purchase_date_normalized(self, client: TestClient):
        response = client.post("/portfolio/assets", json={**APPLE, "purchase_date": "March 3, 2021"})

        assert response.json()["purchase_date"] == "2021-03-03"

    def test_list_assets(self, client: TestClient):
        client.post("/portfolio/assets", json=APPLE)
        client.post("/portfolio/assets", json={**APPLE, "name": "Apple 2"})

        body = client.get("/portfolio/assets").json()

        assert body["count"] == 2
        assert [a["name"] for a in body["assets"]] == ["Apple", "Apple 2"]

    def test_patch_asset(self, client: TestClient):
        asset_id = client.post("/portfolio/assets", json=APPLE).json()["asset_id"]

        response = client.patch(f"/portfolio/assets/{asset_id}", json={"quantity": 20})

        assert response.status_code == 200
        assert response.json()["quantity"] == 20
        assert response.json()["name"] == "Apple"

    def test_patch_unknown_asset_is_404(self, client: TestClient):
        response = client.patch("/portfolio/assets/missing", json={"quantity": 1})

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_delete_asset(self, client: TestClient):
        asset_id = client.post("/portfolio/assets", json=APPLE).json()["asset_id"]

        assert client.delete(f"/portfolio/assets/{asset_id}").status_code == 204
        assert client.get("/portfolio/assets").json()["count"] == 0

    def test_delete_unknown_asset_is_404(self, client: TestClient):
        assert client.delete("/portfolio/assets/missing").status_code == 404


# =============================================================================
# CONNECTION TESTS
# =============================================================================


class TestConnectionsAPI:
    """Tests for DELETE /portfolio/connections/{source}."""

    def test_remove_connection(self, client: TestClient, api_portfolio: PortfolioService):
        api_portfolio.replace_connected_assets("coinbase", [
            make_asset(name="cb", coinbase_account_id="cb-1"),
        ])
        client.post("/portfolio/assets", json=APPLE)

        body = client.delete("/portfolio/connections/coinbase").json()

        assert body == {"source": "coinbase", "removed": 1}
        assert client.get("/portfolio/assets").json()["count"] == 1

    def test_unknown_source_is_422(self, client: TestClient):
        assert client.delete("/portfolio/connections/robinhood").status_code == 422


# =============================================================================
# ANALYTICS TESTS
# =============================================================================


class TestAnalyticsAPI:
    """Tests for summary, fingerprint, refresh and sparklines."""

    def test_summary(self, client: TestClient):
        client.post("/portfolio/assets", json=APPLE)

        body = client.get("/portfolio/summary").json()

        assert body["total_value"] == 1500
        assert body["total_cost"] == 1000
        assert body["total_gain"] == 500
        assert body["total_gain_percent"] == 50
        assert body["asset_allocation"]["stocks"] == 1500
        assert len(body["assets_by_type"]["stocks"]) == 1
        assert body["assets_by_type"]["cash"] == []

    def test_empty_risk_fingerprint(self, client: TestClient):
        body = client.get("/portfolio/risk-fingerprint").json()

        assert body["overall_risk_level"] == "Moderate"
        assert [d["score"] for d in body["dimensions"]] == [0] * 6
        assert body["badges"] == []

    def test_risk_fingerprint_crypto(self, client: TestClient):
        client.post("/portfolio/assets", json={
            "asset_type": "crypto", "name": "Bitcoin", "symbol": "BTC",
            "quantity": 1, "purchase_price": 30000, "current_price": 50000,
        })

        body = client.get("/portfolio/risk-fingerprint").json()

        assert body["overall_risk_level"] == "Aggressive"
        assert "Crypto Exposure" in body["badges"]

    def test_refresh_prices(self, client: TestClient):
        client.post("/portfolio/assets", json=APPLE)

        body = client.post("/portfolio/refresh-prices").json()

        assert body["skipped"] is False
        assert body["updated_count"] == 1
        assert body["quotes"]["AAPL"]["price"] == 185.50
        assert client.get("/portfolio/assets").json()["assets"][0]["current_price"] == 185.50

    def test_refresh_prices_skipped_without_eligible_assets(self, client: TestClient):
        body = client.post("/portfolio/refresh-prices").json()

        assert body["skipped"] is True
        assert body["fetched_count"] == 0

    def test_sparklines(self, client: TestClient):
        client.post("/portfolio/assets", json=APPLE)

        body = client.get("/portfolio/sparklines").json()

        assert len(body["sparklines"]["AAPL"]) == 12


# =============================================================================
# APP TESTS
# =============================================================================


class TestAppEndpoints:
    """Tests for /health and /."""

    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_root(self, client: TestClient):
        body = client.get("/").json()

        assert body["docs"] == "/docs"
        assert body["version"] == "0.1.0"


# =============================================================================
# CONCURRENT WRITE TESTS
# =============================================================================


@pytest.fixture
def sqlite_portfolio(test_session) -> PortfolioService:
    """PortfolioService persisting to the in-memory SQLite session."""
    service = PortfolioService(
        repository=SqlAlchemyAssetRepository(test_session),
        market_data=make_market_data_service(DeterministicMarketClient()),
    )
    app.dependency_overrides[get_portfolio_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


class TestConcurrentWrites:
    """Tests for simultaneous requests sharing one PortfolioService."""

    def test_portfolio_handlers_run_on_event_loop(self):
        """
        GIVEN the /portfolio routes
        WHEN their endpoints are inspected
        THEN every one is a coroutine, so none is dispatched to the threadpool
        """
        endpoints = [
            route.endpoint
            for route in app.routes
            if isinstance(route, APIRoute) and route.path.startswith("/portfolio")
        ]

        assert endpoints
        assert all(inspect.iscoroutinefunction(e) for e in endpoints)

    async def test_concurrent_creates_all_persisted(
        self,
        sqlite_portfolio: PortfolioService,
        test_session,
    ):
        """
        GIVEN a portfolio stored in SQLite
        WHEN 40 assets are POSTed at the same time
        THEN every asset is in memory and in the database
        """
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            responses = await asyncio.gather(*(
                ac.post("/portfolio/assets", json={**APPLE, "name": f"Apple {i}"})
                for i in range(40)
            ))

        assert all(r.status_code == 201 for r in responses)
        stored = SqlAlchemyAssetRepository(test_session).load_assets()
        assert len(sqlite_portfolio.assets) == 40
        assert sorted(a.asset_id for a in stored) == sorted(
            a.asset_id for a in sqlite_portfolio.assets
        )
