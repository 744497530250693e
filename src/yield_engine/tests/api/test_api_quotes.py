"""API tests for ``GET /api/quotes``."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from yield_engine.api.routes import quotes as quotes_route
from yield_engine.core.assets import ASSETS
from yield_engine.core.pricing_engine import PricingEngine
from yield_engine.market_data.cache import MarketDataCache
from yield_engine.market_data.service import MarketDataService
from yield_engine.quotes.parser import StrikeQuote
from yield_engine.quotes.service import QuoteBoardService
from yield_engine.quotes.sources import EmptyQuoteSource, StaticQuoteSource


def _board(source) -> QuoteBoardService:
    market = MarketDataService(
        MarketDataCache(lambda: {"UETH": 3500.0}, name="api-spot"),
        MarketDataCache(lambda: {"UETH": 0.6}, name="api-vol"),
    )
    return QuoteBoardService(
        engine=PricingEngine(),
        market_data=market,
        quote_source=source,
        assets=[ASSETS["UETH"]],
        expiry=datetime(2025, 8, 29, tzinfo=UTC),
        risk_free_rate=0.04,
        clock=lambda: datetime(2025, 8, 1, tzinfo=UTC),
    )


def test_quotes_are_serialised_with_camel_case_keys(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    source = StaticQuoteSource({"UETH": [StrikeQuote(3600.0, 0.25, premium=9.5)]})
    monkeypatch.setattr(quotes_route, "get_quote_board", lambda: _board(source))

    response = client.get("/api/quotes")

    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 1
    row = rows[0]
    assert row["asset"] == "UETH"
    assert row["strike"] == 3600.0
    assert row["apr"] == 0.25
    assert row["spotPrice"] == 3500.0
    assert row["contractSize"] == 0.5
    assert row["riskFreeRate"] == 0.04
    assert row["premiumSource"] == "calculated"
    assert row["observedPremium"] == 9.5
    assert row["theoreticalApr"] > 0
    assert row["excessApr"] == pytest.approx(0.25 - row["theoreticalApr"])
    assert row["expiry"] == int(datetime(2025, 8, 29, tzinfo=UTC).timestamp())


def test_no_quotes_returns_empty_list_with_message(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(quotes_route, "get_quote_board", lambda: _board(EmptyQuoteSource()))

    response = client.get("/api/quotes")

    assert response.status_code == 200
    body = response.json()
    assert body["quotes"] == []
    assert body["message"].startswith("No live data available")
    assert body["timestamp"]


def test_board_failure_is_reported_as_unavailable(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    class BrokenBoard:
        def build(self):
            raise RuntimeError("market data feed down")

    monkeypatch.setattr(quotes_route, "get_quote_board", lambda: BrokenBoard())

    response = client.get("/api/quotes")

    assert response.status_code == 503
    assert response.json()["error"] == "Live market data unavailable"
