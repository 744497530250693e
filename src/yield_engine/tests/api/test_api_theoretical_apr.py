"""API tests for ``GET /api/theoretical_apr``."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from yield_engine.core.models import PricingRequest
from yield_engine.core.pricing_engine import PricingEngine

SCENARIO = {"s": "3500", "k": "3600", "t": "0.079", "r": "0.04", "sigma": "0.6"}


def test_returns_theoretical_apr_with_debug_figures(client: TestClient) -> None:
    response = client.get("/api/theoretical_apr", params=SCENARIO)

    assert response.status_code == 200
    body = response.json()
    expected = PricingEngine().price(
        PricingRequest(
            spot=3500.0,
            strike=3600.0,
            time_to_expiry_years=0.079,
            risk_free_rate=0.04,
            volatility=0.6,
            contract_size=0.5,
        )
    )
    assert body["theoreticalApr"] == pytest.approx(expected.theoretical_apr)
    assert body["debug"]["callPrice"] == pytest.approx(expected.call_price)
    assert body["debug"]["premiumTheo"] == pytest.approx(expected.premium)
    assert body["debug"]["rawReturn"] == pytest.approx(expected.period_return)
    assert body["debug"]["inputs"] == {
        "spot": 3500.0,
        "strike": 3600.0,
        "time": 0.079,
        "rate": 0.04,
        "volatility": 0.6,
        "contractSize": 0.5,
    }
    assert response.headers["X-Request-ID"]
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_contract_size_changes_premium_but_not_apr(client: TestClient) -> None:
    default = client.get("/api/theoretical_apr", params=SCENARIO).json()
    small = client.get("/api/theoretical_apr", params={**SCENARIO, "contract_size": "0.05"}).json()

    assert small["debug"]["inputs"]["contractSize"] == 0.05
    assert small["debug"]["premiumTheo"] == pytest.approx(default["debug"]["premiumTheo"] / 10.0)
    assert small["theoreticalApr"] == pytest.approx(default["theoreticalApr"], rel=1e-12)


def test_at_expiry_reports_null_apr(client: TestClient) -> None:
    response = client.get(
        "/api/theoretical_apr",
        params={"s": "100", "k": "90", "t": "0", "r": "0.04", "sigma": "0.5"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["theoreticalApr"] is None
    assert body["debug"]["callPrice"] == 10.0


def test_missing_parameters_are_a_client_error(client: TestClient) -> None:
    response = client.get("/api/theoretical_apr", params={"s": "100", "k": "90"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error.startswith("Missing required query parameters")
    for name in ("t", "r", "sigma"):
        assert name in error


def test_non_numeric_parameters_are_a_client_error(client: TestClient) -> None:
    response = client.get("/api/theoretical_apr", params={**SCENARIO, "sigma": "high"})

    assert response.status_code == 400
    assert response.json()["error"] == "Query parameters must be numbers: sigma"


@pytest.mark.parametrize("field,value", [("s", "-1"), ("k", "0"), ("sigma", "-0.2"), ("r", "nan")])
def test_out_of_domain_values_are_a_client_error(client: TestClient, field: str, value: str) -> None:
    response = client.get("/api/theoretical_apr", params={**SCENARIO, field: value})

    assert response.status_code == 400
    assert "error" in response.json()


def test_zero_volatility_is_a_calculation_failure(client: TestClient) -> None:
    response = client.get("/api/theoretical_apr", params={**SCENARIO, "sigma": "0"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to calculate theoretical APR"
    assert "volatility" in body["details"]


def test_underflowing_volatility_term_is_a_calculation_failure(client: TestClient) -> None:
    response = client.get(
        "/api/theoretical_apr",
        params={"s": "100", "k": "100", "t": "0.25", "r": "0.04", "sigma": "5e-324"},
    )

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to calculate theoretical APR"


def test_extreme_moneyness_prices_to_zero(client: TestClient) -> None:
    response = client.get(
        "/api/theoretical_apr",
        params={"s": "1e-200", "k": "1e200", "t": "0.25", "r": "0.04", "sigma": "0.5"},
    )

    assert response.status_code == 200
    assert response.json()["debug"]["callPrice"] == 0.0
