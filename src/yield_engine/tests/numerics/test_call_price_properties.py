"""Structural properties of the Black-Scholes call price."""

from __future__ import annotations

import math

import numpy as np
import pytest

from yield_engine.core.pricing_models import black_scholes_call, black_scholes_call_ladder

SPOT = 100.0
RATE = 0.04
# The CDF approximation error scaled by spot bounds how far the price may stray.
TOL = 2e-5


@pytest.mark.parametrize("strike", [60.0, 90.0, 100.0, 110.0, 150.0])
@pytest.mark.parametrize("tau", [0.01, 0.25, 1.0, 3.0])
@pytest.mark.parametrize("sigma", [0.05, 0.3, 1.2])
def test_price_within_no_arbitrage_bounds(strike, tau, sigma):
    price = black_scholes_call(SPOT, strike, tau, RATE, sigma)
    lower = max(SPOT - strike * math.exp(-RATE * tau), 0.0)
    assert lower - TOL <= price <= SPOT
    assert price >= 0.0


def test_price_increases_with_volatility():
    prices = [black_scholes_call(SPOT, 105.0, 0.5, RATE, s) for s in np.arange(0.1, 1.05, 0.1)]
    assert all(b > a for a, b in zip(prices, prices[1:]))


def test_price_increases_with_time_when_rate_is_non_negative():
    prices = [black_scholes_call(SPOT, 105.0, t, RATE, 0.4) for t in np.arange(0.1, 2.05, 0.1)]
    assert all(b > a for a, b in zip(prices, prices[1:]))


def test_price_non_increasing_in_strike():
    prices = [black_scholes_call(SPOT, k, 0.5, RATE, 0.4) for k in np.arange(80.0, 121.0, 2.5)]
    assert all(b <= a + 1e-12 for a, b in zip(prices, prices[1:]))


@pytest.mark.parametrize("strike", [90.0, 100.0, 110.0])
def test_price_continuous_at_expiry(strike):
    at_expiry = black_scholes_call(SPOT, strike, 0.0, RATE, 0.4)
    just_before = black_scholes_call(SPOT, strike, 1e-14, RATE, 0.4)
    assert just_before == pytest.approx(at_expiry, abs=1e-4)


def test_ladder_agrees_with_scalar_pricing():
    strikes = np.linspace(50.0, 200.0, 61)
    ladder = black_scholes_call_ladder(SPOT, strikes, 0.3, RATE, 0.55)
    scalar = np.array([black_scholes_call(SPOT, float(k), 0.3, RATE, 0.55) for k in strikes])
    np.testing.assert_allclose(ladder, scalar, rtol=1e-12, atol=1e-12)
