"""Black-Scholes call pricing on top of a rational normal CDF approximation."""

from __future__ import annotations

import math

import numpy as np

from .errors import DegenerateInput

SQRT_TWO = math.sqrt(2.0)

# Abramowitz & Stegun 7.1.26, absolute error below 7.5e-8 once mapped onto the
# normal CDF. Downstream comparisons are pinned to this family, not to erf.
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911


def normal_cdf(value: float) -> float:
    """Cumulative standard normal distribution function."""

    sign = -1.0 if value < 0 else 1.0
    x = abs(value) / SQRT_TWO
    t = 1.0 / (1.0 + _P * x)
    y = 1.0 - (((((_A5 * t + _A4) * t) + _A3) * t + _A2) * t + _A1) * t * math.exp(-x * x)
    return 0.5 * (1.0 + sign * y)


def normal_cdf_array(values: np.ndarray) -> np.ndarray:
    """Vectorised :func:`normal_cdf` evaluated element-wise."""

    values = np.asarray(values, dtype=float)
    sign = np.where(values < 0, -1.0, 1.0)
    x = np.abs(values) / SQRT_TWO
    t = 1.0 / (1.0 + _P * x)
    y = 1.0 - (((((_A5 * t + _A4) * t) + _A3) * t + _A2) * t + _A1) * t * np.exp(-x * x)
    return 0.5 * (1.0 + sign * y)


def _discount_factor(rate: float, time_to_expiry: float) -> float:
    try:
        return math.exp(-rate * time_to_expiry)
    except OverflowError as exc:
        raise DegenerateInput("discount factor overflows for this rate and expiry") from exc


def intrinsic_value(spot: float, strike: float) -> float:
    return max(spot - strike, 0.0)


def black_scholes_call(
    spot: float,
    strike: float,
    time_to_expiry: float,
    rate: float,
    volatility: float,
) -> float:
    """Return the theoretical price of one unit's European call, floored at 0.

    At or past expiry the intrinsic value is returned. Zero volatility with
    time remaining leaves ``d1`` undefined and raises :class:`DegenerateInput`.
    """

    if time_to_expiry <= 0:
        return intrinsic_value(spot, strike)
    if volatility == 0:
        raise DegenerateInput("volatility is zero with time remaining to expiry")

    sigma_root_t = volatility * math.sqrt(time_to_expiry)
    if sigma_root_t == 0:
        raise DegenerateInput("volatility times sqrt(time to expiry) underflows to zero")
    log_moneyness = math.log(spot) - math.log(strike)
    d1 = (log_moneyness + (rate + 0.5 * volatility * volatility) * time_to_expiry) / sigma_root_t
    d2 = d1 - sigma_root_t

    call_price = spot * normal_cdf(d1) - strike * _discount_factor(rate, time_to_expiry) * normal_cdf(d2)
    if not math.isfinite(call_price):
        raise DegenerateInput("call price is not a finite number for these inputs")
    return max(call_price, 0.0)


def black_scholes_call_ladder(
    spot: float,
    strikes: np.ndarray,
    time_to_expiry: float,
    rate: float,
    volatility: float,
) -> np.ndarray:
    """Price a ladder of strikes sharing every other input."""

    strikes = np.asarray(strikes, dtype=float)
    if time_to_expiry <= 0:
        return np.maximum(spot - strikes, 0.0)
    if volatility == 0:
        raise DegenerateInput("volatility is zero with time remaining to expiry")

    sigma_root_t = volatility * math.sqrt(time_to_expiry)
    if sigma_root_t == 0:
        raise DegenerateInput("volatility times sqrt(time to expiry) underflows to zero")
    log_moneyness = math.log(spot) - np.log(strikes)
    d1 = (log_moneyness + (rate + 0.5 * volatility * volatility) * time_to_expiry) / sigma_root_t
    d2 = d1 - sigma_root_t

    discount = _discount_factor(rate, time_to_expiry)
    prices = spot * normal_cdf_array(d1) - strikes * discount * normal_cdf_array(d2)
    if not np.all(np.isfinite(prices)):
        raise DegenerateInput("call price is not a finite number for these inputs")
    return np.maximum(prices, 0.0)


__all__ = [
    "black_scholes_call",
    "black_scholes_call_ladder",
    "intrinsic_value",
    "normal_cdf",
    "normal_cdf_array",
]
