"""Validation helpers for pricing inputs."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterable

from .errors import InvalidInput, MissingMarketData
from .models import PricingRequest


def _require_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInput(f"{name} must be a real number")
    if not math.isfinite(value):
        raise InvalidInput(f"{name} must be finite")


def _require_positive(name: str, value: float) -> None:
    _require_finite(name, value)
    if value <= 0:
        raise InvalidInput(f"{name} must be strictly positive")


def validate_strikes(strikes: Iterable[float]) -> None:
    """Validate every strike of a ladder."""

    for strike in strikes:
        _require_positive("strike", strike)


def validate_pricing_request(request: PricingRequest) -> None:
    """Validate that inputs to the pricing engine are well formed.

    Volatility is checked last so that a malformed spot or strike is reported
    as :class:`InvalidInput` even when volatility is also unavailable.
    """

    _require_positive("spot", request.spot)
    _require_positive("strike", request.strike)
    _require_positive("contract_size", request.contract_size)
    _require_finite("time_to_expiry_years", request.time_to_expiry_years)
    _require_finite("risk_free_rate", request.risk_free_rate)

    if request.volatility is None:
        raise MissingMarketData("volatility is unavailable")
    _require_finite("volatility", request.volatility)
    if request.volatility < 0:
        raise InvalidInput("volatility must be non-negative")
