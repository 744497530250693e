"""Theoretical premium and APR engine for covered-call strikes."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import List, Sequence

from .annualization import annualize, period_return, scale_premium
from .errors import DegenerateInput
from .models import PricingRequest, PricingResult
from .pricing_models import black_scholes_call, black_scholes_call_ladder
from .validation import validate_pricing_request, validate_strikes


def _to_result(request: PricingRequest, call_price: float) -> PricingResult:
    premium = scale_premium(call_price, request.contract_size)
    raw_return = period_return(premium, request.spot, request.contract_size)
    apr = annualize(raw_return, request.time_to_expiry_years)
    if apr is not None and not math.isfinite(apr):
        raise DegenerateInput("time to expiry is too small to annualize the return")
    return PricingResult(
        call_price=call_price,
        premium=premium,
        period_return=raw_return,
        theoretical_apr=apr,
    )


class PricingEngine:
    """Stateless pricing engine.

    Instances hold no mutable state and may be shared across threads.
    """

    def price(self, request: PricingRequest) -> PricingResult:
        """Price one strike.

        Raises :class:`~yield_engine.core.errors.InvalidInput` for out of domain
        numbers, :class:`~yield_engine.core.errors.MissingMarketData` when the
        volatility is unknown and :class:`~yield_engine.core.errors.DegenerateInput`
        for zero volatility with time remaining.
        """

        validate_pricing_request(request)
        call_price = black_scholes_call(
            request.spot,
            request.strike,
            request.time_to_expiry_years,
            request.risk_free_rate,
            request.volatility,
        )
        return _to_result(request, call_price)

    def price_ladder(
        self,
        *,
        spot: float,
        strikes: Sequence[float],
        time_to_expiry_years: float,
        risk_free_rate: float,
        volatility: float | None,
        contract_size: float,
    ) -> List[PricingResult]:
        """Price several strikes that share spot, expiry, rate and volatility."""

        strike_list = list(strikes)
        if not strike_list:
            return []

        template = PricingRequest(
            spot=spot,
            strike=strike_list[0],
            time_to_expiry_years=time_to_expiry_years,
            risk_free_rate=risk_free_rate,
            volatility=volatility,
            contract_size=contract_size,
        )
        validate_strikes(strike_list)
        validate_pricing_request(template)

        prices = black_scholes_call_ladder(
            spot, strike_list, time_to_expiry_years, risk_free_rate, volatility
        )
        return [
            _to_result(replace(template, strike=strike), float(price))
            for strike, price in zip(strike_list, prices)
        ]


__all__ = ["PricingEngine"]
