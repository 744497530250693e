"""Helpers for converting between API schemas and domain models."""

from __future__ import annotations

from typing import Any, Dict

from ..core.models import PricingRequest, PricingResult
from ..quotes.service import QuoteRow
from .schemas.request import TheoreticalAprQuery
from .schemas.response import PricingDebug, PricingInputs, QuoteRowResponse, TheoreticalAprResponse


def to_pricing_request(query: TheoreticalAprQuery) -> PricingRequest:
    """Convert query parameters into the domain request."""

    return PricingRequest(
        spot=query.s,
        strike=query.k,
        time_to_expiry_years=query.t,
        risk_free_rate=query.r,
        volatility=query.sigma,
        contract_size=query.contract_size,
    )


def to_theoretical_apr_response(
    request: PricingRequest, result: PricingResult
) -> TheoreticalAprResponse:
    return TheoreticalAprResponse(
        theoretical_apr=result.theoretical_apr,
        debug=PricingDebug(
            call_price=result.call_price,
            premium_theo=result.premium,
            raw_return=result.period_return,
            inputs=PricingInputs(
                spot=request.spot,
                strike=request.strike,
                time=request.time_to_expiry_years,
                rate=request.risk_free_rate,
                volatility=request.volatility,
                contract_size=request.contract_size,
            ),
        ),
    )


def quote_row_payload(row: QuoteRow) -> Dict[str, Any]:
    """Serialise a quote row with the camelCase keys consumers expect."""

    response = QuoteRowResponse(
        asset=row.asset,
        strike=row.strike,
        expiry=row.expiry,
        premium=row.premium,
        premium_source=row.premium_source,
        observed_premium=row.observed_premium,
        apr=row.apr,
        spot_price=row.spot_price,
        time_to_expiry=row.time_to_expiry,
        risk_free_rate=row.risk_free_rate,
        volatility=row.volatility,
        contract_size=row.contract_size,
        theoretical_apr=row.theoretical_apr,
        excess_apr=row.excess_apr,
    )
    return response.model_dump(by_alias=True)
