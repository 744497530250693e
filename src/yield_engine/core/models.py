"""Domain models for the covered-call yield engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class PricingRequest:
    """Market inputs required to price one covered-call strike.

    ``volatility`` is ``None`` when the upstream provider has no value for the
    asset. Range checks live in :func:`yield_engine.core.validation.validate_pricing_request`
    so that the engine reports them through its own error taxonomy.
    """

    spot: float
    strike: float
    time_to_expiry_years: float
    risk_free_rate: float
    volatility: Optional[float]
    contract_size: float


@dataclass(frozen=True, slots=True)
class PricingResult:
    """Outcome of pricing a :class:`PricingRequest`."""

    call_price: float
    premium: float
    period_return: float
    theoretical_apr: Optional[float]

    @property
    def is_annualized(self) -> bool:
        return self.theoretical_apr is not None
