"""Core pricing and annualization utilities."""

from .annualization import (
    annualize,
    annualize_by_days,
    excess_apr,
    period_return,
    premium_from_apr,
    time_to_expiry_years,
)
from .assets import ASSETS, AssetSpec, get_asset, get_contract_size
from .errors import DegenerateInput, InvalidInput, MissingMarketData, PricingError
from .models import PricingRequest, PricingResult
from .pricing_engine import PricingEngine
from .pricing_models import black_scholes_call, normal_cdf

__all__ = [
    "ASSETS",
    "AssetSpec",
    "DegenerateInput",
    "InvalidInput",
    "MissingMarketData",
    "PricingEngine",
    "PricingError",
    "PricingRequest",
    "PricingResult",
    "annualize",
    "annualize_by_days",
    "black_scholes_call",
    "excess_apr",
    "get_asset",
    "get_contract_size",
    "normal_cdf",
    "period_return",
    "premium_from_apr",
    "time_to_expiry_years",
]
