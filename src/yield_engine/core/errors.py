"""Exception taxonomy raised by the pricing core."""

from __future__ import annotations


class PricingError(ValueError):
    """Base class for failures reported by the pricing engine."""

    kind = "pricing_error"


class InvalidInput(PricingError):
    """A numeric parameter is malformed or outside its domain."""

    kind = "invalid_input"


class MissingMarketData(PricingError):
    """A required market input, typically volatility, is unavailable upstream."""

    kind = "missing_market_data"


class DegenerateInput(PricingError):
    """The inputs make the pricing formula mathematically undefined."""

    kind = "degenerate_input"


__all__ = ["DegenerateInput", "InvalidInput", "MissingMarketData", "PricingError"]
