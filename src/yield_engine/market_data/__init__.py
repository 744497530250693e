"""Upstream market data feeds and their cache."""

from .cache import CachedValue, MarketDataCache
from .providers import CoinGeckoSpotProvider, DeribitVolatilityProvider, MarketDataError
from .service import AssetMarketData, MarketDataService

__all__ = [
    "AssetMarketData",
    "CachedValue",
    "CoinGeckoSpotProvider",
    "DeribitVolatilityProvider",
    "MarketDataCache",
    "MarketDataError",
    "MarketDataService",
]
