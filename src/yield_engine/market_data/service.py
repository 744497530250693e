"""Market data lookups combining the spot and volatility caches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.assets import AssetSpec
from .cache import MarketDataCache
from .providers import CoinGeckoSpotProvider, DeribitVolatilityProvider


@dataclass(frozen=True, slots=True)
class AssetMarketData:
    """Latest known inputs for one asset; ``None`` marks an unavailable feed."""

    spot: Optional[float]
    volatility: Optional[float]


class MarketDataService:
    def __init__(self, spot_cache: MarketDataCache, volatility_cache: MarketDataCache) -> None:
        self.spot_cache = spot_cache
        self.volatility_cache = volatility_cache

    @classmethod
    def from_providers(
        cls,
        assets: Iterable[AssetSpec],
        *,
        coingecko_url: str,
        deribit_url: str,
        timeout_seconds: float,
        ttl_seconds: float,
    ) -> "MarketDataService":
        specs = tuple(assets)
        spot = CoinGeckoSpotProvider(specs, base_url=coingecko_url, timeout_seconds=timeout_seconds)
        vol = DeribitVolatilityProvider(specs, base_url=deribit_url, timeout_seconds=timeout_seconds)
        return cls(
            MarketDataCache(spot, name=spot.name, ttl_seconds=ttl_seconds),
            MarketDataCache(vol, name=vol.name, ttl_seconds=ttl_seconds),
        )

    def get(self, asset: AssetSpec) -> AssetMarketData:
        spot = self.spot_cache.get(asset.name) if asset.spot_id else None
        volatility = self.volatility_cache.get(asset.name) if asset.volatility_currency else None
        return AssetMarketData(spot=spot, volatility=volatility)


__all__ = ["AssetMarketData", "MarketDataService"]
