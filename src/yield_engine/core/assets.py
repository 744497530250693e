"""Catalogue of the structured income assets the engine knows about."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

DEFAULT_CONTRACT_SIZE = 0.5


@dataclass(frozen=True, slots=True)
class AssetSpec:
    """Static description of a quoted asset.

    ``spot_id`` is the CoinGecko coin id and ``volatility_currency`` the
    Deribit currency; either is ``None`` when no feed covers the asset.
    """

    name: str
    contract_size: float
    spot_id: Optional[str] = None
    volatility_currency: Optional[str] = None


ASSETS: Dict[str, AssetSpec] = {
    spec.name: spec
    for spec in (
        AssetSpec("UBTC", 0.05, spot_id="bitcoin", volatility_currency="BTC"),
        AssetSpec("UETH", 0.5, spot_id="ethereum", volatility_currency="ETH"),
        AssetSpec("WHYPE", 0.5, spot_id="hyperliquid"),
        AssetSpec("kHYPE", 0.5, spot_id="hyperliquid"),
        AssetSpec("UPUMP", 0.5),
    )
}


def get_asset(name: str) -> AssetSpec:
    """Return the catalogued spec, or a default one for unknown assets."""

    spec = ASSETS.get(name)
    if spec is None:
        return AssetSpec(name, DEFAULT_CONTRACT_SIZE)
    return spec


def get_contract_size(name: str) -> float:
    return get_asset(name).contract_size


def asset_names() -> Tuple[str, ...]:
    return tuple(ASSETS)


__all__ = ["ASSETS", "AssetSpec", "DEFAULT_CONTRACT_SIZE", "asset_names", "get_asset", "get_contract_size"]
