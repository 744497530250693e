"""HTTP clients for spot price and volatility feeds."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

import httpx

from ..core.assets import AssetSpec

LOGGER = logging.getLogger(__name__)

DEFAULT_COINGECKO_URL = "https://api.coingecko.com/api/v3"
DEFAULT_DERIBIT_URL = "https://www.deribit.com/api/v2"


class MarketDataError(RuntimeError):
    """Raised when an upstream market data feed cannot be used."""


class CoinGeckoSpotProvider:
    """Fetch USD spot prices from the CoinGecko simple price endpoint."""

    name = "coingecko"

    def __init__(
        self,
        assets: Iterable[AssetSpec],
        *,
        base_url: str = DEFAULT_COINGECKO_URL,
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._assets = tuple(assets)
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    def __call__(self) -> Dict[str, Optional[float]]:
        return self.fetch()

    def fetch(self) -> Dict[str, Optional[float]]:
        """Return the spot price per asset name, ``None`` where unavailable."""

        coin_ids = sorted({asset.spot_id for asset in self._assets if asset.spot_id})
        if not coin_ids:
            raise MarketDataError("No CoinGecko ids configured")

        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.get(
                    f"{self._base_url}/simple/price",
                    params={"ids": ",".join(coin_ids), "vs_currencies": "usd"},
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise MarketDataError(f"CoinGecko request failed: {exc}") from exc

        if not isinstance(data, Mapping):
            raise MarketDataError("CoinGecko response is not a JSON object")

        prices: Dict[str, Optional[float]] = {}
        for asset in self._assets:
            prices[asset.name] = _extract_usd(data, asset.spot_id)
            if prices[asset.name] is None:
                LOGGER.info("%s: no spot price available", asset.name)
        return prices


def _extract_usd(data: Mapping[str, Any], coin_id: Optional[str]) -> Optional[float]:
    if coin_id is None:
        return None
    entry = data.get(coin_id)
    if not isinstance(entry, Mapping):
        return None
    value = entry.get("usd")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return None
    return float(value)


class DeribitVolatilityProvider:
    """Fetch the latest historical volatility per currency from Deribit."""

    name = "deribit"

    def __init__(
        self,
        assets: Iterable[AssetSpec],
        *,
        base_url: str = DEFAULT_DERIBIT_URL,
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._assets = tuple(assets)
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    def __call__(self) -> Dict[str, Optional[float]]:
        return self.fetch()

    def fetch(self) -> Dict[str, Optional[float]]:
        """Return annualised volatility per asset name as a decimal.

        A currency whose request fails maps to ``None``; the call raises only
        when every configured currency failed.
        """

        currencies = sorted({a.volatility_currency for a in self._assets if a.volatility_currency})
        if not currencies:
            raise MarketDataError("No Deribit currencies configured")

        by_currency: Dict[str, Optional[float]] = {}
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            for currency in currencies:
                try:
                    by_currency[currency] = self._latest_volatility(client, currency)
                except MarketDataError as exc:
                    LOGGER.warning("Failed to get %s volatility from Deribit: %s", currency, exc)
                    by_currency[currency] = None

        if all(value is None for value in by_currency.values()):
            raise MarketDataError("Deribit volatility unavailable for every currency")

        return {
            asset.name: by_currency.get(asset.volatility_currency) if asset.volatility_currency else None
            for asset in self._assets
        }

    def _latest_volatility(self, client: httpx.Client, currency: str) -> float:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "public/get_historical_volatility",
            "params": {"currency": currency},
        }
        try:
            response = client.post(f"{self._base_url}/public/get_historical_volatility", json=payload)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise MarketDataError(f"Deribit request failed: {exc}") from exc

        if not isinstance(data, Mapping):
            raise MarketDataError("Deribit response is not a JSON object")
        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, Mapping) else error
            raise MarketDataError(f"Deribit API error: {message}")

        history = data.get("result")
        if not isinstance(history, list) or not history:
            raise MarketDataError("No historical volatility data available")

        latest = history[-1]
        try:
            percent = float(latest[1])
        except (TypeError, ValueError, IndexError) as exc:
            raise MarketDataError("Malformed historical volatility entry") from exc
        if not percent > 0:
            raise MarketDataError("Invalid volatility value in latest data")

        LOGGER.debug("%s Deribit historical volatility (latest): %.2f%%", currency, percent)
        return percent / 100.0


__all__ = [
    "CoinGeckoSpotProvider",
    "DEFAULT_COINGECKO_URL",
    "DEFAULT_DERIBIT_URL",
    "DeribitVolatilityProvider",
    "MarketDataError",
]
