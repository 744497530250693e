"""Assemble the quote board: quoted versus theoretical APR per strike."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Callable, Iterable, List, Optional, Sequence

from ..core.annualization import excess_apr, premium_from_apr, time_to_expiry_years
from ..core.assets import AssetSpec
from ..core.errors import PricingError
from ..core.pricing_engine import PricingEngine
from ..market_data.service import MarketDataService
from ..observability.metrics import PRICING_ERRORS, PRICING_LATENCY
from .parser import StrikeQuote
from .sources import NoQuotes, QuoteSource

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class QuoteRow:
    """One quoted strike with the derived theoretical figures.

    ``premium`` is always calculated from the quoted APR; a premium observed
    on the venue, if any, is kept in ``observed_premium``.
    """

    asset: str
    strike: float
    expiry: int
    premium: float
    apr: float
    spot_price: float
    time_to_expiry: float
    risk_free_rate: float
    volatility: Optional[float]
    contract_size: float
    theoretical_apr: Optional[float]
    excess_apr: Optional[float]
    observed_premium: Optional[float] = None
    premium_source: str = "calculated"


class QuoteBoardService:
    """Build quote rows for every configured asset."""

    def __init__(
        self,
        *,
        engine: PricingEngine,
        market_data: MarketDataService,
        quote_source: QuoteSource,
        assets: Iterable[AssetSpec],
        expiry: datetime,
        risk_free_rate: float,
        max_workers: int = 4,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._engine = engine
        self._market_data = market_data
        self._quote_source = quote_source
        self._assets = tuple(assets)
        self._expiry = expiry if expiry.tzinfo else expiry.replace(tzinfo=UTC)
        self._risk_free_rate = risk_free_rate
        self._max_workers = max(1, max_workers)
        self._clock = clock

    def build(self) -> List[QuoteRow]:
        """Return quote rows ordered by asset then strike.

        Assets without a spot price or without quoted strikes are skipped.
        """

        tau = time_to_expiry_years(self._expiry, self._clock())
        if tau <= 0:
            LOGGER.warning(
                "Quote expiry %s has passed; theoretical APRs are unavailable until it is updated",
                self._expiry.isoformat(),
            )
        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="quote-board") as pool:
            per_asset = list(pool.map(lambda asset: self._rows_for_asset(asset, tau), self._assets))

        rows = [row for asset_rows in per_asset for row in asset_rows]
        if not rows:
            LOGGER.warning("No quotes generated")
        else:
            LOGGER.info("Generated %d quotes", len(rows))
        return rows

    def _rows_for_asset(self, asset: AssetSpec, tau: float) -> List[QuoteRow]:
        market = self._market_data.get(asset)
        if market.spot is None:
            LOGGER.warning("Skipping %s: no spot price available", asset.name)
            return []

        result = self._quote_source.fetch(asset.name)
        if isinstance(result, NoQuotes):
            LOGGER.warning("Skipping %s: %s", asset.name, result.reason)
            return []

        theoretical = self._theoretical_aprs(asset, market.spot, market.volatility, tau, result)
        expiry_ts = int(self._expiry.timestamp())
        rows: List[QuoteRow] = []
        for quote, theoretical_apr in zip(result, theoretical):
            rows.append(
                QuoteRow(
                    asset=asset.name,
                    strike=quote.strike,
                    expiry=expiry_ts,
                    premium=premium_from_apr(quote.apr, market.spot, tau, asset.contract_size),
                    apr=quote.apr,
                    spot_price=market.spot,
                    time_to_expiry=tau,
                    risk_free_rate=self._risk_free_rate,
                    volatility=market.volatility,
                    contract_size=asset.contract_size,
                    theoretical_apr=theoretical_apr,
                    excess_apr=excess_apr(quote.apr, theoretical_apr),
                    observed_premium=quote.premium,
                )
            )
        return rows

    def _theoretical_aprs(
        self,
        asset: AssetSpec,
        spot: float,
        volatility: Optional[float],
        tau: float,
        quotes: Sequence[StrikeQuote],
    ) -> List[Optional[float]]:
        unavailable: List[Optional[float]] = [None] * len(quotes)
        start = time.perf_counter()
        try:
            results = self._engine.price_ladder(
                spot=spot,
                strikes=[quote.strike for quote in quotes],
                time_to_expiry_years=tau,
                risk_free_rate=self._risk_free_rate,
                volatility=volatility,
                contract_size=asset.contract_size,
            )
        except PricingError as exc:
            PRICING_ERRORS.labels(kind=exc.kind).inc()
            LOGGER.warning("Theoretical APR unavailable for %s: %s", asset.name, exc)
            return unavailable
        finally:
            PRICING_LATENCY.labels(operation="ladder").observe(time.perf_counter() - start)
        return [result.theoretical_apr for result in results]


__all__ = ["QuoteBoardService", "QuoteRow"]
