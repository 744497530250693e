"""Shared dependencies for FastAPI routes."""

from __future__ import annotations

from functools import lru_cache

from ..core.assets import ASSETS
from ..core.pricing_engine import PricingEngine
from ..market_data.service import MarketDataService
from ..quotes.service import QuoteBoardService
from ..quotes.sources import (
    EmptyQuoteSource,
    QuoteSource,
    TextQuoteSource,
    http_text_loader,
    snapshot_loader,
)
from .config import get_settings


@lru_cache(maxsize=1)
def get_engine() -> PricingEngine:
    """Return the shared pricing engine instance."""

    return PricingEngine()


@lru_cache(maxsize=1)
def get_market_data() -> MarketDataService:
    """Return the process-wide market data service and its caches."""

    settings = get_settings()
    return MarketDataService.from_providers(
        ASSETS.values(),
        coingecko_url=settings.coingecko_url,
        deribit_url=settings.deribit_url,
        timeout_seconds=settings.http_timeout_seconds,
        ttl_seconds=settings.market_data_ttl_seconds,
    )


@lru_cache(maxsize=1)
def get_quote_source() -> QuoteSource:
    settings = get_settings()
    if settings.quote_snapshot_dir:
        loader = snapshot_loader(settings.quote_snapshot_dir)
    elif settings.quote_page_url:
        loader = http_text_loader(
            settings.quote_page_url, timeout_seconds=settings.http_timeout_seconds
        )
    else:
        return EmptyQuoteSource()
    return TextQuoteSource(
        loader,
        max_attempts=settings.quote_retries,
        retry_delay_seconds=settings.quote_retry_delay_seconds,
        min_strike=settings.quote_min_strike,
    )


def get_quote_board() -> QuoteBoardService:
    """Build the quote board over the shared engine, caches and source."""

    settings = get_settings()
    return QuoteBoardService(
        engine=get_engine(),
        market_data=get_market_data(),
        quote_source=get_quote_source(),
        assets=ASSETS.values(),
        expiry=settings.quote_expiry,
        risk_free_rate=settings.risk_free_rate,
        max_workers=settings.pricing_threads,
    )
