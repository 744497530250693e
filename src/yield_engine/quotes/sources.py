"""Quote sources returning quoted strikes per asset."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Mapping, Protocol, Sequence, Tuple, Union

import httpx

from ..observability.metrics import QUOTE_SOURCE_FAILURES
from .parser import StrikeQuote, parse_quotes

LOGGER = logging.getLogger(__name__)

TextLoader = Callable[[str], str]


class QuoteSourceError(RuntimeError):
    """Raised when a quote source cannot load the text for an asset."""


@dataclass(frozen=True, slots=True)
class NoQuotes:
    """Explicit "no data" outcome of a quote source."""

    asset: str
    reason: str


QuoteResult = Union[Tuple[StrikeQuote, ...], NoQuotes]


class QuoteSource(Protocol):
    def fetch(self, asset: str) -> QuoteResult:
        """Return the quoted strikes for ``asset`` or :class:`NoQuotes`."""


class StaticQuoteSource:
    """Serve a fixed set of quotes, e.g. from configuration or tests."""

    def __init__(self, quotes: Mapping[str, Iterable[StrikeQuote]]) -> None:
        self._quotes: Dict[str, Tuple[StrikeQuote, ...]] = {
            asset: tuple(sorted(items, key=lambda quote: quote.strike))
            for asset, items in quotes.items()
        }

    def fetch(self, asset: str) -> QuoteResult:
        quotes = self._quotes.get(asset)
        if not quotes:
            return NoQuotes(asset, "no quotes configured")
        return quotes


class EmptyQuoteSource:
    """Quote source used when no venue is configured."""

    def fetch(self, asset: str) -> QuoteResult:
        return NoQuotes(asset, "no quote source configured")


class TextQuoteSource:
    """Parse quotes from rendered page text with retry and backoff.

    A load failure or a page without quotes is retried; a page where some
    strikes lack an observed premium is retried too and the last parse is
    kept once attempts run out.
    """

    def __init__(
        self,
        loader: TextLoader,
        *,
        max_attempts: int = 3,
        retry_delay_seconds: float = 2.0,
        min_strike: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._loader = loader
        self._max_attempts = max(1, max_attempts)
        self._retry_delay = max(0.0, retry_delay_seconds)
        self._min_strike = min_strike
        self._sleep = sleep

    def fetch(self, asset: str) -> QuoteResult:
        quotes: Sequence[StrikeQuote] = ()
        reason = "no quotes found in page text"

        for attempt in range(1, self._max_attempts + 1):
            try:
                text = self._loader(asset)
            except QuoteSourceError as exc:
                reason = str(exc)
                LOGGER.warning(
                    "%s: extraction attempt %d/%d failed: %s", asset, attempt, self._max_attempts, exc
                )
            else:
                quotes = parse_quotes(text, min_strike=self._min_strike)
                with_premium = sum(1 for quote in quotes if quote.premium is not None)
                LOGGER.info(
                    "%s: attempt %d/%d found %d strikes, %d with premiums",
                    asset,
                    attempt,
                    self._max_attempts,
                    len(quotes),
                    with_premium,
                )
                if quotes and with_premium == len(quotes):
                    break

            if attempt < self._max_attempts:
                self._sleep(self._retry_delay * 2 ** (attempt - 1))

        if not quotes:
            QUOTE_SOURCE_FAILURES.labels(asset=asset).inc()
            return NoQuotes(asset, reason)
        return tuple(quotes)


def snapshot_loader(directory: str | Path) -> TextLoader:
    """Read ``<directory>/<asset>.txt`` page text snapshots."""

    root = Path(directory)

    def load(asset: str) -> str:
        path = root / f"{asset}.txt"
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise QuoteSourceError(f"cannot read {path}: {exc}") from exc

    return load


def http_text_loader(
    url_template: str,
    *,
    timeout_seconds: float = 10.0,
    transport: httpx.BaseTransport | None = None,
) -> TextLoader:
    """Fetch page text from ``url_template.format(asset=...)``."""

    def load(asset: str) -> str:
        url = url_template.format(asset=asset)
        try:
            with httpx.Client(timeout=timeout_seconds, transport=transport) as client:
                response = client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPError as exc:
            raise QuoteSourceError(f"GET {url} failed: {exc}") from exc

    return load


__all__ = [
    "EmptyQuoteSource",
    "NoQuotes",
    "QuoteResult",
    "QuoteSource",
    "QuoteSourceError",
    "StaticQuoteSource",
    "TextQuoteSource",
    "http_text_loader",
    "snapshot_loader",
]
