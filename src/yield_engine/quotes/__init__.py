"""Quote sources and the quote board built on top of them."""

from .parser import StrikeQuote, parse_quotes
from .service import QuoteBoardService, QuoteRow
from .sources import (
    EmptyQuoteSource,
    NoQuotes,
    QuoteSource,
    QuoteSourceError,
    StaticQuoteSource,
    TextQuoteSource,
    http_text_loader,
    snapshot_loader,
)

__all__ = [
    "EmptyQuoteSource",
    "NoQuotes",
    "QuoteBoardService",
    "QuoteRow",
    "QuoteSource",
    "QuoteSourceError",
    "StaticQuoteSource",
    "StrikeQuote",
    "TextQuoteSource",
    "http_text_loader",
    "parse_quotes",
    "snapshot_loader",
]
