"""Best-effort extraction of strike quotes from rendered page text."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

LOGGER = logging.getLogger(__name__)

_PERCENT_LINE = re.compile(r"^([0-9.]+)%$")
_INLINE_APR = re.compile(r"^(?:APR\s*)?([0-9.]+)%$", re.IGNORECASE)
_STRIKE_LINE = re.compile(r"^\$([0-9,]+(?:\.[0-9]{2})?)$")
_PREMIUM_PATTERNS = (
    re.compile(r"([0-9.]+)\s*USDT[0-9]*\s*upfront", re.IGNORECASE),
    re.compile(r"([0-9.]+)\s*USDT"),
    re.compile(r"upfront\D*?([0-9.]+)", re.IGNORECASE),
    re.compile(r"([0-9.]+)"),
)
_LOOKAHEAD = 8
_STRIKE_TOLERANCE = 0.01


@dataclass(frozen=True, slots=True)
class StrikeQuote:
    """A quoted strike with its APR as a decimal and any observed premium."""

    strike: float
    apr: float
    premium: Optional[float] = None
    source: str = "apr_block"


def _to_float(text: str) -> Optional[float]:
    try:
        return float(text.replace(",", ""))
    except ValueError:
        return None


def split_lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _is_premium_line(line: str) -> bool:
    lowered = line.lower()
    return "upfront" in lowered or "USDT" in line


def _parse_premium(line: str) -> Optional[float]:
    for pattern in _PREMIUM_PATTERNS:
        match = pattern.search(line)
        if match:
            value = _to_float(match.group(1))
            if value is not None:
                return value
    return None


def _scan_block(lines: Sequence[str], start: int) -> tuple[Optional[float], Optional[float]]:
    strike: Optional[float] = None
    premium: Optional[float] = None
    for line in lines[start : start + _LOOKAHEAD]:
        if strike is None:
            match = _STRIKE_LINE.match(line)
            if match:
                strike = _to_float(match.group(1))
                continue
        if premium is None and _is_premium_line(line):
            premium = _parse_premium(line)
    return strike, premium


def _apr_blocks(lines: Sequence[str]) -> List[StrikeQuote]:
    """Match an ``APR`` label followed by a percentage, a strike and a premium."""

    quotes: List[StrikeQuote] = []
    for index in range(len(lines) - 1):
        if lines[index] != "APR":
            continue
        match = _PERCENT_LINE.match(lines[index + 1])
        if not match:
            continue
        apr = _to_float(match.group(1))
        strike, premium = _scan_block(lines, index + 2)
        if apr is not None and strike is not None:
            quotes.append(StrikeQuote(strike, apr / 100.0, premium, "apr_block"))
    return quotes


def _inline_percentages(lines: Sequence[str]) -> List[StrikeQuote]:
    """Fallback: any ``APR x%`` or bare percentage line followed by a strike."""

    quotes: List[StrikeQuote] = []
    for index, line in enumerate(lines):
        match = _INLINE_APR.match(line)
        if not match:
            continue
        apr = _to_float(match.group(1))
        strike, premium = _scan_block(lines, index + 1)
        if apr is not None and strike is not None:
            quotes.append(StrikeQuote(strike, apr / 100.0, premium, "inline_percentage"))
    return quotes


_STRATEGIES = (_apr_blocks, _inline_percentages)


def _deduplicate(quotes: Iterable[StrikeQuote]) -> List[StrikeQuote]:
    unique: List[StrikeQuote] = []
    for quote in quotes:
        if any(abs(existing.strike - quote.strike) < _STRIKE_TOLERANCE for existing in unique):
            continue
        unique.append(quote)
    return sorted(unique, key=lambda quote: quote.strike)


def parse_quotes(text: str, *, min_strike: float = 0.0) -> List[StrikeQuote]:
    """Extract strike quotes from page text.

    Strategies are tried in order and the first one yielding quotes wins.
    Quotes with a non-positive APR or a strike not above ``min_strike`` are
    dropped; duplicate strikes keep their first occurrence.
    """

    lines = split_lines(text)
    for strategy in _STRATEGIES:
        quotes = [
            quote
            for quote in strategy(lines)
            if quote.apr > 0 and quote.strike > min_strike
        ]
        if quotes:
            LOGGER.debug("%s matched %d quotes", strategy.__name__, len(quotes))
            return _deduplicate(quotes)
    return []


__all__ = ["StrikeQuote", "parse_quotes", "split_lines"]
