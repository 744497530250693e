"""Tests for quote extraction from page text."""

from __future__ import annotations

import pytest

from yield_engine.quotes.parser import StrikeQuote, parse_quotes, split_lines

APR_BLOCK_PAGE = """
UETH Covered Call
APR
12.5%
Strike
$3,600
Upfront premium
5.2 USDT upfront

APR
8%
$3,800.00
Upfront: 3.1 USDT
"""

INLINE_PAGE = """
ETH covered call
APR 12.5%
$3,600
9%
$3,900
"""


def test_split_lines_drops_blank_lines_and_whitespace() -> None:
    assert split_lines("  a \n\n\tb\n   \n") == ["a", "b"]


def test_apr_blocks_yield_strike_apr_and_premium() -> None:
    quotes = parse_quotes(APR_BLOCK_PAGE)

    assert quotes == [
        StrikeQuote(strike=3600.0, apr=pytest.approx(0.125), premium=5.2, source="apr_block"),
        StrikeQuote(strike=3800.0, apr=pytest.approx(0.08), premium=3.1, source="apr_block"),
    ]


def test_inline_percentages_are_a_fallback() -> None:
    quotes = parse_quotes(INLINE_PAGE)

    assert [(quote.strike, quote.source) for quote in quotes] == [
        (3600.0, "inline_percentage"),
        (3900.0, "inline_percentage"),
    ]
    assert quotes[0].apr == pytest.approx(0.125)
    assert quotes[1].apr == pytest.approx(0.09)
    assert all(quote.premium is None for quote in quotes)


def test_duplicate_strikes_keep_first_occurrence_and_sort() -> None:
    page = "\n".join(
        [
            "APR", "10%", "$4,000",
            "APR", "7%", "$3,500",
            "APR", "11%", "$4,000.00",
        ]
    )

    quotes = parse_quotes(page)

    assert [quote.strike for quote in quotes] == [3500.0, 4000.0]
    assert quotes[1].apr == pytest.approx(0.10)


def test_non_positive_apr_and_low_strikes_are_dropped() -> None:
    page = "\n".join(["APR", "0%", "$3,000", "APR", "6%", "$3,200", "APR", "9%", "$3,900"])

    assert [quote.strike for quote in parse_quotes(page)] == [3200.0, 3900.0]
    assert [quote.strike for quote in parse_quotes(page, min_strike=3500.0)] == [3900.0]


def test_strike_beyond_lookahead_is_ignored() -> None:
    page = "\n".join(["APR", "10%"] + ["filler"] * 8 + ["$4,000"])

    assert parse_quotes(page) == []


def test_page_without_quotes_returns_empty_list() -> None:
    assert parse_quotes("Connect wallet to view vaults") == []
