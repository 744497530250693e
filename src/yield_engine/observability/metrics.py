"""Prometheus metrics used across the yield engine."""

from __future__ import annotations

from prometheus_client import Counter, Histogram


REQUEST_COUNT = Counter(
    "ye_request_total",
    "Total number of HTTP requests processed",
    labelnames=("method", "route", "status_code"),
)

REQUEST_ERRORS = Counter(
    "ye_request_errors_total",
    "Total number of error responses emitted",
    labelnames=("method", "route", "status_code"),
)

REQUEST_LATENCY = Histogram(
    "ye_request_latency_seconds",
    "Distribution of HTTP request latency",
    labelnames=("method", "route"),
    buckets=(
        0.001,
        0.005,
        0.01,
        0.025,
        0.05,
        0.1,
        0.25,
        0.5,
        1.0,
        2.5,
        5.0,
        10.0,
        30.0,
    ),
)

PRICING_LATENCY = Histogram(
    "ye_pricing_latency_seconds",
    "Time spent pricing strikes",
    labelnames=("operation",),
    buckets=(
        0.00001,
        0.00005,
        0.0001,
        0.0005,
        0.001,
        0.005,
        0.01,
        0.05,
        0.1,
    ),
)

PRICING_ERRORS = Counter(
    "ye_pricing_errors_total",
    "Pricing failures by error kind",
    labelnames=("kind",),
)

MARKET_DATA_FAILURES = Counter(
    "ye_market_data_failures_total",
    "Failed refreshes of upstream market data",
    labelnames=("provider",),
)

MARKET_DATA_STALE_SERVES = Counter(
    "ye_market_data_stale_serves_total",
    "Times stale market data was served after a failed refresh",
    labelnames=("provider",),
)

QUOTE_SOURCE_FAILURES = Counter(
    "ye_quote_source_failures_total",
    "Quote extraction attempts that failed or returned no data",
    labelnames=("asset",),
)

RATE_LIMIT_REJECTIONS = Counter(
    "ye_rate_limit_rejections_total",
    "Number of requests rejected due to rate limiting",
    labelnames=("route",),
)
