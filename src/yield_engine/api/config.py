"""Centralised application configuration derived from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import lru_cache
from typing import Tuple

from ..market_data.providers import DEFAULT_COINGECKO_URL, DEFAULT_DERIBIT_URL

DEFAULT_QUOTE_EXPIRY = "2025-08-29"


def _get_env(name: str, *, default: str | None = None, required: bool = False) -> str | None:
    """Return a trimmed environment variable value.

    Parameters
    ----------
    name:
        Name of the environment variable to read.
    default:
        Optional default returned when the variable is not set.
    required:
        When ``True`` a ``RuntimeError`` is raised if the variable is missing
        or blank.
    """

    value = os.getenv(name)
    if value is None:
        if required:
            raise RuntimeError(f"Environment variable {name} is required")
        return default

    trimmed = value.strip()
    if not trimmed:
        if required:
            raise RuntimeError(f"Environment variable {name} must not be blank")
        return default
    return trimmed


def _get_env_alias(
    *names: str, default: str | None = None, required: bool = False
) -> str | None:
    """Return the first non-empty value from the supplied environment aliases."""

    for name in names:
        value = _get_env(name)
        if value is not None:
            return value

    if required:
        joined = " / ".join(names)
        raise RuntimeError(f"Environment variable {joined} is required")

    return default


def _split_csv(value: str | None) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _as_int(name: str, *, default: int | None = None, minimum: int | None = None) -> int:
    raw = _get_env(name)
    if raw is None:
        if default is None:
            raise RuntimeError(f"Environment variable {name} is required")
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be an integer") from exc
    if minimum is not None and value < minimum:
        raise RuntimeError(f"Environment variable {name} must be >= {minimum}")
    return value


def _as_float(
    name: str,
    *,
    default: float | None = None,
    minimum: float | None = None,
) -> float:
    raw = _get_env(name)
    if raw is None:
        if default is None:
            raise RuntimeError(f"Environment variable {name} is required")
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be a number") from exc
    if minimum is not None and value < minimum:
        raise RuntimeError(f"Environment variable {name} must be >= {minimum}")
    return value


def _as_bool(name: str, *, default: bool) -> bool:
    raw = _get_env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _as_expiry(name: str, *, default: str) -> datetime:
    raw = _get_env(name, default=default) or default
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be an ISO-8601 date") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable view over application configuration."""

    environment: str
    host: str
    port: int
    allowed_hosts: Tuple[str, ...]
    allowed_origins: Tuple[str, ...]
    cors_allow_credentials: bool
    rate_limit_default: str
    risk_free_rate: float
    quote_expiry: datetime
    market_data_ttl_seconds: float
    http_timeout_seconds: float
    coingecko_url: str
    deribit_url: str
    quote_snapshot_dir: str | None
    quote_page_url: str | None
    quote_retries: int
    quote_retry_delay_seconds: float
    quote_min_strike: float
    pricing_threads: int
    log_level: str

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the current process environment."""

    environment_raw = (
        _get_env_alias("ENV", "YE_ENVIRONMENT", default="development") or "development"
    ).lower()
    if environment_raw in {"prod", "production"}:
        environment = "production"
    elif environment_raw in {"dev", "development"}:
        environment = "development"
    else:
        environment = environment_raw

    allowed_hosts = _split_csv(_get_env_alias("ALLOWED_HOSTS", "YE_ALLOWED_HOSTS"))
    if not allowed_hosts:
        if environment == "production":
            raise RuntimeError("ALLOWED_HOSTS must be provided when ENV/YE_ENVIRONMENT=production")
        allowed_hosts = ("localhost", "127.0.0.1")

    allowed_origins = _split_csv(_get_env_alias("CORS_ALLOWED_ORIGINS", "YE_ALLOWED_ORIGINS"))
    if not allowed_origins and environment != "production":
        allowed_origins = (
            "http://localhost",
            "http://localhost:3000",
            "http://localhost:5173",
        )

    snapshot_dir = _get_env("YE_QUOTE_SNAPSHOT_DIR")
    page_url = _get_env("YE_QUOTE_PAGE_URL")
    if snapshot_dir and page_url:
        raise RuntimeError("Only one of YE_QUOTE_SNAPSHOT_DIR or YE_QUOTE_PAGE_URL may be set")
    if page_url and "{asset}" not in page_url:
        raise RuntimeError("YE_QUOTE_PAGE_URL must contain an {asset} placeholder")

    risk_free_rate = _as_float("YE_RISK_FREE_RATE", default=0.04)

    return Settings(
        environment=environment,
        host=_get_env("YE_HOST", default="127.0.0.1") or "127.0.0.1",
        port=_as_int("PORT", default=3001, minimum=1),
        allowed_hosts=allowed_hosts,
        allowed_origins=allowed_origins,
        cors_allow_credentials=_as_bool("YE_CORS_ALLOW_CREDENTIALS", default=True),
        rate_limit_default=_get_env("RATE_LIMIT_DEFAULT", default="60/minute") or "60/minute",
        risk_free_rate=risk_free_rate,
        quote_expiry=_as_expiry("YE_QUOTE_EXPIRY", default=DEFAULT_QUOTE_EXPIRY),
        market_data_ttl_seconds=_as_float("YE_MARKET_DATA_TTL_SECONDS", default=60.0, minimum=0.0),
        http_timeout_seconds=_as_float("YE_HTTP_TIMEOUT_SECONDS", default=10.0, minimum=0.1),
        coingecko_url=_get_env("YE_COINGECKO_URL", default=DEFAULT_COINGECKO_URL)
        or DEFAULT_COINGECKO_URL,
        deribit_url=_get_env("YE_DERIBIT_URL", default=DEFAULT_DERIBIT_URL) or DEFAULT_DERIBIT_URL,
        quote_snapshot_dir=snapshot_dir,
        quote_page_url=page_url,
        quote_retries=_as_int("YE_QUOTE_RETRIES", default=3, minimum=1),
        quote_retry_delay_seconds=_as_float("YE_QUOTE_RETRY_DELAY_SECONDS", default=2.0, minimum=0.0),
        quote_min_strike=_as_float("YE_QUOTE_MIN_STRIKE", default=0.0, minimum=0.0),
        pricing_threads=_as_int("YE_PRICING_THREADS", default=4, minimum=1),
        log_level=(_get_env("YE_LOG_LEVEL", default="INFO") or "INFO").upper(),
    )
