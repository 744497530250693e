"""Test configuration and environment bootstrapping."""

from __future__ import annotations

import os
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from yield_engine.api import dependencies
from yield_engine.api.app import create_app
from yield_engine.api.config import get_settings
from yield_engine.api.rate_limit import limiter

os.environ.setdefault("YE_ENVIRONMENT", "development")
os.environ.setdefault("ALLOWED_HOSTS", "testserver,localhost,127.0.0.1")
os.environ.setdefault("CORS_ALLOWED_ORIGINS", "http://testserver")
os.environ.setdefault("RATE_LIMIT_DEFAULT", "1000/minute")
os.environ.setdefault("YE_PRICING_THREADS", "2")


def _clear_caches() -> None:
    get_settings.cache_clear()
    dependencies.get_engine.cache_clear()
    dependencies.get_market_data.cache_clear()
    dependencies.get_quote_source.cache_clear()
    limiter.reset()


@pytest.fixture(autouse=True)
def _reset_configuration() -> Iterator[None]:
    """Start every test from freshly loaded settings and shared services."""

    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture()
def client() -> Iterator[TestClient]:
    """Return a test client backed by a fresh FastAPI application."""

    with TestClient(create_app()) as test_client:
        yield test_client
