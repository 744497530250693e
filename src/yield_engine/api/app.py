"""FastAPI application exposing the yield engine."""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Callable

import psutil
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from slowapi.errors import RateLimitExceeded

from ..observability.metrics import RATE_LIMIT_REJECTIONS
from .config import get_settings
from .middleware import (
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
    ensure_request_id,
    route_template,
)
from .rate_limit import limiter
from .routes import pricing, quotes

LOGGER = logging.getLogger(__name__)
START_TIME = time.time()


def _create_rate_limit_handler() -> Callable[[Request, Exception], JSONResponse]:
    def handler(request: Request, exc: Exception) -> JSONResponse:
        RATE_LIMIT_REJECTIONS.labels(route=route_template(request)).inc()
        response = JSONResponse(
            status_code=getattr(exc, "status_code", 429),
            content={"error": "Rate limit exceeded"},
        )
        response.headers.setdefault("X-Request-ID", ensure_request_id(request))
        return response

    return handler


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Covered-Call Yield Engine",
        version="1.0.0",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )

    app.state.settings = settings
    app.state.limiter = limiter

    app.add_exception_handler(RateLimitExceeded, _create_rate_limit_handler())
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=list(settings.allowed_hosts))
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Accept-Language", "X-Request-ID"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(pricing.router, prefix="/api")
    app.include_router(quotes.router, prefix="/api")

    @app.get("/metrics", tags=["monitoring"], include_in_schema=False)
    async def metrics() -> Response:
        """Expose Prometheus metrics for scraping."""

        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    def _health_payload(cpu: float | None, memory: float | None) -> dict[str, object]:
        uptime = max(0.0, time.time() - START_TIME)
        return {
            "status": "ok",
            "timestamp": datetime.now(UTC).isoformat(),
            "version": app.version,
            "environment": settings.environment,
            "uptime_seconds": round(uptime, 3),
            "system": {
                "cpu_percent": cpu,
                "memory_percent": memory,
            },
        }

    @app.get("/healthz", tags=["monitoring"])
    async def healthz() -> dict[str, object]:
        """Expose the readiness of the service."""

        try:
            cpu_usage = psutil.cpu_percent(interval=None)
            memory_usage = psutil.virtual_memory().percent
        except (psutil.Error, PermissionError):
            return _health_payload(cpu=None, memory=None)

        return _health_payload(cpu=cpu_usage, memory=memory_usage)

    @app.get("/health", tags=["monitoring"], include_in_schema=False)
    async def health() -> dict[str, object]:
        return await healthz()

    @app.exception_handler(Exception)
    async def global_error(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled exception: %s", exc)
        response = JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": type(exc).__name__},
        )
        response.headers.setdefault("X-Request-ID", ensure_request_id(request))
        return response

    return app
