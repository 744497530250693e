"""Request bookkeeping and response hardening for the yield engine API."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Awaitable, Callable, Dict
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..observability.metrics import REQUEST_COUNT, REQUEST_ERRORS, REQUEST_LATENCY

LOGGER = logging.getLogger("yield_engine.request")

API_PREFIX = "/api/"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Harden responses; API payloads depend on live prices so they are never cached."""

    def __init__(self, app, *, hsts_max_age: int = 63_072_000) -> None:
        super().__init__(app)
        self._hsts_value = f"max-age={hsts_max_age}; includeSubDomains"

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers.setdefault("Strict-Transport-Security", self._hsts_value)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        if request.url.path.startswith(API_PREFIX):
            response.headers.setdefault("Cache-Control", "no-store")
        return response


def ensure_request_id(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        return request_id
    request_id = request.headers.get("x-request-id") or uuid4().hex
    request.state.request_id = request_id
    return request_id


def route_template(request: Request) -> str:
    """Matched route path, so metrics are not labelled per query string or asset."""

    return getattr(request.scope.get("route"), "path", request.url.path)


def _completion_payload(request: Request, status_code: int, duration: float) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "event": "request.complete",
        "request_id": getattr(request.state, "request_id", None),
        "method": request.method,
        "route": route_template(request),
        "status_code": status_code,
        "latency_ms": round(duration * 1000.0, 3),
    }
    # Set by the route handlers.
    for field in ("pricing_error", "quote_rows"):
        value = getattr(request.state, field, None)
        if value is not None:
            payload[field] = value
    return payload


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id, record request metrics and log one JSON line on completion."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = ensure_request_id(request)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._complete(request, 500, time.perf_counter() - start)
            raise

        response.headers.setdefault("X-Request-ID", request_id)
        self._complete(request, response.status_code, time.perf_counter() - start)
        return response

    @staticmethod
    def _complete(request: Request, status_code: int, duration: float) -> None:
        method, route = request.method, route_template(request)
        REQUEST_LATENCY.labels(method=method, route=route).observe(duration)
        REQUEST_COUNT.labels(method=method, route=route, status_code=str(status_code)).inc()
        if status_code >= 500:
            REQUEST_ERRORS.labels(method=method, route=route, status_code=str(status_code)).inc()
        payload = _completion_payload(request, status_code, duration)
        LOGGER.info(json.dumps(payload, separators=(",", ":"), sort_keys=True))


__all__ = [
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
    "ensure_request_id",
    "route_template",
]
