"""Per-client rate limiting of the public API routes."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import get_settings

limiter = Limiter(key_func=get_remote_address)


def configured_limit() -> str:
    """Limit string from settings, read per request so tests and reloads see changes."""

    return get_settings().rate_limit_default


__all__ = ["configured_limit", "limiter"]
