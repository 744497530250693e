"""API routers."""

from . import pricing, quotes

__all__ = ["pricing", "quotes"]
