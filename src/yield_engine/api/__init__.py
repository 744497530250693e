"""HTTP surface of the yield engine."""

from .app import create_app

__all__ = ["create_app"]
