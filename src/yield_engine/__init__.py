"""Covered-call theoretical yield engine."""

from __future__ import annotations

__all__: list[str] = []
