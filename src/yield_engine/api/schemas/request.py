"""Pydantic request schemas exposed by the public API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ...core.assets import DEFAULT_CONTRACT_SIZE


class TheoreticalAprQuery(BaseModel):
    """Query parameters of ``GET /api/theoretical_apr``.

    Only the types are checked here; domain checks are left to the pricing
    engine so that they surface through its error taxonomy.
    """

    model_config = ConfigDict(extra="ignore")

    s: float
    k: float
    t: float
    r: float
    sigma: float
    contract_size: float = Field(DEFAULT_CONTRACT_SIZE)
