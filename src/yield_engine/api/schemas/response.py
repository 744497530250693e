"""Response schemas exposed by the API."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PricingInputs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    spot: float
    strike: float
    time: float
    rate: float
    volatility: float
    contract_size: float = Field(alias="contractSize")


class PricingDebug(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    call_price: float = Field(alias="callPrice")
    premium_theo: float = Field(alias="premiumTheo")
    raw_return: float = Field(alias="rawReturn")
    inputs: PricingInputs


class TheoreticalAprResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    theoretical_apr: Optional[float] = Field(alias="theoreticalApr")
    debug: PricingDebug


class QuoteRowResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    asset: str
    strike: float
    expiry: int
    premium: float
    premium_source: str = Field(alias="premiumSource")
    observed_premium: Optional[float] = Field(None, alias="observedPremium")
    apr: float
    spot_price: float = Field(alias="spotPrice")
    time_to_expiry: float = Field(alias="timeToExpiry")
    risk_free_rate: float = Field(alias="riskFreeRate")
    volatility: Optional[float] = None
    contract_size: float = Field(alias="contractSize")
    theoretical_apr: Optional[float] = Field(None, alias="theoreticalApr")
    excess_apr: Optional[float] = Field(None, alias="excessApr")


class EmptyQuotesResponse(BaseModel):
    quotes: List[QuoteRowResponse]
    message: str
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    message: Optional[str] = None
