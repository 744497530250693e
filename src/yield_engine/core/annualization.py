"""Premium scaling and yield annualization helpers."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Optional

DAYS_PER_YEAR = 365.0
SECONDS_PER_YEAR = DAYS_PER_YEAR * 24.0 * 3600.0


def scale_premium(call_price: float, contract_size: float) -> float:
    """Return the premium of one contract covering ``contract_size`` units."""

    return call_price * contract_size


def period_return(premium: float, spot: float, contract_size: float) -> float:
    """Return the premium as a fraction of the notional it covers."""

    return premium / (contract_size * spot)


def days_to_expiry(time_to_expiry_years: float) -> float:
    return time_to_expiry_years * DAYS_PER_YEAR


def annualize_by_days(raw_return: float, days: float) -> Optional[float]:
    """Scale a period return over ``days`` to a 365-day rate, ``None`` at or past expiry."""

    if days <= 0:
        return None
    return raw_return * DAYS_PER_YEAR / days


def annualize(raw_return: float, time_to_expiry_years: float) -> Optional[float]:
    """Year-fraction form of :func:`annualize_by_days`."""

    return annualize_by_days(raw_return, days_to_expiry(time_to_expiry_years))


def time_to_expiry_years(expiry: datetime, now: Optional[datetime] = None) -> float:
    """Return the year fraction between ``now`` and ``expiry``.

    Naive datetimes are interpreted as UTC. The value is negative once the
    expiry has passed.
    """

    current = now or datetime.now(UTC)
    if current.tzinfo is None:
        current = current.replace(tzinfo=UTC)
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=UTC)
    return (expiry - current).total_seconds() / SECONDS_PER_YEAR


def premium_from_apr(
    apr: float,
    spot: float,
    time_to_expiry_years: float,
    contract_size: float,
) -> float:
    """Invert the annualization: the premium implied by a quoted APR."""

    return apr * spot * time_to_expiry_years * contract_size


def excess_apr(quoted_apr: Optional[float], theoretical_apr: Optional[float]) -> Optional[float]:
    """Quoted minus theoretical APR, ``None`` when either side is unavailable."""

    if quoted_apr is None or theoretical_apr is None:
        return None
    return quoted_apr - theoretical_apr


__all__ = [
    "DAYS_PER_YEAR",
    "annualize",
    "annualize_by_days",
    "days_to_expiry",
    "excess_apr",
    "period_return",
    "premium_from_apr",
    "scale_premium",
    "time_to_expiry_years",
]
