"""Theoretical APR endpoint."""

import logging
import time
from typing import Union

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ...core.errors import InvalidInput, PricingError
from ...observability.metrics import PRICING_ERRORS, PRICING_LATENCY
from ..dependencies import get_engine
from ..mappers import to_pricing_request, to_theoretical_apr_response
from ..rate_limit import configured_limit, limiter
from ..schemas.request import TheoreticalAprQuery
from ..schemas.response import ErrorResponse, TheoreticalAprResponse

LOGGER = logging.getLogger(__name__)
router = APIRouter(tags=["pricing"])


def _describe_query_error(exc: ValidationError) -> str:
    missing = [str(error["loc"][0]) for error in exc.errors() if error["type"] == "missing"]
    if missing:
        return "Missing required query parameters: " + ", ".join(missing)
    invalid = sorted({str(error["loc"][0]) for error in exc.errors()})
    return "Query parameters must be numbers: " + ", ".join(invalid)


@router.get(
    "/theoretical_apr",
    response_model=TheoreticalAprResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
@limiter.limit(configured_limit)
async def theoretical_apr(request: Request) -> Union[TheoreticalAprResponse, JSONResponse]:
    """Price one strike and return its theoretical APR with the intermediate figures."""

    try:
        query = TheoreticalAprQuery.model_validate(dict(request.query_params))
    except ValidationError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _describe_query_error(exc)},
        )

    pricing_request = to_pricing_request(query)
    start = time.perf_counter()
    try:
        result = get_engine().price(pricing_request)
    except InvalidInput as exc:
        PRICING_ERRORS.labels(kind=exc.kind).inc()
        request.state.pricing_error = exc.kind
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})
    except PricingError as exc:
        PRICING_ERRORS.labels(kind=exc.kind).inc()
        request.state.pricing_error = exc.kind
        LOGGER.warning("Black-Scholes calculation failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to calculate theoretical APR", "details": str(exc)},
        )
    finally:
        PRICING_LATENCY.labels(operation="single").observe(time.perf_counter() - start)

    return to_theoretical_apr_response(pricing_request, result)
