"""Quote board endpoint."""

import asyncio
import logging
from datetime import UTC, datetime
from typing import List, Union

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from ..dependencies import get_quote_board
from ..mappers import quote_row_payload
from ..rate_limit import configured_limit, limiter
from ..schemas.response import EmptyQuotesResponse, ErrorResponse, QuoteRowResponse

LOGGER = logging.getLogger(__name__)
router = APIRouter(tags=["quotes"])


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()


@router.get(
    "/quotes",
    response_model=None,
    responses={
        status.HTTP_200_OK: {"model": Union[List[QuoteRowResponse], EmptyQuotesResponse]},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
)
@limiter.limit(configured_limit)
async def quotes(request: Request) -> JSONResponse:
    """Return quoted strikes with their theoretical and excess APR."""

    board = get_quote_board()
    try:
        rows = await asyncio.to_thread(board.build)
    except RuntimeError as exc:
        LOGGER.exception("Error assembling quote board", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "error": "Live market data unavailable",
                "message": "Unable to fetch market data. No fallback data provided.",
                "timestamp": _timestamp(),
            },
        )

    request.state.quote_rows = len(rows)
    if not rows:
        return JSONResponse(
            content={
                "quotes": [],
                "message": "No live data available - all assets missing critical market data",
                "timestamp": _timestamp(),
            }
        )
    return JSONResponse(content=[quote_row_payload(row) for row in rows])
