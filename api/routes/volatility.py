"""API route for the rolling volatility time series."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from core.analysis.volatility import compute_rolling_volatility, serialize_points
from core.config import VolatilityConfig, get_config
from core.indicators.parkinson import InvalidPriceError
from core.market_data.bybit_provider import MAX_LIMIT
from core.market_data.errors import UpstreamProtocolError, UpstreamTransportError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["volatility"])


def _error(status_code: int, code: str, exc: Exception) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": code, "message": str(exc)})


@router.get("/rolling_volatility")
async def get_rolling_volatility(
    symbol: Optional[str] = Query(None, description="Trading pair (e.g., BTCUSDT)"),
    interval: Optional[str] = Query(None, description="Kline interval (e.g., D, 60, 1h)"),
    limit: Optional[int] = Query(None, ge=1, le=MAX_LIMIT, description="Number of candles to fetch"),
    window: Optional[int] = Query(None, ge=1, description="Rolling window size in candles"),
    config: VolatilityConfig = Depends(get_config),
) -> JSONResponse:
    """Get the rolling Parkinson volatility series.

    Returns:
        JSON array of [timestamp_ms, volatility] pairs, oldest first. Each
        timestamp is the start of the last candle in its window.

    Raises:
        HTTPException: 400 on invalid parameters, 502/504 on upstream failure,
            500 if a fetched candle has an unusable high/low.
    """
    try:
        # requests is blocking; keep the event loop free
        points = await asyncio.to_thread(
            compute_rolling_volatility,
            symbol,
            interval,
            limit,
            window,
            config=config,
        )
    except InvalidPriceError as exc:
        logger.error(f"Volatility computation rejected upstream data: {exc}")
        raise _error(500, "invalid_price_data", exc) from exc
    except ValueError as exc:
        logger.warning(f"Rejected volatility request: {exc}")
        raise _error(400, "invalid_request", exc) from exc
    except UpstreamTransportError as exc:
        logger.error(f"Upstream unreachable: {exc}")
        if exc.timed_out:
            raise _error(504, "upstream_timeout", exc) from exc
        raise _error(502, "upstream_unavailable", exc) from exc
    except UpstreamProtocolError as exc:
        logger.error(f"Upstream returned an invalid response: {exc}")
        raise _error(502, "upstream_protocol_error", exc) from exc

    return JSONResponse(content=serialize_points(points))
