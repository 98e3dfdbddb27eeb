"""FastAPI application for the rolling volatility chart.

This module provides a minimal HTTP API service for:
- GET / - Chart page plotting the rolling volatility series
- GET /rolling_volatility - Rolling Parkinson volatility as [timestamp_ms, volatility] pairs
- GET /health - Liveness and configured upstream

Each data request performs one upstream fetch; nothing is cached.

Environment (all optional, see core/config.py):
- BYBIT_BASE_URL, HTTP_TIMEOUT_SECONDS, VOL_SYMBOL, VOL_INTERVAL, VOL_LIMIT, VOL_WINDOW
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from api.routes import chart, health, volatility

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Rolling Volatility API",
    description="Rolling Parkinson volatility for crypto pairs from Bybit klines",
    version="1.0.0",
)

app.include_router(chart.router)
app.include_router(volatility.router)
app.include_router(health.router)


@app.exception_handler(Exception)
async def global_exception_handler(_request, exc):
    """Global exception handler to ensure consistent error responses."""
    logger.error(f"Unhandled error: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
        },
    )
