"""Health check API endpoint."""

from __future__ import annotations

import time
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from core.config import VolatilityConfig, get_config

router = APIRouter(prefix="/health", tags=["health"])

# Track API start time
_api_start_time = time.time()


class HealthResponse(BaseModel):
    """Process liveness; does not call the upstream API."""

    status: Literal["ok"]
    uptime_seconds: int
    upstream: str


@router.get("", response_model=HealthResponse)
async def health_check(config: VolatilityConfig = Depends(get_config)) -> HealthResponse:
    """Get API liveness, uptime and the configured upstream base URL."""
    return HealthResponse(
        status="ok",
        uptime_seconds=int(time.time() - _api_start_time),
        upstream=config.base_url,
    )
