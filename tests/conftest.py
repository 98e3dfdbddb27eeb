"""Shared test fixtures for pytest.

Provides common candle data and Bybit kline payloads used across test files.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from core.types import Candle

BASE_TIME = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
BASE_MS = 1704067200000  # 2024-01-01T00:00:00Z
DAY_MS = 86_400_000


def make_candle(high: float, low: float, idx: int = 0, close: float | None = None) -> Candle:
    """Create a daily candle `idx` days after 2024-01-01."""
    if close is None:
        close = (high + low) / 2
    return Candle(
        start=BASE_TIME + timedelta(days=idx),
        open=close,
        high=high,
        low=low,
        close=close,
        volume="1000",
        turnover="40000000",
    )


@pytest.fixture
def candle_factory() -> Callable[..., Candle]:
    return make_candle


@pytest.fixture
def sample_candles() -> list[Candle]:
    """Ten consecutive daily BTCUSDT candles with a widening range."""
    return [make_candle(high=40500 + i * 100, low=39500 - i * 50, idx=i) for i in range(10)]


@pytest.fixture
def kline_payload() -> dict[str, Any]:
    """Successful Bybit kline response, newest row first as Bybit sends it."""
    return {
        "retCode": 0,
        "retMsg": "OK",
        "result": {
            "symbol": "BTCUSDT",
            "category": "linear",
            "list": [
                [str(BASE_MS + 2 * DAY_MS), "42000", "43000", "41000", "42500", "120.5", "5121250"],
                [str(BASE_MS + DAY_MS), "41000", "42200", "40800", "42000", "98.1", "4120200"],
                [str(BASE_MS), "40000", "41100", "39900", "41000", "110", "4510000"],
            ],
        },
        "retExtInfo": {},
        "time": 1704300000000,
    }
