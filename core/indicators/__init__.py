from __future__ import annotations

from .parkinson import (
    CALENDAR_DAYS_PER_YEAR,
    DEFAULT_WINDOW_SIZE,
    InvalidPriceError,
    NonPositivePriceError,
    estimate_volatility,
    rolling_volatility,
)

__all__ = [
    "CALENDAR_DAYS_PER_YEAR",
    "DEFAULT_WINDOW_SIZE",
    "InvalidPriceError",
    "NonPositivePriceError",
    "estimate_volatility",
    "rolling_volatility",
]
