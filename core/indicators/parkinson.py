"""
Parkinson volatility indicator module.

The Parkinson estimator measures volatility from each candle's high/low range
only, ignoring open and close. Annualization uses the calendar-day factor
sqrt(365.25) whatever the candle interval, so hourly input is not rescaled.

Usage:
    from core.indicators.parkinson import estimate_volatility, rolling_volatility
    from core.types import Candle

    # Annualized volatility of one window
    vol = estimate_volatility(candles[-7:])

    # As-of time series over a sliding 7-candle window
    points = rolling_volatility(candles, window_size=7)
"""

from __future__ import annotations

import math
from typing import Sequence

from core.types import Candle, VolatilityPoint

CALENDAR_DAYS_PER_YEAR = 365.25
DEFAULT_WINDOW_SIZE = 7


class InvalidPriceError(ValueError):
    """A candle reaching the estimator has a high/low range that cannot be measured."""


class NonPositivePriceError(InvalidPriceError):
    """A candle reaching the estimator has a high or low that is not > 0."""


def _log_range_squared(candle: Candle) -> float:
    high = float(candle.high)
    low = float(candle.low)

    if not (high > 0 and low > 0):
        raise NonPositivePriceError(
            f"high and low must be > 0, got high={high} low={low} at {candle.start.isoformat()}"
        )
    if math.isinf(high) or math.isinf(low):
        raise InvalidPriceError(f"high and low must be finite, got high={high} low={low} at {candle.start.isoformat()}")
    if high < low:
        raise InvalidPriceError(f"high must be >= low, got high={high} low={low} at {candle.start.isoformat()}")

    return (math.log(high) - math.log(low)) ** 2


def estimate_volatility(
    window: Sequence[Candle],
    *,
    periods_per_year: float = CALENDAR_DAYS_PER_YEAR,
) -> float:
    """
    Calculate annualized Parkinson volatility for a window of candles.

    Formula:
        S = sum((ln(High) - ln(Low))^2)
        raw = sqrt(S / (4 * N * ln(2)))
        volatility = raw * sqrt(periods_per_year)

    Args:
        window: Non-empty sequence of candles
        periods_per_year: Annualization factor (default: 365.25)

    Returns:
        Annualized volatility as a decimal (0.0 when every high equals its low)

    Raises:
        ValueError: If the window is empty or periods_per_year is not positive
        NonPositivePriceError: If any high or low is <= 0
        InvalidPriceError: If a high or low is infinite or high < low
    """
    if len(window) < 1:
        raise ValueError("need at least 1 candle for Parkinson volatility, got 0")
    if periods_per_year <= 0:
        raise ValueError(f"periods_per_year must be > 0, got {periods_per_year}")

    total = sum(_log_range_squared(c) for c in window)
    raw = math.sqrt(total / (4.0 * len(window) * math.log(2.0)))
    return raw * math.sqrt(periods_per_year)


def rolling_volatility(
    candles: Sequence[Candle],
    window_size: int = DEFAULT_WINDOW_SIZE,
    *,
    periods_per_year: float = CALENDAR_DAYS_PER_YEAR,
) -> list[VolatilityPoint]:
    """
    Slide a fixed window over candles and estimate volatility at each position.

    Each point is stamped with the start time of the window's last candle, so it
    reads as "volatility as of this candle". Fewer candles than `window_size`
    yields an empty list.

    Args:
        candles: Candles in chronological order
        window_size: Number of candles per window (default: 7)
        periods_per_year: Annualization factor passed to estimate_volatility

    Returns:
        max(0, len(candles) - window_size + 1) points, in input order

    Raises:
        ValueError: If window_size < 1
        InvalidPriceError: If any candle has an unusable high/low range
    """
    if window_size < 1:
        raise ValueError(f"window_size must be >= 1, got {window_size}")

    points = []
    for end in range(window_size, len(candles) + 1):
        window = candles[end - window_size : end]
        points.append(
            VolatilityPoint(
                timestamp=window[-1].start,
                volatility=estimate_volatility(window, periods_per_year=periods_per_year),
            )
        )
    return points
