"""Kline interval specifications for the market data client.

Bybit identifies candle buckets by its own interval codes ("1", "60", "D", ...).
This module maps those codes to their durations, and the house timeframe
names (`core.types.Timeframe`) onto the matching Bybit code.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from core.types import Timeframe


@dataclass(frozen=True)
class TimeframeSpec:
    """Specification for a kline interval including API code and duration."""

    api: str  # Exchange-specific API identifier (e.g., "60", "D")
    delta: timedelta  # Duration of one candle
    step_ms: int  # Duration in milliseconds


BYBIT_INTERVALS: dict[str, TimeframeSpec] = {
    "1": TimeframeSpec(api="1", delta=timedelta(minutes=1), step_ms=60_000),
    "3": TimeframeSpec(api="3", delta=timedelta(minutes=3), step_ms=180_000),
    "5": TimeframeSpec(api="5", delta=timedelta(minutes=5), step_ms=300_000),
    "15": TimeframeSpec(api="15", delta=timedelta(minutes=15), step_ms=900_000),
    "30": TimeframeSpec(api="30", delta=timedelta(minutes=30), step_ms=1_800_000),
    "60": TimeframeSpec(api="60", delta=timedelta(hours=1), step_ms=3_600_000),
    "120": TimeframeSpec(api="120", delta=timedelta(hours=2), step_ms=7_200_000),
    "240": TimeframeSpec(api="240", delta=timedelta(hours=4), step_ms=14_400_000),
    "360": TimeframeSpec(api="360", delta=timedelta(hours=6), step_ms=21_600_000),
    "720": TimeframeSpec(api="720", delta=timedelta(hours=12), step_ms=43_200_000),
    "D": TimeframeSpec(api="D", delta=timedelta(days=1), step_ms=86_400_000),
    "W": TimeframeSpec(api="W", delta=timedelta(weeks=1), step_ms=604_800_000),
    # Calendar month; duration is nominal.
    "M": TimeframeSpec(api="M", delta=timedelta(days=30), step_ms=2_592_000_000),
}

# House timeframe names accepted as aliases
TIMEFRAME_ALIASES: dict[Timeframe, str] = {
    "1m": "1",
    "5m": "5",
    "15m": "15",
    "1h": "60",
    "4h": "240",
    "1d": "D",
}


def get_interval_spec(interval: str) -> TimeframeSpec:
    """Resolve a Bybit interval code or house timeframe to its spec.

    Args:
        interval: Bybit code ("60", "D", ...) or timeframe alias ("1h", "1d", ...)

    Returns:
        TimeframeSpec for the interval

    Raises:
        ValueError: If the interval is not supported
    """
    key = str(interval).strip()
    key = TIMEFRAME_ALIASES.get(key, key)
    if key in ("d", "w", "m"):
        key = key.upper()
    if key not in BYBIT_INTERVALS:
        raise ValueError(
            f"Unsupported interval for Bybit: {interval!r}. "
            f"Supported: {', '.join(BYBIT_INTERVALS)}"
        )
    return BYBIT_INTERVALS[key]
