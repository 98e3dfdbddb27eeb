"""Rolling Parkinson volatility for a traded pair.

Glues the kline client to the estimator: one upstream fetch, one windowing
pass, no caching.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from core.config import VolatilityConfig
from core.indicators.parkinson import rolling_volatility
from core.market_data import BybitProvider, get_provider
from core.types import VolatilityPoint

logger = logging.getLogger(__name__)


def compute_rolling_volatility(
    symbol: Optional[str] = None,
    interval: Optional[str] = None,
    limit: Optional[int] = None,
    window_size: Optional[int] = None,
    *,
    client: Optional[BybitProvider] = None,
    config: Optional[VolatilityConfig] = None,
) -> list[VolatilityPoint]:
    """Fetch candles and compute the rolling volatility series.

    Args:
        symbol: Trading pair (default from config)
        interval: Kline interval code (default from config)
        limit: Number of candles to fetch (default from config)
        window_size: Rolling window size (default from config)
        client: Open kline client to reuse; a new one is opened and closed otherwise
        config: Source of defaults (reads the environment when omitted)

    Returns:
        Volatility points, oldest first

    Raises:
        ValueError: If parameters are invalid (checked before any upstream call)
        MarketDataError: If the upstream fetch fails
        InvalidPriceError: If a fetched candle has an unusable high/low range
    """
    if config is None:
        config = VolatilityConfig.from_env()

    symbol = symbol if symbol is not None else config.symbol
    interval = interval if interval is not None else config.interval
    limit = limit if limit is not None else config.limit
    window_size = window_size if window_size is not None else config.window
    if window_size < 1:
        raise ValueError(f"window_size must be >= 1, got {window_size}")

    if client is None:
        with get_provider(config=config) as owned:
            candles = owned.fetch_ohlc(symbol, interval, limit)
    else:
        candles = client.fetch_ohlc(symbol, interval, limit)

    points = rolling_volatility(candles, window_size=window_size)
    logger.info(
        f"Computed {len(points)} volatility points for {symbol} interval={interval} "
        f"from {len(candles)} candles (window={window_size})"
    )
    return points


def serialize_points(points: Sequence[VolatilityPoint]) -> list[list[int | float]]:
    """Convert points to `[timestamp_ms, volatility]` pairs for JSON output."""
    return [p.as_pair() for p in points]
