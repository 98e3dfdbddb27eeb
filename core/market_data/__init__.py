"""Market data access.

Single upstream: Bybit v5 public klines. No caching or persistence.
"""

from typing import Optional

from core.config import VolatilityConfig
from core.market_data.base import TimeframeSpec, get_interval_spec
from core.market_data.bybit_provider import BybitProvider, fetch_ohlc, parse_kline_response
from core.market_data.errors import (
    MarketDataError,
    UpstreamProtocolError,
    UpstreamStatusError,
    UpstreamTransportError,
)

__all__ = [
    "BybitProvider",
    "MarketDataError",
    "TimeframeSpec",
    "UpstreamProtocolError",
    "UpstreamStatusError",
    "UpstreamTransportError",
    "fetch_ohlc",
    "get_interval_spec",
    "get_provider",
    "parse_kline_response",
]


def get_provider(exchange: str = "bybit", *, config: Optional[VolatilityConfig] = None) -> BybitProvider:
    """Factory function to get the market data provider for an exchange."""
    providers = {
        "bybit": BybitProvider,
    }

    exchange_lower = exchange.lower().strip()
    if exchange_lower not in providers:
        raise ValueError(f"Unsupported exchange: {exchange}. Supported: {', '.join(providers.keys())}")

    return providers[exchange_lower](config=config)
