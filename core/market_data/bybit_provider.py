"""Bybit v5 public kline client.

Fetches OHLC candles from `GET /v5/market/kline`. One call performs exactly one
HTTP round trip: there is no caching, pagination or retry. Every failure is
raised as a `MarketDataError` subclass so the caller decides how to surface it.

Response format:
    {
        "retCode": 0,
        "retMsg": "OK",
        "result": {
            "symbol": "BTCUSDT",
            "category": "linear",
            "list": [[start_ms, open, high, low, close, volume, turnover], ...]
        }
    }

Bybit returns rows newest first; `fetch_ohlc` returns them oldest first.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import requests

from core.config import VolatilityConfig
from core.market_data.base import get_interval_spec
from core.market_data.errors import (
    UpstreamProtocolError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from core.types import Candle, Category

logger = logging.getLogger(__name__)

KLINE_PATH = "/v5/market/kline"
MAX_LIMIT = 1000  # Bybit caps a kline page at 1000 rows
SUCCESS_CODE = 0
SUCCESS_MSG = "OK"
_CATEGORIES = ("spot", "linear", "inverse")


def normalize_symbol(symbol: str) -> str:
    """Normalize symbol for Bybit API (e.g., ' btcusdt ' -> 'BTCUSDT')."""
    s = str(symbol).strip().upper()
    if not s:
        raise ValueError("symbol is required")
    return s


def _parse_row(row: Any) -> Candle:
    if not isinstance(row, (list, tuple)) or len(row) < 7:
        raise UpstreamProtocolError(f"Malformed kline row: {row!r}")

    try:
        start_ms = int(str(row[0]))
        start = datetime.fromtimestamp(start_ms / 1000, tz=timezone.utc)
        return Candle(
            start=start,
            open=float(row[1]),
            high=float(row[2]),
            low=float(row[3]),
            close=float(row[4]),
            volume=str(row[5]),
            turnover=str(row[6]),
        )
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise UpstreamProtocolError(f"Undecodable kline row {row!r}: {exc}") from exc


def parse_kline_response(payload: Any) -> list[Candle]:
    """Validate a decoded kline envelope and convert its rows to candles.

    Args:
        payload: JSON-decoded response body

    Returns:
        Candles sorted by start time, oldest first

    Raises:
        UpstreamStatusError: If retCode/retMsg do not signal success
        UpstreamProtocolError: If the envelope or a row has the wrong shape
    """
    if not isinstance(payload, dict):
        raise UpstreamProtocolError(f"Unexpected response type: {type(payload).__name__}")

    if "retCode" not in payload or "retMsg" not in payload:
        raise UpstreamProtocolError("Response is missing retCode/retMsg")

    ret_code = payload["retCode"]
    ret_msg = payload["retMsg"]
    # bool is an int subclass; False must not pass for retCode 0
    if isinstance(ret_code, bool) or ret_code != SUCCESS_CODE or ret_msg != SUCCESS_MSG:
        raise UpstreamStatusError(ret_code, ret_msg)

    result = payload.get("result")
    if not isinstance(result, dict):
        raise UpstreamProtocolError("Response is missing the result object")

    rows = result.get("list")
    if not isinstance(rows, list):
        raise UpstreamProtocolError("Response result is missing the kline list")

    candles = [_parse_row(row) for row in rows]
    candles.sort(key=lambda c: c.start)
    return candles


class BybitProvider:
    """Bybit market data client (public endpoints, no API key)."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        config: Optional[VolatilityConfig] = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL; overrides the config value
            timeout: Request timeout in seconds; overrides the config value
            config: Source of defaults (reads the environment when omitted)
        """
        if config is None:
            config = VolatilityConfig.from_env()
        self.base_url = (base_url or config.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.timeout_seconds
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    @property
    def exchange_name(self) -> str:
        return "bybit"

    @property
    def kline_url(self) -> str:
        return f"{self.base_url}{KLINE_PATH}"

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self) -> "BybitProvider":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def build_params(
        self,
        symbol: str,
        interval: str,
        limit: int,
        category: Optional[Category] = None,
    ) -> dict[str, str]:
        """Validate inputs and build the kline query parameters.

        Raises:
            ValueError: If symbol, interval, limit or category is invalid
        """
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValueError(f"limit must be an integer, got {limit!r}")
        if not 1 <= limit <= MAX_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_LIMIT}, got {limit}")
        if category is not None and category not in _CATEGORIES:
            raise ValueError(f"Unsupported category: {category!r}. Supported: {', '.join(_CATEGORIES)}")

        params = {
            "symbol": normalize_symbol(symbol),
            "interval": get_interval_spec(interval).api,
            "limit": str(limit),
        }
        if category is not None:
            params["category"] = category
        return params

    def fetch_ohlc(
        self,
        symbol: str,
        interval: str,
        limit: int,
        *,
        category: Optional[Category] = None,
    ) -> list[Candle]:
        """Fetch up to `limit` candles for a symbol and interval.

        Args:
            symbol: Trading pair (e.g., "BTCUSDT")
            interval: Bybit interval code ("D", "60", ...) or alias ("1d", "1h", ...)
            limit: Number of candles to request (1-1000)
            category: Optional product type; upstream default when omitted

        Returns:
            Candles sorted oldest first

        Raises:
            ValueError: If parameters are invalid
            UpstreamTransportError: On connection failure, timeout or HTTP error status
            UpstreamProtocolError: If the body is not the expected envelope
            UpstreamStatusError: If the envelope reports a non-success status
        """
        params = self.build_params(symbol, interval, limit, category)

        try:
            response = self.session.get(self.kline_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.Timeout as exc:
            logger.error(f"Bybit kline request timed out after {self.timeout}s: {exc}")
            raise UpstreamTransportError(f"Bybit request timed out: {exc}", timed_out=True) from exc
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            logger.error(f"Bybit kline request returned HTTP {status}")
            raise UpstreamTransportError(f"Bybit returned HTTP {status}", status_code=status) from exc
        except requests.RequestException as exc:
            logger.error(f"Bybit kline request failed: {exc}")
            raise UpstreamTransportError(f"Bybit request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamProtocolError(f"Bybit response is not valid JSON: {exc}") from exc

        candles = parse_kline_response(payload)
        logger.info(
            f"Fetched {len(candles)} candles for {params['symbol']} interval={params['interval']}"
        )
        return candles


def fetch_ohlc(
    symbol: str,
    interval: str,
    limit: int,
    *,
    category: Optional[Category] = None,
    config: Optional[VolatilityConfig] = None,
) -> list[Candle]:
    """Convenience function: open a client, fetch candles, close it."""
    with BybitProvider(config=config) as client:
        return client.fetch_ohlc(symbol, interval, limit, category=category)
