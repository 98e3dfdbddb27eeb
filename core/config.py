"""Runtime configuration for the volatility service.

Values come from the environment with documented defaults:

- BYBIT_BASE_URL        upstream base URL (default: https://api.bybit.com)
- HTTP_TIMEOUT_SECONDS  per-request timeout for upstream calls (default: 10)
- VOL_SYMBOL            default trading pair (default: BTCUSDT)
- VOL_INTERVAL          default kline interval code (default: D)
- VOL_LIMIT             default number of candles to fetch (default: 365)
- VOL_WINDOW            default rolling window size (default: 7)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BYBIT_BASE_URL = "https://api.bybit.com"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_SYMBOL = "BTCUSDT"
DEFAULT_INTERVAL = "D"
DEFAULT_LIMIT = 365
DEFAULT_WINDOW = 7


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class VolatilityConfig:
    """Upstream endpoint and request defaults.

    `base_url` has no trailing slash; the kline path is appended by the client.
    """

    base_url: str = DEFAULT_BYBIT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    symbol: str = DEFAULT_SYMBOL
    interval: str = DEFAULT_INTERVAL
    limit: int = DEFAULT_LIMIT
    window: int = DEFAULT_WINDOW

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "VolatilityConfig":
        """Build a config from environment variables (or an explicit mapping).

        Raises:
            ValueError: If a numeric variable cannot be parsed or is out of range.
        """
        if env is None:
            env = os.environ

        base_url = env.get("BYBIT_BASE_URL", "").strip() or DEFAULT_BYBIT_BASE_URL
        timeout = _read_float(env, "HTTP_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
        limit = _read_int(env, "VOL_LIMIT", DEFAULT_LIMIT)
        window = _read_int(env, "VOL_WINDOW", DEFAULT_WINDOW)

        if timeout <= 0:
            raise ValueError(f"HTTP_TIMEOUT_SECONDS must be > 0, got {timeout}")
        if limit < 1:
            raise ValueError(f"VOL_LIMIT must be >= 1, got {limit}")
        if window < 1:
            raise ValueError(f"VOL_WINDOW must be >= 1, got {window}")

        return cls(
            base_url=base_url.rstrip("/"),
            timeout_seconds=timeout,
            symbol=env.get("VOL_SYMBOL", "").strip() or DEFAULT_SYMBOL,
            interval=env.get("VOL_INTERVAL", "").strip() or DEFAULT_INTERVAL,
            limit=limit,
            window=window,
        )


_config: VolatilityConfig | None = None


def get_config() -> VolatilityConfig:
    """Get or initialize the process-wide config from the environment."""
    global _config
    if _config is None:
        _config = VolatilityConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    global _config
    _config = None
