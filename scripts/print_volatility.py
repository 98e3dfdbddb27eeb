#!/usr/bin/env python3
"""Fetch candles from Bybit and print the rolling Parkinson volatility series.

Prints a JSON array of [timestamp_ms, volatility] pairs to stdout, the same
payload served by GET /rolling_volatility.

Usage:
    python scripts/print_volatility.py
    python scripts/print_volatility.py --symbol ETHUSDT --interval 60 --limit 500
    python scripts/print_volatility.py --window 14 --pretty

Environment:
    BYBIT_BASE_URL, HTTP_TIMEOUT_SECONDS and the VOL_* defaults (see core/config.py)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

# Ensure imports work when invoked as a script
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from core.analysis.volatility import compute_rolling_volatility, serialize_points  # noqa: E402
from core.config import VolatilityConfig  # noqa: E402
from core.market_data.errors import MarketDataError  # noqa: E402

logger = logging.getLogger("print-volatility")


def build_parser(config: VolatilityConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print rolling Parkinson volatility for a Bybit pair.")
    parser.add_argument("--symbol", default=config.symbol, help=f"Trading pair (default: {config.symbol})")
    parser.add_argument("--interval", default=config.interval, help=f"Kline interval (default: {config.interval})")
    parser.add_argument("--limit", type=int, default=config.limit, help=f"Candles to fetch (default: {config.limit})")
    parser.add_argument("--window", type=int, default=config.window, help=f"Window size (default: {config.window})")
    parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the fetch-and-print command."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    try:
        config = VolatilityConfig.from_env()
    except ValueError as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 1

    args = build_parser(config).parse_args(argv)

    try:
        points = compute_rolling_volatility(
            args.symbol,
            args.interval,
            args.limit,
            args.window,
            config=config,
        )
    except (MarketDataError, ValueError) as exc:
        logger.error(f"Failed to compute rolling volatility: {exc}")
        return 1

    print(json.dumps(serialize_points(points), indent=2 if args.pretty else None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
