"""Errors raised while fetching candles from an upstream market-data API."""

from __future__ import annotations

from typing import Optional


class MarketDataError(RuntimeError):
    """Base class for upstream market-data failures."""


class UpstreamTransportError(MarketDataError):
    """Upstream could not be reached or answered with a non-2xx HTTP status."""

    def __init__(self, message: str, *, timed_out: bool = False, status_code: Optional[int] = None):
        super().__init__(message)
        self.timed_out = timed_out
        self.status_code = status_code


class UpstreamProtocolError(MarketDataError):
    """Upstream answered, but the body is not the expected JSON envelope."""


class UpstreamStatusError(UpstreamProtocolError):
    """Envelope decoded, but its status fields report a failure."""

    def __init__(self, ret_code: object, ret_msg: object):
        super().__init__(f"Bybit API error: retCode={ret_code!r} retMsg={ret_msg!r}")
        self.ret_code = ret_code
        self.ret_msg = ret_msg
