from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

Timeframe = Literal["1m", "5m", "15m", "1h", "4h", "1d"]
Category = Literal["spot", "linear", "inverse"]


@dataclass(frozen=True)
class Candle:
    start: datetime  # UTC open time of the bucket
    open: float
    high: float
    low: float
    close: float
    volume: str
    turnover: str

    @property
    def start_ms(self) -> int:
        return int(self.start.timestamp() * 1000)


@dataclass(frozen=True)
class VolatilityPoint:
    timestamp: datetime  # start of the last candle in the window
    volatility: float

    @property
    def timestamp_ms(self) -> int:
        return int(self.timestamp.timestamp() * 1000)

    def as_pair(self) -> list[int | float]:
        return [self.timestamp_ms, self.volatility]
