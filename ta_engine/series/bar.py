"""
OHLCV bar. Only the last bar of a series is mutable; the series seals it once a newer bar arrives.
"""

from __future__ import annotations
from datetime import datetime, timedelta
from typing import Any, Optional

from ta_engine.core.errors import SealedBarError


class Bar:
    """
    OHLCV aggregate for one time period ending at end_time.
    Prices are Num values (float or Decimal) or None for a bar that has not seen a price yet.
    """

    __slots__ = (
        "_time_period", "_end_time", "_begin_time",
        "_open", "_high", "_low", "_close",
        "_volume", "_amount", "_trades", "_sealed",
    )

    def __init__(
        self,
        time_period: timedelta,
        end_time: datetime,
        open: Any = None,
        high: Any = None,
        low: Any = None,
        close: Any = None,
        volume: Any = 0.0,
        amount: Any = 0.0,
        trades: int = 0,
    ):
        if time_period is None or end_time is None:
            raise ValueError("Time period and end time cannot be None")
        self._time_period = time_period
        self._end_time = end_time
        self._begin_time = end_time - time_period
        self._open = open
        self._high = high
        self._low = low
        self._close = close
        self._volume = volume
        self._amount = amount
        self._trades = trades
        self._sealed = False

    @property
    def time_period(self) -> timedelta:
        return self._time_period

    @property
    def begin_time(self) -> datetime:
        return self._begin_time

    @property
    def end_time(self) -> datetime:
        return self._end_time

    @property
    def open(self) -> Any:
        return self._open

    @property
    def high(self) -> Any:
        return self._high

    @property
    def low(self) -> Any:
        return self._low

    @property
    def close(self) -> Any:
        return self._close

    @property
    def volume(self) -> Any:
        return self._volume

    @property
    def amount(self) -> Any:
        return self._amount

    @property
    def trades(self) -> int:
        return self._trades

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def is_bullish(self) -> bool:
        return self._open is not None and self._close is not None and self._open < self._close

    @property
    def is_bearish(self) -> bool:
        return self._open is not None and self._close is not None and self._close < self._open

    def in_period(self, timestamp: Optional[datetime]) -> bool:
        """True if begin_time <= timestamp < end_time."""
        return timestamp is not None and self._begin_time <= timestamp < self._end_time

    def add_price(self, price: Any) -> None:
        """Update high/low/close with a new price; the first price also sets open."""
        self._check_open()
        if self._open is None:
            self._open = price
            self._high = price
            self._low = price
        else:
            if self._high is None or price > self._high:
                self._high = price
            if self._low is None or price < self._low:
                self._low = price
        self._close = price

    def add_trade(self, volume: Any, price: Any) -> None:
        """Record an executed trade: price update plus volume, amount and trade count."""
        self.add_price(price)
        self._volume = self._volume + volume
        self._amount = self._amount + volume * price
        self._trades += 1

    def seal(self) -> None:
        self._sealed = True

    def copy(self) -> "Bar":
        """Unsealed copy with the same values."""
        return Bar(
            self._time_period, self._end_time,
            self._open, self._high, self._low, self._close,
            self._volume, self._amount, self._trades,
        )

    def _check_open(self) -> None:
        if self._sealed:
            raise SealedBarError(f"Bar ending {self._end_time.isoformat()} is sealed and cannot be modified")

    def _key(self) -> tuple:
        return (
            self._time_period, self._end_time,
            self._open, self._high, self._low, self._close,
            self._volume, self._amount, self._trades,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bar):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((self._time_period, self._end_time))

    def __repr__(self) -> str:
        return (
            f"Bar(end={self._end_time.isoformat()} O={self._open} H={self._high} "
            f"L={self._low} C={self._close} V={self._volume})"
        )
