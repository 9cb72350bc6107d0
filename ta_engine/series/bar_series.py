"""
Bounded bar series: append-only, index-addressable, optional maximum bar count with eviction.

Indices are logical. When the oldest bars are evicted the indices of the remaining bars do not
change; removed_bars_count tells callers where the resident window starts.
"""

from __future__ import annotations
import logging
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional

from ta_engine.core.errors import InvalidRangeError, OutOfSequenceError
from ta_engine.core.num import NumFunction, float_num, nan_of
from ta_engine.series.bar import Bar

logger = logging.getLogger("ta_engine.series")

DEFAULT_BAR_PERIOD = timedelta(days=1)


class BarSeries:
    """
    Sequence of bars. begin_index/end_index are -1 while empty.
    Once non-empty: removed_bars_count + bar_count - 1 == end_index.
    """

    def __init__(
        self,
        name: str = "",
        bars: Optional[Iterable[Bar]] = None,
        num_function: NumFunction = float_num,
        maximum_bar_count: int = 0,
    ):
        self.name = name
        self._num_function = num_function
        self._bars: List[Bar] = []
        self._begin_index = -1
        self._end_index = -1
        self._maximum_bar_count = 0
        self._removed_bars_count = 0
        self._revision = 0
        for bar in bars or ():
            self.add_bar(bar)
        if maximum_bar_count:
            self.set_maximum_bar_count(maximum_bar_count)

    # ------------------------------------------------------------------
    # Num
    # ------------------------------------------------------------------

    @property
    def num_function(self) -> NumFunction:
        return self._num_function

    def num_of(self, number: Any) -> Any:
        return self._num_function(number)

    @property
    def zero(self) -> Any:
        return self._num_function(0)

    @property
    def one(self) -> Any:
        return self._num_function(1)

    @property
    def hundred(self) -> Any:
        return self._num_function(100)

    @property
    def nan(self) -> Any:
        return nan_of(self._num_function)

    # ------------------------------------------------------------------
    # Indices and access
    # ------------------------------------------------------------------

    @property
    def begin_index(self) -> int:
        return self._begin_index

    @property
    def end_index(self) -> int:
        return self._end_index

    @property
    def removed_bars_count(self) -> int:
        return self._removed_bars_count

    @property
    def first_available_index(self) -> int:
        """Lowest logical index still resident (-1 while empty)."""
        if not self._bars:
            return -1
        return max(self._begin_index, self._removed_bars_count)

    @property
    def maximum_bar_count(self) -> int:
        return self._maximum_bar_count

    @property
    def revision(self) -> int:
        """Bumped on every append, replace and last-bar mutation."""
        return self._revision

    @property
    def bar_count(self) -> int:
        if self._end_index < 0:
            return 0
        start = max(self._removed_bars_count, self._begin_index)
        return self._end_index - start + 1

    @property
    def is_empty(self) -> bool:
        return self.bar_count == 0

    @property
    def bar_data(self) -> List[Bar]:
        """Resident bars, oldest first (shallow copy of the list)."""
        return list(self._bars)

    def get_bar(self, i: int) -> Bar:
        """
        Bar at logical index i. Indices below removed_bars_count are clamped to the earliest
        resident bar; negative indices and indices past end_index raise IndexError.
        """
        if not self._bars:
            raise IndexError(f"Bar index {i} requested on an empty series")
        if i < 0:
            raise IndexError(f"Bar index should not be negative: {i}")
        if i > self._end_index:
            raise IndexError(f"Bar index {i} is beyond the end index {self._end_index}")
        inner = i - self._removed_bars_count
        if inner < 0:
            logger.debug(
                "Bar %d evicted (removed=%d), returning earliest resident bar", i, self._removed_bars_count,
            )
            inner = 0
        return self._bars[inner]

    @property
    def first_bar(self) -> Bar:
        return self.get_bar(self.first_available_index)

    @property
    def last_bar(self) -> Bar:
        return self.get_bar(self._end_index)

    def __len__(self) -> int:
        return self.bar_count

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_bar(self, bar: Bar, replace: bool = False) -> None:
        """
        Append bar at end_index + 1, or replace the still-open last bar when replace=True.
        Raises OutOfSequenceError if bar.end_time is not after the last bar's end time.
        """
        if bar is None:
            raise ValueError("Cannot add None bar")
        if self._bars:
            if replace:
                self._bars[-1] = bar
                self._revision += 1
                return
            last = self._bars[-1]
            if bar.end_time <= last.end_time:
                raise OutOfSequenceError(
                    f"Cannot add a bar with end time {bar.end_time.isoformat()} that is <= "
                    f"series end time {last.end_time.isoformat()}"
                )
            last.seal()
        self._bars.append(bar)
        if self._end_index < 0:
            self._begin_index = 0
        self._end_index += 1
        self._revision += 1
        self._remove_exceeding_bars()

    def add_ohlcv(
        self,
        end_time: datetime,
        open_price: Any,
        high_price: Any,
        low_price: Any,
        close_price: Any,
        volume: Any = 0,
        amount: Any = 0,
        time_period: timedelta = DEFAULT_BAR_PERIOD,
        trades: int = 0,
    ) -> Bar:
        """Build a bar from raw numbers (converted with num_of) and append it."""
        bar = Bar(
            time_period,
            end_time,
            self.num_of(open_price),
            self.num_of(high_price),
            self.num_of(low_price),
            self.num_of(close_price),
            self.num_of(volume),
            self.num_of(amount),
            trades,
        )
        self.add_bar(bar)
        return bar

    def add_empty_bar(self, time_period: timedelta, end_time: datetime) -> Bar:
        """Append a bar with no prices yet, to be filled by add_price/add_trade."""
        bar = Bar(time_period, end_time, volume=self.zero, amount=self.zero)
        self.add_bar(bar)
        return bar

    def add_price(self, price: Any) -> None:
        """Update the last bar with a new price."""
        self.last_bar.add_price(self.num_of(price))
        self._revision += 1

    def add_trade(self, volume: Any, price: Any) -> None:
        """Record a trade on the last bar."""
        self.last_bar.add_trade(self.num_of(volume), self.num_of(price))
        self._revision += 1

    def set_maximum_bar_count(self, maximum_bar_count: int) -> None:
        if maximum_bar_count <= 0:
            raise ValueError(f"Maximum bar count must be strictly positive, got {maximum_bar_count}")
        self._maximum_bar_count = maximum_bar_count
        self._remove_exceeding_bars()

    def _remove_exceeding_bars(self) -> None:
        if self._maximum_bar_count <= 0:
            return
        excess = len(self._bars) - self._maximum_bar_count
        if excess > 0:
            del self._bars[:excess]
            self._removed_bars_count += excess
            logger.debug(
                "Evicted %d bar(s) from series %r (removed=%d)", excess, self.name, self._removed_bars_count,
            )

    # ------------------------------------------------------------------
    # Derived series
    # ------------------------------------------------------------------

    def get_sub_series(self, start_index: int, end_index: int) -> "BarSeries":
        """
        Copy of the bars in [start_index, end_index) renumbered from 0.
        Bounds are clamped to the resident window.
        """
        if start_index < 0:
            raise InvalidRangeError(f"The start index of a sub series must be >= 0, got {start_index}")
        if end_index <= start_index:
            raise InvalidRangeError(
                f"The end index ({end_index}) must be greater than the start index ({start_index})"
            )
        sub = BarSeries(self.name, num_function=self._num_function)
        if not self._bars:
            return sub
        start = max(start_index - self._removed_bars_count, 0)
        end = min(end_index - self._removed_bars_count, len(self._bars))
        if end <= start:
            logger.debug(
                "Sub series [%d, %d) lies outside the resident window [%d, %d]",
                start_index, end_index, self.first_available_index, self._end_index,
            )
            return sub
        for bar in self._bars[start:end]:
            sub.add_bar(bar.copy())
        return sub

    def period_description(self) -> str:
        if not self._bars:
            return ""
        return f"{self.first_bar.end_time.isoformat()} - {self.last_bar.end_time.isoformat()}"

    def __repr__(self) -> str:
        return (
            f"BarSeries(name={self.name!r}, begin={self._begin_index}, end={self._end_index}, "
            f"removed={self._removed_bars_count}, max={self._maximum_bar_count})"
        )
