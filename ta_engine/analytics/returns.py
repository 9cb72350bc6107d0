"""
Per-bar strategy returns of a position or trading record.
Index 0 has no return (NaN); bars outside any position return zero.
"""

from __future__ import annotations
from decimal import Decimal
from enum import Enum
from typing import Any, List, Union

import numpy as np

from ta_engine.core.num import is_nan, num_like, zero_like
from ta_engine.series.bar_series import BarSeries
from ta_engine.trading.position import Position
from ta_engine.trading.trading_record import TradingRecord


class ReturnType(str, Enum):
    ARITHMETIC = "arithmetic"
    LOG = "log"

    def calculate(self, new_price: Any, old_price: Any) -> Any:
        ratio = new_price / old_price
        if self is ReturnType.ARITHMETIC:
            return ratio - num_like(ratio, 1)
        if isinstance(ratio, Decimal):
            return ratio.ln()
        return float(np.log(ratio))


def _add_cost(price: Any, cost: Any, is_long: bool) -> Any:
    return price - cost if is_long else price + cost


class Returns:
    """
    Returns are iterative: each bar's return is relative to the previous bar close, the first
    relative to the entry net price and the last using the exit net price. Holding costs are
    spread evenly over the bars a position is held.
    """

    def __init__(
        self,
        series: BarSeries,
        record_or_position: Union[TradingRecord, Position],
        return_type: ReturnType = ReturnType.ARITHMETIC,
    ):
        self.series = series
        self.return_type = ReturnType(return_type)
        self._values: List[Any] = [series.nan]
        if isinstance(record_or_position, TradingRecord):
            end_index = record_or_position.get_end_index(series)
            for position in record_or_position.positions:
                self._add_position(position, end_index)
            if record_or_position.current_position.is_opened:
                self._add_position(record_or_position.current_position, end_index)
        elif record_or_position.entry is not None:
            self._add_position(record_or_position, series.end_index)
        self._fill_to(series.end_index)

    def _add_position(self, position: Position, final_index: int) -> None:
        series = self.series
        entry = position.entry
        is_long = entry.is_buy
        if position.exit is not None:
            end_index = position.exit.index
        else:
            end_index = min(final_index, series.end_index)
        periods = end_index - entry.index
        if periods <= 0:
            return
        begin = entry.index + 1
        self._fill_to(begin - 1)

        holding_cost = position.get_holding_cost(end_index)
        avg_cost = holding_cost / num_like(holding_cost, periods)
        last_price = entry.net_price
        for i in range(max(begin, 1), end_index):
            close = series.get_bar(i).close
            self._values.append(self._strategy_return(_add_cost(close, avg_cost, is_long), last_price, is_long))
            last_price = close

        if position.exit is not None:
            exit_price = position.exit.net_price
        else:
            exit_price = series.get_bar(end_index).close
        self._values.append(self._strategy_return(_add_cost(exit_price, avg_cost, is_long), last_price, is_long))

    def _strategy_return(self, price: Any, last_price: Any, is_long: bool) -> Any:
        asset_return = self.return_type.calculate(price, last_price)
        return asset_return if is_long else -asset_return

    def _fill_to(self, index: int) -> None:
        missing = index + 1 - len(self._values)
        if missing > 0:
            self._values.extend([self.series.zero] * missing)

    @property
    def values(self) -> List[Any]:
        return list(self._values)

    def get_value(self, index: int) -> Any:
        return self._values[index]

    def __getitem__(self, index: int) -> Any:
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    @property
    def size(self) -> int:
        """Number of bar-to-bar returns (index 0 excluded)."""
        return len(self._values) - 1

    def defined_values(self) -> List[Any]:
        """Returns from index 1 on, NaN entries dropped."""
        return [v for v in self._values[1:] if not is_nan(v)]

    def total(self) -> Any:
        """Compounded return over the whole series (arithmetic) or summed log return."""
        values = self.defined_values()
        if not values:
            return zero_like(self.series.zero)
        if self.return_type is ReturnType.LOG:
            return sum(values[1:], values[0])
        one = num_like(values[0], 1)
        growth = one
        for v in values:
            growth = growth * (one + v)
        return growth - one
