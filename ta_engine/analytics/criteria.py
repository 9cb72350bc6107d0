"""
Analysis criteria over a trading record (or a single position) and its bar series.
Only closed positions count unless stated otherwise.
"""

from __future__ import annotations
from typing import Any, List, Union

import numpy as np

from ta_engine.analytics.returns import Returns, ReturnType
from ta_engine.series.bar_series import BarSeries
from ta_engine.trading.position import Position
from ta_engine.trading.trade import Trade
from ta_engine.trading.trading_record import TradingRecord

RecordOrPosition = Union[TradingRecord, Position]


def _closed_positions(record_or_position: RecordOrPosition) -> List[Position]:
    if isinstance(record_or_position, Position):
        return [record_or_position] if record_or_position.is_closed else []
    return record_or_position.positions


def total_profit(series: BarSeries, record_or_position: RecordOrPosition) -> Any:
    """Sum of net profits (after transaction and holding costs)."""
    total = series.zero
    for position in _closed_positions(record_or_position):
        total = total + position.get_profit()
    return total


def gross_return(series: BarSeries, record_or_position: RecordOrPosition) -> Any:
    """Product of the positions' gross returns; one means break-even."""
    result = series.one
    for position in _closed_positions(record_or_position):
        result = result * position.get_gross_return_for(series)
    return result


def number_of_positions(series: BarSeries, record_or_position: RecordOrPosition) -> int:
    return len(_closed_positions(record_or_position))


def _trade_cost(trade: Trade, traded_amount: Any, a: Any, b: Any) -> Any:
    if trade is None:
        return traded_amount * 0
    return a * traded_amount + b


def _position_cost(series: BarSeries, position: Position, traded_amount: Any, a: Any, b: Any) -> Any:
    if position.entry is None:
        return series.zero
    cost = _trade_cost(position.entry, traded_amount, a, b)
    if position.exit is not None:
        reinvested = (traded_amount - cost) * gross_return(series, position)
        cost = cost + _trade_cost(position.exit, reinvested, a, b)
    return cost


def linear_transaction_cost(
    series: BarSeries,
    record_or_position: RecordOrPosition,
    initial_amount: float,
    a: float,
    b: float = 0.0,
) -> Any:
    """
    Total cost of trading initial_amount (reinvested position after position) with a cost of
    a * traded_amount + b per trade. An open current position adds its entry cost.
    """
    amount = series.num_of(initial_amount)
    a = series.num_of(a)
    b = series.num_of(b)
    if isinstance(record_or_position, Position):
        return _position_cost(series, record_or_position, amount, a, b)

    total = series.zero
    for position in record_or_position.positions:
        total = total + _position_cost(series, position, amount, a, b)
        amount = amount - _trade_cost(position.entry, amount, a, b)
        amount = amount * gross_return(series, position)
        amount = amount - _trade_cost(position.exit, amount, a, b)
    current = record_or_position.current_position
    if current.is_opened:
        total = total + _trade_cost(current.entry, amount, a, b)
    return total


def expected_shortfall(series: BarSeries, record_or_position: RecordOrPosition, confidence: float = 0.95) -> Any:
    """
    Average of the worst (1 - confidence) share of per-bar log returns. Never positive;
    zero when there is nothing to measure.
    """
    if not 0.0 < confidence < 1.0:
        raise ValueError(f"confidence must be within (0, 1), got {confidence}")
    if isinstance(record_or_position, Position) and not record_or_position.is_closed:
        return series.zero
    returns = Returns(series, record_or_position, ReturnType.LOG)
    rates = np.array([float(v) for v in returns.defined_values()], dtype=float)
    if rates.size == 0:
        return series.zero
    n_in_body = int(rates.size * confidence)
    n_in_tail = max(rates.size - n_in_body, 1)
    tail = np.sort(rates)[:n_in_tail]
    shortfall = float(tail.mean())
    return series.num_of(min(shortfall, 0.0))
