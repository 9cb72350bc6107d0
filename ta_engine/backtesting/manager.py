"""
Bar series manager: runs a strategy bar by bar over a series and records the resulting trades.
Trades are executed at the close of the bar on which the strategy signals.
"""

from __future__ import annotations
import logging
from typing import Any, Optional

from ta_engine.core.types import TradeType
from ta_engine.series.bar_series import BarSeries
from ta_engine.strategies.strategy import Strategy
from ta_engine.trading.cost_models import CostModel, ZeroCostModel
from ta_engine.trading.trading_record import TradingRecord

logger = logging.getLogger("ta_engine.backtest")


class BarSeriesManager:
    """
    Runs strategies on one series with fixed transaction and holding cost models.
    Each run produces a fresh TradingRecord.
    """

    def __init__(
        self,
        series: BarSeries,
        transaction_cost_model: Optional[CostModel] = None,
        holding_cost_model: Optional[CostModel] = None,
    ):
        self.series = series
        self.transaction_cost_model = transaction_cost_model or ZeroCostModel()
        self.holding_cost_model = holding_cost_model or ZeroCostModel()

    def run(
        self,
        strategy: Strategy,
        trade_type: TradeType = TradeType.BUY,
        amount: Any = 1,
        start_index: Optional[int] = None,
        end_index: Optional[int] = None,
    ) -> TradingRecord:
        """
        Run strategy over [start_index, end_index] (defaults: the resident series range).
        A position still open at end_index keeps being checked for exit on the remaining bars,
        so it can close after the requested range.
        """
        series = self.series
        record = TradingRecord(
            trade_type, self.transaction_cost_model, self.holding_cost_model,
            name=strategy.name, start_index=start_index, end_index=end_index,
        )
        if series.is_empty:
            logger.warning("Series %r is empty, nothing to run", series.name)
            return record
        run_begin = max(record.get_start_index(series), series.first_available_index)
        run_end = record.get_end_index(series)
        trade_amount = series.num_of(amount)
        logger.info(
            "Running strategy %s on %s over [%d, %d] (%s, amount=%s)",
            strategy.name, series.name, run_begin, run_end, TradeType(trade_type).value, trade_amount,
        )

        for i in range(run_begin, run_end + 1):
            if strategy.should_operate(i, record):
                record.operate(i, series.get_bar(i).close, trade_amount)

        if not record.is_closed:
            # the last open position may still be exited on bars past the run range
            for i in range(max(run_end + 1, series.first_available_index), series.end_index + 1):
                if strategy.should_operate(i, record):
                    record.operate(i, series.get_bar(i).close, trade_amount)
                    break

        logger.info(
            "Strategy %s finished: %d closed positions, %s",
            strategy.name, record.get_position_count(), "flat" if record.is_closed else "position open",
        )
        return record
