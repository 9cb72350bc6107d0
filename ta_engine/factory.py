"""
Build series, cost models, trading records and managers from a Config.
"""

from __future__ import annotations
import logging
from typing import Optional, Tuple

from ta_engine.backtesting.manager import BarSeriesManager
from ta_engine.core.config import Config
from ta_engine.core.num import num_function_for
from ta_engine.core.types import TradeType
from ta_engine.series.bar_series import BarSeries
from ta_engine.trading.cost_models import (
    CostModel,
    LinearBorrowingCostModel,
    LinearTransactionCostModel,
    ZeroCostModel,
)
from ta_engine.trading.trading_record import TradingRecord

logger = logging.getLogger("ta_engine")


def build_series(config: Config, name: Optional[str] = None) -> BarSeries:
    """Empty series with the configured num type and bar cap (0 = unbounded)."""
    return BarSeries(
        name=name if name is not None else config.series_name,
        num_function=num_function_for(config.num_type),
        maximum_bar_count=config.maximum_bar_count,
    )


def build_cost_models(config: Config) -> Tuple[CostModel, CostModel]:
    """(transaction, holding) cost models. A zero fee selects the zero-cost model."""
    transaction: CostModel = ZeroCostModel()
    holding: CostModel = ZeroCostModel()
    if config.transaction_fee > 0:
        transaction = LinearTransactionCostModel(config.transaction_fee)
    if config.borrowing_fee > 0:
        holding = LinearBorrowingCostModel(config.borrowing_fee)
    logger.debug("Cost models: transaction=%r holding=%r", transaction, holding)
    return transaction, holding


def build_trading_record(config: Config, name: str = "") -> TradingRecord:
    transaction, holding = build_cost_models(config)
    return TradingRecord(TradeType(config.starting_type), transaction, holding, name=name)


def build_manager(config: Config, series: BarSeries) -> BarSeriesManager:
    transaction, holding = build_cost_models(config)
    return BarSeriesManager(series, transaction, holding)
