"""Trading: trades, positions, trading records and cost models."""

from ta_engine.core.types import TradeType
from ta_engine.trading.cost_models import (
    CostModel,
    ZeroCostModel,
    LinearTransactionCostModel,
    LinearBorrowingCostModel,
)
from ta_engine.trading.trade import Trade
from ta_engine.trading.position import Position
from ta_engine.trading.trading_record import TradingRecord

__all__ = [
    "TradeType",
    "CostModel",
    "ZeroCostModel",
    "LinearTransactionCostModel",
    "LinearBorrowingCostModel",
    "Trade",
    "Position",
    "TradingRecord",
]
