"""
Trading record: ordered history of closed positions plus the current one.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, List, Optional

from ta_engine.core.errors import SequenceError
from ta_engine.core.num import NaN
from ta_engine.core.types import TradeType
from ta_engine.trading.cost_models import CostModel, ZeroCostModel
from ta_engine.trading.position import Position
from ta_engine.trading.trade import Trade

if TYPE_CHECKING:
    from ta_engine.series.bar_series import BarSeries

logger = logging.getLogger("ta_engine.trading")


class TradingRecord:
    """
    At most one open position at a time. operate() alternates entry and exit on the current
    position; once it closes it moves to positions and a fresh position with the same starting
    type takes its place.
    """

    def __init__(
        self,
        starting_type: TradeType = TradeType.BUY,
        transaction_cost_model: Optional[CostModel] = None,
        holding_cost_model: Optional[CostModel] = None,
        name: str = "",
        start_index: Optional[int] = None,
        end_index: Optional[int] = None,
    ):
        if starting_type is None:
            raise ValueError("Starting type must not be None")
        self.name = name
        self.starting_type = TradeType(starting_type)
        self.transaction_cost_model = transaction_cost_model or ZeroCostModel()
        self.holding_cost_model = holding_cost_model or ZeroCostModel()
        self.start_index = start_index
        self.end_index = end_index
        self._trades: List[Trade] = []
        self._positions: List[Position] = []
        self._current_position = self._new_position()

    @classmethod
    def from_trades(cls, *trades: Trade, holding_cost_model: Optional[CostModel] = None, name: str = "") -> "TradingRecord":
        """Replay trades (alternating entry/exit) into a new record. Costs come from the first trade."""
        if not trades:
            raise ValueError("At least one trade is required")
        first = trades[0]
        record = cls(first.type, first.cost_model, holding_cost_model, name=name)
        for trade in trades:
            if trade.type is not (record.starting_type if record._current_position.is_new
                                  else record.starting_type.complement()):
                raise SequenceError(f"Trade {trade!r} does not alternate with the previous trade")
            record.operate(trade.index, trade.price_per_asset, trade.amount)
        return record

    def _new_position(self) -> Position:
        return Position(self.starting_type, self.transaction_cost_model, self.holding_cost_model)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def operate(self, index: int, price: Any = NaN, amount: Any = NaN) -> Trade:
        """Enter if the current position is new, exit if it is opened."""
        if self._current_position.is_closed:
            # never reached through the public API: closed positions are rotated out immediately
            raise SequenceError("Current position should not be closed")
        is_entry = self._current_position.is_new
        trade = self._current_position.operate(index, price, amount)
        self._record_trade(trade, is_entry)
        return trade

    def enter(self, index: int, price: Any = NaN, amount: Any = NaN) -> bool:
        """Open a position; False if one is already open."""
        if self._current_position.is_new:
            self.operate(index, price, amount)
            return True
        return False

    def exit(self, index: int, price: Any = NaN, amount: Any = NaN) -> bool:
        """Close the open position; False if none is open."""
        if self._current_position.is_opened:
            self.operate(index, price, amount)
            return True
        return False

    def _record_trade(self, trade: Trade, is_entry: bool) -> None:
        self._trades.append(trade)
        logger.debug(
            "%s %s at index %d price=%s amount=%s",
            "Entry" if is_entry else "Exit", trade.type.value, trade.index, trade.price_per_asset, trade.amount,
        )
        if self._current_position.is_closed:
            self._positions.append(self._current_position)
            self._current_position = self._new_position()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_closed(self) -> bool:
        """True when no position is open."""
        return not self._current_position.is_opened

    @property
    def positions(self) -> List[Position]:
        """Closed positions, oldest first."""
        return list(self._positions)

    @property
    def current_position(self) -> Position:
        return self._current_position

    @property
    def trades(self) -> List[Trade]:
        return list(self._trades)

    def get_position_count(self) -> int:
        return len(self._positions)

    def get_last_position(self) -> Optional[Position]:
        return self._positions[-1] if self._positions else None

    def get_last_trade(self, trade_type: Optional[TradeType] = None) -> Optional[Trade]:
        """Most recent trade, optionally of the given type."""
        for trade in reversed(self._trades):
            if trade_type is None or trade.type is TradeType(trade_type):
                return trade
        return None

    def get_last_entry(self) -> Optional[Trade]:
        return self.get_last_trade(self.starting_type)

    def get_last_exit(self) -> Optional[Trade]:
        return self.get_last_trade(self.starting_type.complement())

    def get_start_index(self, series: "BarSeries") -> int:
        """Explicit start index clamped to the series, or the series begin index."""
        if self.start_index is None:
            return series.begin_index
        return max(self.start_index, series.begin_index)

    def get_end_index(self, series: "BarSeries") -> int:
        """Explicit end index clamped to the series, or the series end index."""
        if self.end_index is None:
            return series.end_index
        return min(self.end_index, series.end_index)

    def __repr__(self) -> str:
        return (
            f"TradingRecord(name={self.name!r}, starting_type={self.starting_type.value}, "
            f"positions={len(self._positions)}, open={self._current_position.is_opened})"
        )
