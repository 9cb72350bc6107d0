"""
Position: an entry trade and its complementary exit trade.
State machine NEW -> OPENED -> CLOSED; profit and cost accounting through injected cost models.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Optional

from ta_engine.core.errors import InconsistentCostModelError, SequenceError
from ta_engine.core.num import NaN, num_like, zero_like
from ta_engine.core.types import TradeType
from ta_engine.trading.cost_models import CostModel, ZeroCostModel
from ta_engine.trading.trade import Trade

if TYPE_CHECKING:
    from ta_engine.series.bar_series import BarSeries

logger = logging.getLogger("ta_engine.trading")


class Position:
    """
    Pair of trades (entry, exit). Profit of a short (SELL entry) position is the negated
    price gain, so profit is always the gain to the holder.
    """

    def __init__(
        self,
        starting_type: TradeType = TradeType.BUY,
        transaction_cost_model: Optional[CostModel] = None,
        holding_cost_model: Optional[CostModel] = None,
    ):
        if starting_type is None:
            raise ValueError("Starting type must not be None")
        self.starting_type = TradeType(starting_type)
        self.transaction_cost_model = transaction_cost_model or ZeroCostModel()
        self.holding_cost_model = holding_cost_model or ZeroCostModel()
        self._entry: Optional[Trade] = None
        self._exit: Optional[Trade] = None

    @classmethod
    def from_trades(
        cls,
        entry: Trade,
        exit: Trade,
        transaction_cost_model: Optional[CostModel] = None,
        holding_cost_model: Optional[CostModel] = None,
    ) -> "Position":
        """
        Closed position from two trades of opposite type. Both trades must carry the position's
        transaction cost model (defaults to the entry's).
        """
        if entry.type == exit.type:
            raise ValueError("Both trades must have different types")
        transaction_cost_model = transaction_cost_model or entry.cost_model
        if entry.cost_model != transaction_cost_model or exit.cost_model != transaction_cost_model:
            raise InconsistentCostModelError(
                "Trades and the position must incorporate the same trading cost model"
            )
        position = cls(entry.type, transaction_cost_model, holding_cost_model)
        position._entry = entry
        position._exit = exit
        return position

    @property
    def entry(self) -> Optional[Trade]:
        return self._entry

    @property
    def exit(self) -> Optional[Trade]:
        return self._exit

    @property
    def is_new(self) -> bool:
        return self._entry is None and self._exit is None

    @property
    def is_opened(self) -> bool:
        return self._entry is not None and self._exit is None

    @property
    def is_closed(self) -> bool:
        return self._entry is not None and self._exit is not None

    def operate(self, index: int, price: Any = NaN, amount: Any = NaN) -> Optional[Trade]:
        """
        NEW: create the entry trade. OPENED: create the exit trade (SequenceError if index is
        before the entry). CLOSED: nothing happens and None is returned; the owning record opens
        a new position instead.
        """
        if self.is_new:
            self._entry = Trade(index, self.starting_type, price, amount, self.transaction_cost_model)
            return self._entry
        if self.is_opened:
            if index < self._entry.index:
                raise SequenceError(
                    f"The exit index {index} is less than the entry index {self._entry.index}"
                )
            self._exit = Trade(
                index, self.starting_type.complement(), price, amount, self.transaction_cost_model,
            )
            return self._exit
        logger.debug("operate(%d) ignored on closed position %r", index, self)
        return None

    # ------------------------------------------------------------------
    # Profit and return
    # ------------------------------------------------------------------

    def get_profit(self, final_index: Optional[int] = None, final_price: Any = None) -> Any:
        """
        Net profit (gross profit minus position cost). Without arguments: zero while open,
        realised profit once closed. With final_index/final_price: marked at that bar/price.
        """
        if final_index is not None and final_price is not None:
            return self.get_gross_profit(final_price) - self.get_position_cost(final_index)
        if not self.is_closed:
            return self._zero()
        return self.get_gross_profit(self._exit.price_per_asset) - self.get_position_cost()

    def get_gross_profit(self, final_price: Any = None) -> Any:
        """Profit before costs. Zero for an open position unless final_price is given."""
        if self.is_new:
            return self._zero()
        if final_price is None:
            if self.is_opened:
                return self._zero()
            final_price = self._exit.price_per_asset
        if self.is_opened:
            gross = self._entry.amount * final_price - self._entry.value
        else:
            gross = self._exit.value - self._entry.value
        if self._entry.is_sell:
            gross = -gross
        return gross

    def get_gross_return(self, final_price: Any = None) -> Any:
        """exit/entry price ratio (mirrored for shorts). One means break-even."""
        if self.is_new:
            return self._zero()
        if final_price is None:
            if self.is_opened:
                return self._zero()
            final_price = self._exit.price_per_asset
        return self.gross_return_between(self._entry.price_per_asset, final_price)

    def get_gross_return_for(self, series: "BarSeries") -> Any:
        """Gross return using bar closes for trades recorded without prices."""
        return self.gross_return_between(
            self._entry.price_per_asset_for(series), self._exit.price_per_asset_for(series),
        )

    def gross_return_between(self, entry_price: Any, exit_price: Any) -> Any:
        if self._entry.is_buy:
            return exit_price / entry_price
        one = num_like(entry_price, 1)
        return -(exit_price / entry_price - one) + one

    def has_profit(self) -> bool:
        return self.get_profit() > 0

    def has_loss(self) -> bool:
        return self.get_profit() < 0

    # ------------------------------------------------------------------
    # Costs
    # ------------------------------------------------------------------

    def get_position_cost(self, final_index: Optional[int] = None) -> Any:
        """Transaction cost of entry (and exit) plus holding cost up to exit or final_index."""
        transaction_cost = self.transaction_cost_model.calculate_position(self, final_index)
        return transaction_cost + self.get_holding_cost(final_index)

    def get_holding_cost(self, final_index: Optional[int] = None) -> Any:
        return self.holding_cost_model.calculate_position(self, final_index)

    def _zero(self) -> Any:
        if self._entry is None:
            return 0.0
        return zero_like(self._entry.net_price)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._entry == other._entry and self._exit == other._exit

    def __repr__(self) -> str:
        return f"Position(entry={self._entry!r}, exit={self._exit!r})"
