"""
Cost models: transaction costs per trade and holding costs over a position's life.
Models are frozen dataclasses, so equality is by class and parameters.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from ta_engine.core.num import num_like, zero_like
from ta_engine.core.types import TradeType

if TYPE_CHECKING:
    from ta_engine.trading.position import Position


class CostModel(ABC):
    """Pluggable cost policy."""

    @abstractmethod
    def calculate(self, price: Any, amount: Any) -> Any:
        """Cost of a single trade of amount at price."""

    @abstractmethod
    def calculate_position(self, position: "Position", final_index: Optional[int] = None) -> Any:
        """Cost of a position; final_index is needed for open positions where it matters."""


@dataclass(frozen=True)
class ZeroCostModel(CostModel):
    """No costs at all."""

    def calculate(self, price: Any, amount: Any) -> Any:
        return zero_like(price)

    def calculate_position(self, position: "Position", final_index: Optional[int] = None) -> Any:
        entry = position.entry
        return zero_like(entry.price_per_asset if entry is not None else 0.0)


@dataclass(frozen=True)
class LinearTransactionCostModel(CostModel):
    """cost = fee_per_trade * price * amount, charged on entry and exit."""

    fee_per_trade: float

    def calculate(self, price: Any, amount: Any) -> Any:
        return amount * price * num_like(price, self.fee_per_trade)

    def calculate_position(self, position: "Position", final_index: Optional[int] = None) -> Any:
        entry = position.entry
        if entry is None:
            return 0.0
        total = entry.cost
        if position.exit is not None:
            total = total + position.exit.cost
        return total


@dataclass(frozen=True)
class LinearBorrowingCostModel(CostModel):
    """
    Borrowing cost for short positions: entry value * periods held * fee_per_period.
    Long positions cost nothing. Open positions need a final_index.
    """

    fee_per_period: float

    def calculate(self, price: Any, amount: Any) -> Any:
        # depends on the holding period, not on a single trade
        return zero_like(price)

    def calculate_position(self, position: "Position", final_index: Optional[int] = None) -> Any:
        entry = position.entry
        if entry is None:
            return 0.0
        if position.is_opened and final_index is None:
            raise ValueError("Position is not closed. Final index of observation needs to be provided.")
        cost = zero_like(entry.net_price)
        if entry.type is TradeType.SELL and entry.amount is not None:
            if position.is_closed:
                periods = position.exit.index - entry.index
            else:
                periods = final_index - entry.index
            value = entry.value
            cost = value * num_like(value, periods) * num_like(value, self.fee_per_period)
        return cost
