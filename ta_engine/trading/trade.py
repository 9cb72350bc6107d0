"""
A single buy or sell event. Immutable; cost and net price are fixed at construction.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ta_engine.core.num import NaN, is_nan, safe_div
from ta_engine.core.types import TradeType
from ta_engine.trading.cost_models import CostModel, ZeroCostModel

if TYPE_CHECKING:
    from ta_engine.series.bar_series import BarSeries


@dataclass(frozen=True)
class Trade:
    """
    Trade at a bar index. price_per_asset may be NaN when the trade is recorded by index only;
    price_per_asset_for(series) then falls back to the bar close.
    net_price = price_per_asset +/- cost / amount (BUY pays the cost, SELL receives less).
    """
    index: int
    type: TradeType
    price_per_asset: Any = NaN
    amount: Any = NaN
    cost_model: CostModel = field(default_factory=ZeroCostModel, compare=False, repr=False)
    cost: Any = field(init=False, compare=False)
    net_price: Any = field(init=False, compare=False)

    def __post_init__(self) -> None:
        cost = self.cost_model.calculate(self.price_per_asset, self.amount)
        cost_per_asset = safe_div(cost, self.amount)
        if is_nan(cost_per_asset) and cost == 0:
            cost_per_asset = cost
        if self.type is TradeType.BUY:
            net_price = self.price_per_asset + cost_per_asset
        else:
            net_price = self.price_per_asset - cost_per_asset
        object.__setattr__(self, "cost", cost)
        object.__setattr__(self, "net_price", net_price)

    @property
    def is_buy(self) -> bool:
        return self.type is TradeType.BUY

    @property
    def is_sell(self) -> bool:
        return self.type is TradeType.SELL

    @property
    def value(self) -> Any:
        """price_per_asset * amount."""
        return self.price_per_asset * self.amount

    def price_per_asset_for(self, series: "BarSeries") -> Any:
        """Recorded price, or the close of the trade's bar if none was recorded."""
        if is_nan(self.price_per_asset):
            return series.get_bar(self.index).close
        return self.price_per_asset

    @classmethod
    def buy_at(cls, index: int, price: Any = NaN, amount: Any = NaN, cost_model: CostModel = None) -> "Trade":
        return cls(index, TradeType.BUY, price, amount, cost_model or ZeroCostModel())

    @classmethod
    def sell_at(cls, index: int, price: Any = NaN, amount: Any = NaN, cost_model: CostModel = None) -> "Trade":
        return cls(index, TradeType.SELL, price, amount, cost_model or ZeroCostModel())
