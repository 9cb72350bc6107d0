"""Volume-based indicators."""

from __future__ import annotations
from typing import Any, Tuple

from ta_engine.indicators.base import CachedIndicator, RecursiveCachedIndicator
from ta_engine.series.bar_series import BarSeries


class CloseLocationValueIndicator(CachedIndicator):
    """((close - low) - (high - close)) / (high - low); 0 when the bar has no range."""

    def calculate(self, index: int) -> Any:
        bar = self._series.get_bar(index)
        spread = bar.high - bar.low
        if spread == 0:
            return self.num_of(0)
        return ((bar.close - bar.low) - (bar.high - bar.close)) / spread


class AccumulationDistributionIndicator(RecursiveCachedIndicator):
    """Running sum of close-location value times volume, starting at 0 on the first resident bar."""

    def __init__(self, series: BarSeries):
        super().__init__(series)
        self._clv = CloseLocationValueIndicator(series)

    def seed(self, index: int) -> Tuple[Any, Any]:
        return self.num_of(0), None

    def step(self, index: int, previous_value: Any, previous_state: Any) -> Tuple[Any, Any]:
        money_flow_volume = self._clv.get_value(index) * self._series.get_bar(index).volume
        return previous_value + money_flow_volume, None
