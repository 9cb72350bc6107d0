"""Moving averages."""

from __future__ import annotations
from typing import Any, Tuple

from ta_engine.core.num import is_nan
from ta_engine.indicators.base import CachedIndicator, Indicator, RecursiveCachedIndicator


class SMAIndicator(CachedIndicator):
    """Simple moving average over the last bar_count resident values."""

    def __init__(self, indicator: Indicator, bar_count: int):
        if bar_count < 1:
            raise ValueError(f"bar_count must be positive, got {bar_count}")
        super().__init__(indicator)
        self._indicator = indicator
        self._bar_count = bar_count
        self.unstable_bars = bar_count

    def calculate(self, index: int) -> Any:
        start = max(self._series.first_available_index, index - self._bar_count + 1)
        total = self.num_of(0)
        for i in range(start, index + 1):
            total = total + self._indicator.get_value(i)
        return total / self.num_of(index - start + 1)

    def __repr__(self) -> str:
        return f"SMAIndicator(bar_count={self._bar_count})"


class EMAIndicator(RecursiveCachedIndicator):
    """
    Exponential moving average, k = 2 / (bar_count + 1).
    Seeded with the first resident value; NaN inputs carry the previous average forward.
    """

    def __init__(self, indicator: Indicator, bar_count: int):
        if bar_count < 1:
            raise ValueError(f"bar_count must be positive, got {bar_count}")
        super().__init__(indicator)
        self._indicator = indicator
        self._bar_count = bar_count
        self._multiplier = self.num_of(2) / self.num_of(bar_count + 1)
        self.unstable_bars = bar_count

    def seed(self, index: int) -> Tuple[Any, Any]:
        return self._indicator.get_value(index), None

    def step(self, index: int, previous_value: Any, previous_state: Any) -> Tuple[Any, Any]:
        current = self._indicator.get_value(index)
        if is_nan(previous_value):
            return current, None
        if is_nan(current):
            return previous_value, None
        return previous_value + (current - previous_value) * self._multiplier, None

    def __repr__(self) -> str:
        return f"EMAIndicator(bar_count={self._bar_count})"
