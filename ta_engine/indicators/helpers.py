"""Raw accessors and small building-block indicators."""

from __future__ import annotations
from typing import Any

from ta_engine.core.num import is_nan
from ta_engine.indicators.base import CachedIndicator, Indicator
from ta_engine.series.bar_series import BarSeries


class _BarFieldIndicator(Indicator):
    """Reads one bar field. Not cached: the lookup is as cheap as a cache hit."""

    field = ""

    def get_value(self, index: int) -> Any:
        if self._is_undefined(index):
            return self.nan
        value = getattr(self._series.get_bar(index), self.field)
        return self.nan if value is None else value


class OpenPriceIndicator(_BarFieldIndicator):
    field = "open"


class HighPriceIndicator(_BarFieldIndicator):
    field = "high"


class LowPriceIndicator(_BarFieldIndicator):
    field = "low"


class ClosePriceIndicator(_BarFieldIndicator):
    field = "close"


class VolumeIndicator(_BarFieldIndicator):
    field = "volume"


class ConstantIndicator(Indicator):
    """Same value at every resident index."""

    def __init__(self, series: BarSeries, value: Any):
        super().__init__(series)
        self._value = series.num_of(value)

    def get_value(self, index: int) -> Any:
        if self._is_undefined(index):
            return self.nan
        return self._value


class PreviousValueIndicator(CachedIndicator):
    """Value of indicator n bars ago (NaN before history starts)."""

    def __init__(self, indicator: Indicator, n: int = 1):
        if n < 1:
            raise ValueError(f"n must be positive, got {n}")
        super().__init__(indicator)
        self._indicator = indicator
        self._n = n

    def calculate(self, index: int) -> Any:
        return self._indicator.get_value(index - self._n)

    def __repr__(self) -> str:
        n_info = "" if self._n == 1 else f"({self._n})"
        return f"PreviousValueIndicator{n_info}[{self._indicator!r}]"


class _WindowExtremeIndicator(CachedIndicator):
    def __init__(self, indicator: Indicator, bar_count: int):
        if bar_count < 1:
            raise ValueError(f"bar_count must be positive, got {bar_count}")
        super().__init__(indicator)
        self._indicator = indicator
        self._bar_count = bar_count

    def _better(self, candidate: Any, current: Any) -> bool:
        raise NotImplementedError

    def calculate(self, index: int) -> Any:
        start = max(self._series.first_available_index, index - self._bar_count + 1)
        result = self.nan
        for i in range(start, index + 1):
            value = self._indicator.get_value(i)
            if is_nan(value):
                continue
            if is_nan(result) or self._better(value, result):
                result = value
        return result


class HighestValueIndicator(_WindowExtremeIndicator):
    """Highest value of indicator over the last bar_count bars (NaN values skipped)."""

    def _better(self, candidate: Any, current: Any) -> bool:
        return candidate > current


class LowestValueIndicator(_WindowExtremeIndicator):
    """Lowest value of indicator over the last bar_count bars (NaN values skipped)."""

    def _better(self, candidate: Any, current: Any) -> bool:
        return candidate < current


class TRIndicator(CachedIndicator):
    """True range: max(|high - low|, |high - prev close|, |prev close - low|)."""

    def calculate(self, index: int) -> Any:
        bar = self._series.get_bar(index)
        ts = abs(bar.high - bar.low)
        if index <= self._series.first_available_index:
            return ts
        prev_close = self._series.get_bar(index - 1).close
        ys = abs(bar.high - prev_close)
        yst = abs(prev_close - bar.low)
        return max(ts, ys, yst)
