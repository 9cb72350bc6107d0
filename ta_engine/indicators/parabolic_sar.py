"""Parabolic SAR (stop and reverse)."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ta_engine.core.num import is_nan
from ta_engine.indicators.base import RecursiveCachedIndicator
from ta_engine.series.bar_series import BarSeries


@dataclass(frozen=True)
class SarState:
    """Fold state carried from one bar to the next."""
    is_up_trend: bool
    extreme_point: Any
    acceleration: Any
    # highs/lows of this bar and the one before it, newest first
    recent_highs: Tuple[Any, ...] = ()
    recent_lows: Tuple[Any, ...] = ()


class ParabolicSarIndicator(RecursiveCachedIndicator):
    """
    Parabolic SAR. The first resident bar has no value (NaN); the second starts trend detection
    from the two closes. Trend, extreme point, acceleration factor and the last two highs/lows
    are kept as fold state, so a step never reads bars before index.
    """

    def __init__(
        self,
        series: BarSeries,
        acceleration_start: Any = 0.02,
        max_acceleration: Any = 0.2,
        acceleration_increment: Optional[Any] = None,
    ):
        super().__init__(series)
        self._acceleration_start = series.num_of(acceleration_start)
        self._max_acceleration = series.num_of(max_acceleration)
        self._acceleration_increment = (
            self._acceleration_start if acceleration_increment is None else series.num_of(acceleration_increment)
        )

    def seed(self, index: int) -> Tuple[Any, SarState]:
        bar = self._series.get_bar(index)
        # extreme_point holds the seed close until the trend is known
        return self.nan, SarState(False, bar.close, self.num_of(0), (bar.high,), (bar.low,))

    def step(self, index: int, previous_value: Any, previous_state: SarState) -> Tuple[Any, SarState]:
        bar = self._series.get_bar(index)
        recent_highs = (bar.high,) + previous_state.recent_highs[:1]
        recent_lows = (bar.low,) + previous_state.recent_lows[:1]
        if is_nan(previous_value):
            return self._start_trend(bar, previous_state, recent_highs, recent_lows)

        prior_sar = previous_value
        is_up_trend = previous_state.is_up_trend
        extreme = previous_state.extreme_point
        af = previous_state.acceleration
        sar = prior_sar + af * (extreme - prior_sar)

        if is_up_trend:
            if bar.low < sar:
                sar = extreme
                af = self._acceleration_start
                extreme = bar.low
                is_up_trend = False
            elif bar.high > extreme:
                extreme = bar.high
                af = self._increment(af)
        else:
            if bar.high >= sar:
                sar = extreme
                af = self._acceleration_start
                extreme = bar.high
                is_up_trend = True
            elif bar.low < extreme:
                extreme = bar.low
                af = self._increment(af)

        # never inside the previous two bars' range
        if is_up_trend:
            lowest = min(previous_state.recent_lows)
            if sar > lowest:
                sar = lowest
        else:
            highest = max(previous_state.recent_highs)
            if sar < highest:
                sar = highest
        return sar, SarState(is_up_trend, extreme, af, recent_highs, recent_lows)

    def _start_trend(self, bar, seed_state: SarState, recent_highs, recent_lows) -> Tuple[Any, SarState]:
        is_up_trend = seed_state.extreme_point < bar.close
        highest = max(seed_state.recent_highs)
        lowest = min(seed_state.recent_lows)
        if is_up_trend:
            sar, extreme = lowest, highest
        else:
            sar, extreme = highest, lowest
        return sar, SarState(is_up_trend, extreme, self._acceleration_start, recent_highs, recent_lows)

    def _increment(self, af: Any) -> Any:
        af = af + self._acceleration_increment
        if af > self._max_acceleration:
            af = self._max_acceleration
        return af
