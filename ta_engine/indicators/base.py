"""
Indicator evaluation engine.

An indicator maps a bar index to a value. CachedIndicator memoizes calculate(index) per index,
bounded to the resident window of the series. RecursiveCachedIndicator additionally resolves
self-dependencies (value at i depends on value at i-1) with an iterative forward fill, so that
evaluating index N never recurses N levels deep.

Query policy:
- index > series.end_index: LookAheadError (the data does not exist yet).
- index < series.begin_index, or evicted (index < removed_bars_count): NaN.
- index == series.end_index: the last bar may still change, so the value is cached as
  provisional and recomputed once the series revision moves on.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Union

from ta_engine.core.errors import LookAheadError
from ta_engine.series.bar_series import BarSeries

logger = logging.getLogger("ta_engine.indicators")


class Indicator(ABC):
    """Pure function from a bar index to a value over one BarSeries."""

    unstable_bars: int = 0

    def __init__(self, series: BarSeries):
        if series is None:
            raise ValueError("Bar series cannot be None")
        self._series = series

    @property
    def bar_series(self) -> BarSeries:
        return self._series

    def num_of(self, number: Any) -> Any:
        return self._series.num_of(number)

    @property
    def nan(self) -> Any:
        return self._series.nan

    @abstractmethod
    def get_value(self, index: int) -> Any:
        """Value at index."""

    def _is_undefined(self, index: int) -> bool:
        """
        True for pre-history and evicted indices (callers return NaN).
        Raises LookAheadError past the end of the series.
        """
        series = self._series
        if index > series.end_index:
            raise LookAheadError(
                f"{self!r}: index {index} is beyond the series end index {series.end_index}"
            )
        return index < 0 or index < series.begin_index or index < series.first_available_index

    def __getitem__(self, index: int) -> Any:
        return self.get_value(index)

    def __repr__(self) -> str:
        return type(self).__name__


def _series_of(source: Union[BarSeries, Indicator]) -> BarSeries:
    if isinstance(source, Indicator):
        return source.bar_series
    return source


class _CacheEntry:
    __slots__ = ("value", "state", "revision", "previous")

    def __init__(self, value: Any, state: Any = None, revision: Optional[int] = None):
        self.value = value
        self.state = state
        # None: sealed. Otherwise the series revision the provisional value was computed at.
        self.revision = revision
        # (value, state) at index - 1 for a provisional fold value; index - 1 may be evicted
        # by the time the open bar is recomputed
        self.previous: Optional[Tuple[Any, Any]] = None

    def is_current(self, revision: int) -> bool:
        return self.revision is None or self.revision == revision


class CachedIndicator(Indicator):
    """
    Memoizing indicator. Subclasses implement calculate(index), which may read other
    indicators but must not read its own value at another index (use RecursiveCachedIndicator).
    """

    def __init__(self, source: Union[BarSeries, Indicator]):
        super().__init__(_series_of(source))
        self._cache: Dict[int, _CacheEntry] = {}
        self._trimmed_below = 0
        self._highest_index = -1

    @abstractmethod
    def calculate(self, index: int) -> Any:
        """Uncached value at index."""

    def get_value(self, index: int) -> Any:
        if self._is_undefined(index):
            return self.nan
        series = self._series
        self._trim(series.first_available_index)
        entry = self._cache.get(index)
        if entry is not None and entry.is_current(series.revision):
            return entry.value
        entry = self._compute(index)
        if index == series.end_index:
            entry.revision = series.revision
        self._cache[index] = entry
        if index > self._highest_index:
            self._highest_index = index
        return entry.value

    def _compute(self, index: int) -> _CacheEntry:
        return _CacheEntry(self.calculate(index))

    def _trim(self, first: int) -> None:
        """Drop entries for indices no longer resident in the series."""
        if first <= self._trimmed_below:
            return
        stale = first - self._trimmed_below
        if stale > len(self._cache):
            self._cache = {i: e for i, e in self._cache.items() if i >= first}
        else:
            for i in range(self._trimmed_below, first):
                self._cache.pop(i, None)
        self._trimmed_below = first
        if not self._cache:
            self._highest_index = -1

    def is_cached(self, index: int) -> bool:
        entry = self._cache.get(index)
        return entry is not None and entry.is_current(self._series.revision)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()
        self._highest_index = -1


class RecursiveCachedIndicator(CachedIndicator):
    """
    Cached indicator whose value at index depends on its own value at index - 1.

    Evaluated as a left-to-right fold over the resident window:
    - seed(index) -> (value, state) at the first resident index,
    - step(index, previous_value, previous_state) -> (value, state) afterwards.
    The auxiliary state is cached next to the value. The default seed/step delegate to
    calculate(index), so simple recursive formulas may just override calculate and call
    get_value(index - 1).

    On a cache miss at index i every uncached index below i is computed first, in a loop.
    A provisional value keeps the (value, state) it was stepped from, so the open bar is
    re-stepped rather than reseeded when eviction makes it the first resident index. A
    calculate()-based subclass cannot see evicted values and restarts there instead.
    """

    def get_value(self, index: int) -> Any:
        series = self._series
        first = series.first_available_index
        if 0 <= first <= index <= series.end_index:
            had_history = bool(self._cache)
            self._trim(first)
            if not self._cache:
                start = first
                if had_history:
                    logger.debug("%r: cached history evicted, replaying from index %d", self, first)
            else:
                start = self._highest_index + 1
            for i in range(start, index):
                super().get_value(i)
        return super().get_value(index)

    def seed(self, index: int) -> Tuple[Any, Any]:
        """Value and auxiliary state at the first resident index."""
        return self.calculate(index), None

    def step(self, index: int, previous_value: Any, previous_state: Any) -> Tuple[Any, Any]:
        """Value and auxiliary state at index given those at index - 1."""
        return self.calculate(index), None

    def calculate(self, index: int) -> Any:
        raise NotImplementedError(
            f"{type(self).__name__} must implement calculate() or seed()/step()"
        )

    def _compute(self, index: int) -> _CacheEntry:
        series = self._series
        stale = self._cache.get(index)
        if stale is not None and stale.previous is not None:
            previous = stale.previous
        elif index <= series.first_available_index:
            value, state = self.seed(index)
            return _CacheEntry(value, state)
        else:
            entry = self._entry(index - 1)
            previous = (entry.value, entry.state)
        value, state = self.step(index, *previous)
        result = _CacheEntry(value, state)
        if index == series.end_index:
            result.previous = previous
        return result

    def _entry(self, index: int) -> _CacheEntry:
        entry = self._cache.get(index)
        if entry is None or not entry.is_current(self._series.revision):
            super().get_value(index)
            entry = self._cache[index]
        return entry

    def get_state(self, index: int) -> Any:
        """Auxiliary fold state at index (None for evicted or pre-history indices)."""
        self.get_value(index)
        entry = self._cache.get(index)
        return entry.state if entry is not None else None
