"""Unit tests for the memoizing indicator engine (indicators.base.CachedIndicator)."""

import math
from datetime import timedelta

import pytest
from ta_engine.core.errors import LookAheadError
from ta_engine.indicators.base import CachedIndicator


class DoubledClose(CachedIndicator):
    """Counts calculate() calls."""

    def __init__(self, series):
        super().__init__(series)
        self.calls = 0

    def calculate(self, index):
        self.calls += 1
        return self.bar_series.get_bar(index).close * 2


def _append(series, close):
    series.add_ohlcv(series.last_bar.end_time + timedelta(days=1), close, close, close, close)


def test_value_computed_once(series):
    ind = DoubledClose(series)
    assert ind.get_value(3) == 18.0
    assert ind.get_value(3) == 18.0
    assert ind[3] == 18.0
    assert ind.calls == 1
    assert ind.is_cached(3)


def test_separate_instances_do_not_share_cache(series):
    first = DoubledClose(series)
    second = DoubledClose(series)
    first.get_value(2)
    second.get_value(2)
    assert first.calls == 1
    assert second.calls == 1


def test_look_ahead_fails_fast(series):
    ind = DoubledClose(series)
    with pytest.raises(LookAheadError):
        ind.get_value(series.end_index + 1)
    with pytest.raises(IndexError):
        ind.get_value(series.end_index + 1)


def test_pre_history_is_nan(series):
    ind = DoubledClose(series)
    assert math.isnan(ind.get_value(-1))
    assert ind.calls == 0


def test_evicted_index_is_nan(series_factory):
    series = series_factory(list(range(6)), maximum_bar_count=3)
    ind = DoubledClose(series)
    assert math.isnan(ind.get_value(1))
    assert ind.get_value(3) == 6.0


def test_last_bar_value_is_provisional(series_factory):
    series = series_factory([1, 2, 3])
    ind = DoubledClose(series)
    assert ind.get_value(2) == 6.0
    series.add_price(50)
    assert not ind.is_cached(2)
    assert ind.get_value(2) == 100.0
    assert ind.calls == 2


def test_sealed_value_stays_cached(series_factory):
    series = series_factory([1, 2, 3])
    ind = DoubledClose(series)
    ind.get_value(2)
    _append(series, 4)
    # recomputed once now that bar 2 is final
    assert ind.get_value(2) == 6.0
    calls = ind.calls
    _append(series, 5)
    assert ind.get_value(2) == 6.0
    assert ind.calls == calls


def test_cache_bounded_by_resident_window(series_factory):
    series = series_factory([0], maximum_bar_count=5)
    ind = DoubledClose(series)
    for i in range(1, 50):
        _append(series, i)
        assert ind.get_value(series.end_index) == 2.0 * i
        assert ind.cache_size <= 5


def test_clear_cache(series):
    ind = DoubledClose(series)
    ind.get_value(1)
    ind.clear_cache()
    assert ind.cache_size == 0
    ind.get_value(1)
    assert ind.calls == 2
