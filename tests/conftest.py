"""Shared fixtures: small deterministic bar series."""

from datetime import datetime, timedelta

import pytest

from ta_engine.core.num import float_num
from ta_engine.series.bar_series import BarSeries

START = datetime(2024, 1, 1)
DAY = timedelta(days=1)


def build_series(bars, maximum_bar_count=0, num_function=float_num, name="test"):
    """
    Daily series ending START + 1 day, + 2 days, ...
    Each item is a close (open = high = low = close) or an (open, high, low, close, volume) tuple.
    """
    series = BarSeries(name, num_function=num_function, maximum_bar_count=maximum_bar_count)
    for i, item in enumerate(bars):
        if isinstance(item, tuple):
            o, h, lo, c, v = item
        else:
            o = h = lo = c = item
            v = 1
        series.add_ohlcv(START + DAY * (i + 1), o, h, lo, c, v)
    return series


@pytest.fixture
def series_factory():
    return build_series


@pytest.fixture
def closes():
    return [10.0, 9.0, 8.0, 9.0, 10.0, 11.0, 12.0, 11.0, 10.0]


@pytest.fixture
def series(closes):
    return build_series(closes)
