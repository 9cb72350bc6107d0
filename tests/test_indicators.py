"""Unit tests for the indicator catalog (helpers, averages, volume)."""

import math

import pytest
from ta_engine.core.errors import LookAheadError
from ta_engine.indicators import (
    AccumulationDistributionIndicator,
    ClosePriceIndicator,
    CloseLocationValueIndicator,
    ConstantIndicator,
    EMAIndicator,
    HighestValueIndicator,
    HighPriceIndicator,
    LowestValueIndicator,
    PreviousValueIndicator,
    SMAIndicator,
    TRIndicator,
    VolumeIndicator,
)


def test_price_accessors(series_factory):
    series = series_factory([(1.0, 3.0, 0.5, 2.0, 7.0)])
    assert ClosePriceIndicator(series).get_value(0) == 2.0
    assert HighPriceIndicator(series).get_value(0) == 3.0
    assert VolumeIndicator(series).get_value(0) == 7.0
    assert math.isnan(ClosePriceIndicator(series).get_value(-1))


def test_constant_indicator(series):
    constant = ConstantIndicator(series, 5)
    assert constant.get_value(3) == 5.0
    assert math.isnan(constant.get_value(-1))
    with pytest.raises(LookAheadError):
        constant.get_value(series.end_index + 1)


def test_constant_indicator_after_eviction(series_factory):
    series = series_factory(list(range(10)), maximum_bar_count=3)
    constant = ConstantIndicator(series, 2)
    assert math.isnan(constant.get_value(2))
    assert constant.get_value(series.first_available_index) == 2.0


def test_previous_value(series):
    close = ClosePriceIndicator(series)
    prev = PreviousValueIndicator(close)
    assert math.isnan(prev.get_value(0))
    assert prev.get_value(3) == 8.0
    assert PreviousValueIndicator(close, 3).get_value(5) == 8.0
    with pytest.raises(ValueError):
        PreviousValueIndicator(close, 0)


def test_highest_and_lowest(series):
    # closes: 10, 9, 8, 9, 10, 11, 12, 11, 10
    close = ClosePriceIndicator(series)
    assert HighestValueIndicator(close, 3).get_value(4) == 10.0
    assert LowestValueIndicator(close, 3).get_value(4) == 8.0
    assert HighestValueIndicator(close, 3).get_value(1) == 10.0
    assert LowestValueIndicator(close, 100).get_value(8) == 8.0


def test_sma(series_factory):
    series = series_factory([1.0, 2.0, 3.0, 4.0, 5.0])
    sma = SMAIndicator(ClosePriceIndicator(series), 3)
    assert sma.get_value(0) == 1.0
    assert sma.get_value(1) == pytest.approx(1.5)
    assert sma.get_value(4) == pytest.approx(4.0)
    assert sma.unstable_bars == 3


def test_ema(series_factory):
    series = series_factory([10.0, 20.0, 20.0])
    ema = EMAIndicator(ClosePriceIndicator(series), 3)
    assert ema.get_value(0) == 10.0
    assert ema.get_value(1) == pytest.approx(15.0)
    assert ema.get_value(2) == pytest.approx(17.5)
    with pytest.raises(ValueError):
        EMAIndicator(ClosePriceIndicator(series), 0)


def test_indicators_share_upstream_cache(series_factory):
    series = series_factory([float(i) for i in range(50)])
    sma = SMAIndicator(ClosePriceIndicator(series), 5)
    ema_of_sma = EMAIndicator(sma, 10)
    ema_of_sma.get_value(49)
    assert sma.cache_size == 50


def test_close_location_value(series_factory):
    series = series_factory([(10.0, 12.0, 8.0, 11.0, 100.0), (10.0, 10.0, 10.0, 10.0, 5.0)])
    clv = CloseLocationValueIndicator(series)
    assert clv.get_value(0) == pytest.approx(0.5)
    assert clv.get_value(1) == 0.0


def test_accumulation_distribution(series_factory):
    series = series_factory([
        (10.0, 11.0, 9.0, 10.0, 50.0),
        (10.0, 12.0, 8.0, 11.0, 100.0),
        (10.0, 10.0, 10.0, 10.0, 5.0),
        (8.0, 10.0, 6.0, 6.0, 10.0),
    ])
    ad = AccumulationDistributionIndicator(series)
    assert ad.get_value(0) == 0.0
    assert ad.get_value(1) == pytest.approx(50.0)
    assert ad.get_value(2) == pytest.approx(50.0)
    assert ad.get_value(3) == pytest.approx(40.0)


def test_true_range(series_factory):
    series = series_factory([(10.0, 11.0, 9.0, 10.0, 1.0), (12.0, 13.0, 12.0, 12.5, 1.0)])
    tr = TRIndicator(series)
    assert tr.get_value(0) == 2.0
    # high - previous close dominates
    assert tr.get_value(1) == 3.0
