"""
Series maintenance helpers: DataFrame conversion, sorting, gap and overlap detection.
DataFrame columns follow the OHLCV layout used across the stack: time, open, high, low, close, volume.
"""

from __future__ import annotations
import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

import pandas as pd

from ta_engine.core.num import NumFunction, float_num, is_nan
from ta_engine.series.bar import Bar
from ta_engine.series.bar_series import DEFAULT_BAR_PERIOD, BarSeries

logger = logging.getLogger("ta_engine.series.utils")

OHLCV_COLUMNS = ["time", "open", "high", "low", "close", "volume"]


def bar_series_from_dataframe(
    df: pd.DataFrame,
    name: str = "",
    time_period: timedelta = DEFAULT_BAR_PERIOD,
    maximum_bar_count: int = 0,
    num_function: NumFunction = float_num,
) -> BarSeries:
    """
    Build a series from an OHLCV DataFrame. 'time' is the bar end time.
    Rows are sorted by time; rows not after the previous bar are skipped.
    """
    missing = [c for c in OHLCV_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"DataFrame is missing columns: {missing}")
    series = BarSeries(name, num_function=num_function, maximum_bar_count=maximum_bar_count)
    skipped = 0
    for row in df.sort_values("time").itertuples(index=False):
        end_time = pd.Timestamp(row.time).to_pydatetime()
        if not series.is_empty and end_time <= series.last_bar.end_time:
            skipped += 1
            continue
        series.add_ohlcv(
            end_time, row.open, row.high, row.low, row.close, row.volume, time_period=time_period,
        )
    if skipped:
        logger.warning("Skipped %d duplicate/out-of-order rows building series %r", skipped, name)
    return series


def bar_series_to_dataframe(series: BarSeries) -> pd.DataFrame:
    """Resident bars as an OHLCV DataFrame (plus amount and trades), indexed by logical bar index."""
    rows = []
    index = []
    for i in range(series.first_available_index, series.end_index + 1):
        bar = series.get_bar(i)
        rows.append({
            "time": bar.end_time,
            "open": bar.open,
            "high": bar.high,
            "low": bar.low,
            "close": bar.close,
            "volume": bar.volume,
            "amount": bar.amount,
            "trades": bar.trades,
        })
        index.append(i)
    return pd.DataFrame(rows, index=pd.Index(index, name="index"), columns=OHLCV_COLUMNS + ["amount", "trades"])


def sort_bars(bars: List[Bar]) -> List[Bar]:
    """Sort bars in place by end time and return the list."""
    bars.sort(key=lambda b: b.end_time)
    return bars


def add_bars(series: BarSeries, new_bars: Optional[Iterable[Bar]]) -> int:
    """Add bars sorted by end time, skipping any not after the current last bar. Returns number added."""
    if not new_bars:
        return 0
    added = 0
    for bar in sort_bars(list(new_bars)):
        if series.is_empty or bar.end_time > series.last_bar.end_time:
            series.add_bar(bar)
            added += 1
    return added


def replace_bar_if_changed(series: BarSeries, new_bar: Bar) -> Optional[Bar]:
    """
    Replace the last bar if new_bar covers the same period with different values.
    Returns the replaced bar, or None. Only the open (last) bar can be replaced.
    """
    if series.is_empty:
        return None
    last = series.last_bar
    same_period = (
        last.begin_time == new_bar.begin_time
        and last.end_time == new_bar.end_time
        and last.time_period == new_bar.time_period
    )
    if same_period and last != new_bar:
        series.add_bar(new_bar, replace=True)
        return last
    return None


def find_missing_bars(series: BarSeries, only_nan_bars: bool = False) -> List[datetime]:
    """
    End times of missing bars: gaps between consecutive bars (market closures included)
    and bars without full open/high/low data.
    """
    bars = series.bar_data
    if not bars:
        return []
    duration = bars[0].time_period
    missing: List[datetime] = []
    for i, bar in enumerate(bars):
        if not only_nan_bars and i + 1 < len(bars):
            next_bar = bars[i + 1]
            inc = timedelta(0)
            while next_bar.begin_time - inc > bar.end_time:
                missing.append(bar.end_time + inc + duration)
                inc += duration
        if is_nan(bar.open) or is_nan(bar.high) or is_nan(bar.low):
            missing.append(bar.end_time)
    return missing


def find_overlapping_bars(series: BarSeries) -> List[Bar]:
    """Bars that overlap with (or leave more than one period after) their predecessor."""
    bars = series.bar_data
    if not bars:
        return []
    period = bars[0].time_period
    overlapping: List[Bar] = []
    for bar, next_bar in zip(bars, bars[1:]):
        if bar.end_time > next_bar.begin_time or bar.begin_time + period < next_bar.begin_time:
            overlapping.append(next_bar)
    return overlapping
