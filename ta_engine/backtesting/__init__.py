"""Backtesting: bar-by-bar strategy runs over a bar series."""

from ta_engine.backtesting.manager import BarSeriesManager

__all__ = ["BarSeriesManager"]
