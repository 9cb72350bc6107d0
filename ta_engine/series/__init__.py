"""Series: bars and the bounded bar series."""

from ta_engine.series.bar import Bar
from ta_engine.series.bar_series import BarSeries

__all__ = ["Bar", "BarSeries"]
