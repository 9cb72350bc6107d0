"""ta_engine: bounded bar series, cached indicators and trading bookkeeping."""

from ta_engine.core.types import TradeType
from ta_engine.series import Bar, BarSeries
from ta_engine.trading import Position, Trade, TradingRecord

__version__ = "0.1.0"

__all__ = ["Bar", "BarSeries", "Position", "Trade", "TradeType", "TradingRecord", "__version__"]
