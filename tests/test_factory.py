"""Unit tests for ta_engine.factory."""

from decimal import Decimal

from ta_engine.backtesting.manager import BarSeriesManager
from ta_engine.core.config import Config
from ta_engine.core.types import TradeType
from ta_engine.factory import build_cost_models, build_manager, build_series, build_trading_record
from ta_engine.trading.cost_models import (
    LinearBorrowingCostModel,
    LinearTransactionCostModel,
    ZeroCostModel,
)


def test_build_series_from_config():
    config = Config(series_name="ZECUSDT", maximum_bar_count=10, num_type="decimal")
    series = build_series(config)
    assert series.name == "ZECUSDT"
    assert series.maximum_bar_count == 10
    assert series.num_of(1.5) == Decimal("1.5")


def test_zero_fees_select_zero_cost_models():
    transaction, holding = build_cost_models(Config())
    assert transaction == ZeroCostModel()
    assert holding == ZeroCostModel()


def test_fees_select_linear_models():
    config = Config(transaction_fee=0.001, borrowing_fee=0.0001)
    transaction, holding = build_cost_models(config)
    assert transaction == LinearTransactionCostModel(0.001)
    assert holding == LinearBorrowingCostModel(0.0001)


def test_build_trading_record_and_manager():
    config = Config(starting_type="SELL", transaction_fee=0.001)
    record = build_trading_record(config, name="short")
    assert record.starting_type is TradeType.SELL
    assert record.transaction_cost_model == LinearTransactionCostModel(0.001)
    manager = build_manager(config, build_series(config))
    assert isinstance(manager, BarSeriesManager)
    assert manager.transaction_cost_model == LinearTransactionCostModel(0.001)
