"""Unit tests for trading.trade and trading.position."""

from decimal import Decimal

import pytest
from ta_engine.core.errors import InconsistentCostModelError, SequenceError
from ta_engine.core.types import TradeType
from ta_engine.trading.cost_models import LinearBorrowingCostModel, LinearTransactionCostModel
from ta_engine.trading.position import Position
from ta_engine.trading.trade import Trade


def test_trade_net_price_includes_cost():
    model = LinearTransactionCostModel(0.001)
    buy = Trade.buy_at(0, 100.0, 10.0, model)
    sell = Trade.sell_at(1, 110.0, 10.0, model)
    assert buy.cost == pytest.approx(1.0)
    assert buy.net_price == pytest.approx(100.1)
    assert sell.cost == pytest.approx(1.1)
    assert sell.net_price == pytest.approx(109.89)
    assert buy.value == pytest.approx(1000.0)


def test_trade_without_price_uses_bar_close(series):
    trade = Trade.buy_at(2)
    assert trade.is_buy
    assert trade.price_per_asset_for(series) == 8.0


def test_trade_decimal_cost():
    trade = Trade.buy_at(0, Decimal("100"), Decimal("10"), LinearTransactionCostModel(0.001))
    assert trade.cost == Decimal("1")
    assert isinstance(trade.net_price, Decimal)


def test_position_state_machine():
    position = Position()
    assert position.is_new
    entry = position.operate(0, 100.0, 1.0)
    assert position.is_opened
    assert entry.type is TradeType.BUY
    exit_trade = position.operate(2, 110.0, 1.0)
    assert position.is_closed
    assert exit_trade.type is TradeType.SELL
    assert position.operate(3, 120.0, 1.0) is None
    assert position.exit is exit_trade


def test_exit_before_entry_raises():
    position = Position()
    position.operate(5, 100.0, 1.0)
    with pytest.raises(SequenceError):
        position.operate(3, 100.0, 1.0)


def test_profit_sign():
    winner = Position.from_trades(Trade.buy_at(0, 100.0, 1.0), Trade.sell_at(1, 110.0, 1.0))
    loser = Position.from_trades(Trade.buy_at(0, 100.0, 1.0), Trade.sell_at(1, 90.0, 1.0))
    short = Position.from_trades(Trade.sell_at(0, 100.0, 1.0), Trade.buy_at(1, 90.0, 1.0))
    losing_short = Position.from_trades(Trade.sell_at(0, 100.0, 1.0), Trade.buy_at(1, 110.0, 1.0))
    assert winner.get_profit() == pytest.approx(10.0)
    assert loser.get_profit() == pytest.approx(-10.0)
    assert short.get_profit() == pytest.approx(10.0)
    assert losing_short.get_profit() == pytest.approx(-10.0)
    assert winner.has_profit() and not winner.has_loss()
    assert loser.has_loss()


def test_cost_propagates_to_profit():
    model = LinearTransactionCostModel(0.001)
    position = Position(TradeType.BUY, model)
    position.operate(0, 100.0, 10.0)
    position.operate(1, 110.0, 10.0)
    assert position.get_gross_profit() == pytest.approx(100.0)
    assert position.get_position_cost() == pytest.approx(2.1)
    assert position.get_profit() == pytest.approx(position.get_gross_profit() - position.get_position_cost())
    assert position.get_profit() == pytest.approx(97.9)


def test_short_profit_includes_borrowing_cost():
    position = Position(TradeType.SELL, holding_cost_model=LinearBorrowingCostModel(0.01))
    position.operate(0, 100.0, 1.0)
    position.operate(10, 90.0, 1.0)
    assert position.get_profit() == pytest.approx(0.0)


def test_open_position_profit():
    position = Position()
    assert position.get_profit() == 0.0
    position.operate(0, 100.0, 2.0)
    assert position.get_profit() == 0.0
    assert position.get_profit(3, 120.0) == pytest.approx(40.0)


def test_gross_return():
    long = Position.from_trades(Trade.buy_at(0, 100.0, 1.0), Trade.sell_at(1, 110.0, 1.0))
    short = Position.from_trades(Trade.sell_at(0, 100.0, 1.0), Trade.buy_at(1, 90.0, 1.0))
    assert long.get_gross_return() == pytest.approx(1.1)
    assert short.get_gross_return() == pytest.approx(1.1)


def test_gross_return_from_series(series):
    # closes 10 at index 0, 12 at index 6
    position = Position.from_trades(Trade.buy_at(0), Trade.sell_at(6))
    assert position.get_gross_return_for(series) == pytest.approx(1.2)


def test_from_trades_same_type_rejected():
    with pytest.raises(ValueError):
        Position.from_trades(Trade.buy_at(0, 100.0, 1.0), Trade.buy_at(1, 110.0, 1.0))


def test_from_trades_cost_model_mismatch():
    entry = Trade.buy_at(0, 100.0, 1.0, LinearTransactionCostModel(0.01))
    exit_trade = Trade.sell_at(1, 110.0, 1.0)
    with pytest.raises(InconsistentCostModelError):
        Position.from_trades(entry, exit_trade)
    with pytest.raises(InconsistentCostModelError):
        Position.from_trades(
            Trade.buy_at(0, 100.0, 1.0), Trade.sell_at(1, 110.0, 1.0), LinearTransactionCostModel(0.01),
        )


def test_position_equality():
    a = Position.from_trades(Trade.buy_at(0, 100.0, 1.0), Trade.sell_at(1, 110.0, 1.0))
    b = Position.from_trades(Trade.buy_at(0, 100.0, 1.0), Trade.sell_at(1, 110.0, 1.0))
    assert a == b
