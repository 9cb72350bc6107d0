"""Unit tests for analytics.metrics."""

import pytest
from ta_engine.analytics.metrics import (
    sharpe_ratio,
    sortino_ratio,
    max_drawdown,
    win_rate,
    profit_factor,
    expectancy,
    compute_metrics,
    compute_record_metrics,
    position_profits,
    position_returns,
)
from ta_engine.trading.trade import Trade
from ta_engine.trading.trading_record import TradingRecord


def test_sharpe_ratio_empty():
    assert sharpe_ratio([]) == 0.0


def test_sharpe_ratio_constant():
    assert sharpe_ratio([0.01] * 10) == 0.0  # zero std


def test_sortino_without_losses_falls_back_to_sharpe():
    rets = [0.01, 0.02, 0.03]
    assert sortino_ratio(rets) == pytest.approx(sharpe_ratio(rets))


def test_win_rate():
    assert win_rate([1, -1, 1, 1]) == 0.75
    assert win_rate([]) == 0.0


def test_profit_factor():
    assert profit_factor([10, -5, 10, -5]) == 2.0
    assert profit_factor([10, 10]) == float("inf")
    assert profit_factor([-5, -5]) == 0.0


def test_expectancy():
    assert expectancy([10, -5, 5]) == pytest.approx(10 / 3)
    assert expectancy([]) == 0.0


def test_max_drawdown():
    # equity 1 -> 1.2 -> 1.0 -> 1.1  =>  peak 1.2, dd (1.0-1.2)/1.2 = -16.67%
    cum = [1.0, 1.2, 1.0, 1.1]
    assert max_drawdown(cum) == pytest.approx(-16.666, rel=0.01)


def test_compute_metrics():
    pnls = [10.0, -5.0, 15.0, -3.0]
    m = compute_metrics(pnls)
    assert m.total_positions == 4
    assert m.winning_positions == 2
    assert m.losing_positions == 2
    assert m.expectancy == pytest.approx(4.25)
    assert m.win_rate == 0.5


def _record():
    return TradingRecord.from_trades(
        Trade.buy_at(0, 100.0, 1.0), Trade.sell_at(1, 110.0, 1.0),
        Trade.buy_at(2, 110.0, 1.0), Trade.sell_at(3, 105.0, 1.0),
        Trade.buy_at(4, 105.0, 1.0),
    )


def test_position_profits_ignore_open_position():
    assert position_profits(_record()) == [pytest.approx(10.0), pytest.approx(-5.0)]


def test_compute_record_metrics():
    m = compute_record_metrics(_record(), initial_capital=100.0)
    assert m.total_positions == 2
    assert m.win_rate == 0.5
    assert m.profit_factor == pytest.approx(2.0)
    assert m.total_return_pct == pytest.approx(5.0)
    # equity 100 -> 110 -> 105
    assert m.max_drawdown_pct == pytest.approx(-100 * 5 / 110)
    with pytest.raises(ValueError):
        compute_record_metrics(_record(), initial_capital=0.0)


def test_compute_record_metrics_empty():
    m = compute_record_metrics(TradingRecord())
    assert m.total_positions == 0
    assert m.total_return_pct == 0.0


def test_position_returns_are_relative_to_entry_value():
    # +10 on 100, -5 on 110
    assert position_returns(_record()) == [pytest.approx(0.1), pytest.approx(-5 / 110)]


def test_record_ratios_use_position_returns():
    record = _record()
    rets = [0.1, -5 / 110]
    m = compute_record_metrics(record, initial_capital=100.0)
    assert m.sharpe_ratio == pytest.approx(sharpe_ratio(rets))
    assert m.sortino_ratio == pytest.approx(sortino_ratio(rets))
    # same positions at ten times the size: profits scale, returns and ratios do not
    scaled = TradingRecord.from_trades(
        Trade.buy_at(0, 100.0, 10.0), Trade.sell_at(1, 110.0, 10.0),
        Trade.buy_at(2, 110.0, 10.0), Trade.sell_at(3, 105.0, 10.0),
    )
    assert compute_record_metrics(scaled).sharpe_ratio == pytest.approx(m.sharpe_ratio)


def test_record_equity_compounds_returns_without_capital():
    m = compute_record_metrics(_record())
    # 1.1 * (1 - 5/110) = 1.05
    assert m.total_return_pct == pytest.approx(5.0)
    assert m.max_drawdown_pct == pytest.approx(-100 * 5 / 110)
