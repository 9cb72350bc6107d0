"""
Performance metrics: Sharpe, Sortino, max drawdown, win rate, profit factor, expectancy.
Assumes period returns (e.g. daily or per-position).
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

import numpy as np

from ta_engine.core.num import is_nan, safe_div

if TYPE_CHECKING:
    from ta_engine.trading.trading_record import TradingRecord

logger = logging.getLogger("ta_engine.analytics")


@dataclass
class PerformanceMetrics:
    """Aggregate performance metrics."""
    total_return_pct: float
    sharpe_ratio: float
    sortino_ratio: float
    max_drawdown_pct: float
    win_rate: float
    profit_factor: float
    expectancy: float
    total_positions: int
    winning_positions: int
    losing_positions: int
    avg_win: float
    avg_loss: float


def sharpe_ratio(returns: List[float], risk_free_rate: float = 0.0, periods_per_year: float = 252.0) -> float:
    """Annualized Sharpe. returns = list of period returns."""
    if not returns:
        return 0.0
    arr = np.array(returns)
    excess = arr - risk_free_rate / periods_per_year
    if excess.std() <= 1e-12:
        return 0.0
    return float(np.sqrt(periods_per_year) * excess.mean() / excess.std())


def sortino_ratio(returns: List[float], risk_free_rate: float = 0.0, periods_per_year: float = 252.0) -> float:
    """Annualized Sortino (downside deviation)."""
    if not returns:
        return 0.0
    arr = np.array(returns)
    excess = arr - risk_free_rate / periods_per_year
    downside = arr[arr < 0]
    if len(downside) == 0 or downside.std() <= 1e-12:
        return sharpe_ratio(returns, risk_free_rate, periods_per_year)
    return float(np.sqrt(periods_per_year) * excess.mean() / downside.std())


def max_drawdown(cumulative_returns: List[float]) -> float:
    """Max drawdown in percent (e.g. 0.15 = 15%)."""
    if not cumulative_returns:
        return 0.0
    arr = np.array(cumulative_returns)
    peak = np.maximum.accumulate(arr)
    dd = (arr - peak) / np.where(peak != 0, peak, 1)
    return float(np.min(dd)) * 100.0


def win_rate(pnls: List[float]) -> float:
    """Fraction of positions with positive profit."""
    if not pnls:
        return 0.0
    return sum(1 for p in pnls if p > 0) / len(pnls)


def profit_factor(pnls: List[float]) -> float:
    """Gross profit / gross loss. Returns 0 if no losses."""
    wins = sum(p for p in pnls if p > 0)
    losses = sum(-p for p in pnls if p < 0)
    if losses <= 0:
        return float("inf") if wins > 0 else 0.0
    return wins / losses


def expectancy(pnls: List[float]) -> float:
    """Average profit per position."""
    if not pnls:
        return 0.0
    return sum(pnls) / len(pnls)


def compute_metrics(
    pnls: List[float],
    cumulative_returns: Optional[List[float]] = None,
    risk_free_rate: float = 0.0,
    periods_per_year: float = 252.0,
    returns: Optional[List[float]] = None,
) -> PerformanceMetrics:
    """
    Compute full metrics from a list of position profits (oldest first).
    cumulative_returns: optional equity curve normalised to 1. If None, 1 + running sum of pnls.
    returns: period returns for Sharpe/Sortino. If None, the steps of the equity curve.
    """
    total_positions = len(pnls)
    if total_positions == 0:
        return PerformanceMetrics(
            total_return_pct=0.0, sharpe_ratio=0.0, sortino_ratio=0.0, max_drawdown_pct=0.0,
            win_rate=0.0, profit_factor=0.0, expectancy=0.0,
            total_positions=0, winning_positions=0, losing_positions=0, avg_win=0.0, avg_loss=0.0,
        )
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    if cumulative_returns is None:
        cumulative_returns = (1.0 + np.cumsum(pnls)).tolist()
    if returns is None:
        returns = np.diff([1.0] + cumulative_returns).tolist()
    total_return_pct = (cumulative_returns[-1] - 1.0) * 100.0
    return PerformanceMetrics(
        total_return_pct=total_return_pct,
        sharpe_ratio=sharpe_ratio(returns, risk_free_rate, periods_per_year),
        sortino_ratio=sortino_ratio(returns, risk_free_rate, periods_per_year),
        max_drawdown_pct=max_drawdown(cumulative_returns),
        win_rate=win_rate(pnls),
        profit_factor=profit_factor(pnls),
        expectancy=expectancy(pnls),
        total_positions=total_positions,
        winning_positions=len(wins),
        losing_positions=len(losses),
        avg_win=sum(wins) / len(wins) if wins else 0.0,
        avg_loss=sum(losses) / len(losses) if losses else 0.0,
    )


def position_profits(record: "TradingRecord") -> List[float]:
    """Net profit of every closed position, oldest first, as floats."""
    return [float(position.get_profit()) for position in record.positions]


def position_returns(record: "TradingRecord") -> List[float]:
    """
    Net return of every closed position: profit after costs over the entry value.
    Positions without a priced entry are skipped.
    """
    returns = []
    for position in record.positions:
        value = safe_div(position.get_profit(), position.entry.value)
        if not is_nan(value):
            returns.append(float(value))
    return returns


def compute_record_metrics(
    record: "TradingRecord",
    initial_capital: Optional[float] = None,
    risk_free_rate: float = 0.0,
    periods_per_year: float = 252.0,
) -> PerformanceMetrics:
    """
    compute_metrics over the record's closed positions, one period per position.

    Sharpe and Sortino use position_returns(). The equity curve is capital plus running profit
    when initial_capital is given (normalised to start at 1), otherwise the position returns
    compounded from 1.
    """
    pnls = position_profits(record)
    if not pnls:
        return compute_metrics(pnls)
    returns = position_returns(record)
    if initial_capital is not None:
        if initial_capital <= 0:
            raise ValueError(f"initial_capital must be positive, got {initial_capital}")
        equity = float(initial_capital) + np.cumsum(pnls)
        cumulative_returns = [1.0] + (equity / initial_capital).tolist()
    else:
        cumulative_returns = [1.0] + np.cumprod(1.0 + np.array(returns)).tolist()
    logger.debug(
        "Metrics over %d positions (%s equity curve)",
        len(pnls), "capital" if initial_capital is not None else "compounded",
    )
    return compute_metrics(pnls, cumulative_returns, risk_free_rate, periods_per_year, returns=returns)
