"""Analytics: per-bar returns, analysis criteria and aggregate performance metrics."""

from ta_engine.analytics.returns import Returns, ReturnType
from ta_engine.analytics.criteria import (
    total_profit,
    gross_return,
    number_of_positions,
    linear_transaction_cost,
    expected_shortfall,
)
from ta_engine.analytics.metrics import (
    PerformanceMetrics,
    compute_metrics,
    compute_record_metrics,
    position_profits,
    position_returns,
    sharpe_ratio,
    sortino_ratio,
    max_drawdown,
    win_rate,
    profit_factor,
    expectancy,
)

__all__ = [
    "Returns",
    "ReturnType",
    "total_profit",
    "gross_return",
    "number_of_positions",
    "linear_transaction_cost",
    "expected_shortfall",
    "PerformanceMetrics",
    "compute_metrics",
    "compute_record_metrics",
    "position_profits",
    "position_returns",
    "sharpe_ratio",
    "sortino_ratio",
    "max_drawdown",
    "win_rate",
    "profit_factor",
    "expectancy",
]
