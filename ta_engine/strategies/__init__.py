"""Strategies: composable rules and the entry/exit strategy built from them."""

from ta_engine.strategies.rules import (
    Rule,
    AndRule,
    OrRule,
    NotRule,
    BooleanRule,
    OverIndicatorRule,
    UnderIndicatorRule,
    IsFallingRule,
)
from ta_engine.strategies.strategy import Strategy

__all__ = [
    "Rule",
    "AndRule",
    "OrRule",
    "NotRule",
    "BooleanRule",
    "OverIndicatorRule",
    "UnderIndicatorRule",
    "IsFallingRule",
    "Strategy",
]
