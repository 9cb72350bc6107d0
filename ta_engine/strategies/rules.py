"""
Trading rules: boolean conditions on a bar index, composable with &, | and ~.
Undefined (NaN) indicator values never satisfy a comparison.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional, Union

from ta_engine.core.num import is_nan
from ta_engine.indicators.base import Indicator
from ta_engine.indicators.helpers import ConstantIndicator

if TYPE_CHECKING:
    from ta_engine.trading.trading_record import TradingRecord

logger = logging.getLogger("ta_engine.strategies")


class Rule(ABC):
    """A condition evaluated at a bar index, optionally against the trading record so far."""

    @abstractmethod
    def is_satisfied(self, index: int, record: Optional["TradingRecord"] = None) -> bool:
        pass

    def __and__(self, other: "Rule") -> "Rule":
        return AndRule(self, other)

    def __or__(self, other: "Rule") -> "Rule":
        return OrRule(self, other)

    def __invert__(self) -> "Rule":
        return NotRule(self)

    def _trace(self, index: int, satisfied: bool) -> bool:
        logger.debug("%s#is_satisfied(%d): %s", type(self).__name__, index, satisfied)
        return satisfied


class AndRule(Rule):
    def __init__(self, first: Rule, second: Rule):
        self.first = first
        self.second = second

    def is_satisfied(self, index: int, record: Optional["TradingRecord"] = None) -> bool:
        return self._trace(index, self.first.is_satisfied(index, record) and self.second.is_satisfied(index, record))


class OrRule(Rule):
    def __init__(self, first: Rule, second: Rule):
        self.first = first
        self.second = second

    def is_satisfied(self, index: int, record: Optional["TradingRecord"] = None) -> bool:
        return self._trace(index, self.first.is_satisfied(index, record) or self.second.is_satisfied(index, record))


class NotRule(Rule):
    def __init__(self, rule: Rule):
        self.rule = rule

    def is_satisfied(self, index: int, record: Optional["TradingRecord"] = None) -> bool:
        return self._trace(index, not self.rule.is_satisfied(index, record))


class BooleanRule(Rule):
    """Always (or never) satisfied."""

    def __init__(self, satisfied: bool):
        self.satisfied = satisfied

    def is_satisfied(self, index: int, record: Optional["TradingRecord"] = None) -> bool:
        return self.satisfied


BooleanRule.TRUE = BooleanRule(True)
BooleanRule.FALSE = BooleanRule(False)


def _as_indicator(reference: Indicator, other: Union[Indicator, Any]) -> Indicator:
    if isinstance(other, Indicator):
        return other
    return ConstantIndicator(reference.bar_series, other)


class OverIndicatorRule(Rule):
    """Satisfied when first > second. second may be an indicator or a plain threshold."""

    def __init__(self, first: Indicator, second: Union[Indicator, Any]):
        self.first = first
        self.second = _as_indicator(first, second)

    def is_satisfied(self, index: int, record: Optional["TradingRecord"] = None) -> bool:
        a = self.first.get_value(index)
        b = self.second.get_value(index)
        return self._trace(index, not is_nan(a) and not is_nan(b) and a > b)


class UnderIndicatorRule(Rule):
    """Satisfied when first < second. second may be an indicator or a plain threshold."""

    def __init__(self, first: Indicator, second: Union[Indicator, Any]):
        self.first = first
        self.second = _as_indicator(first, second)

    def is_satisfied(self, index: int, record: Optional["TradingRecord"] = None) -> bool:
        a = self.first.get_value(index)
        b = self.second.get_value(index)
        return self._trace(index, not is_nan(a) and not is_nan(b) and a < b)


class IsFallingRule(Rule):
    """
    Satisfied when the indicator fell on at least min_strength (0..1) of the last bar_count
    bar-to-bar steps ending at index.
    """

    def __init__(self, indicator: Indicator, bar_count: int = 1, min_strength: float = 1.0):
        if bar_count < 1:
            raise ValueError(f"bar_count must be positive, got {bar_count}")
        if not 0.0 <= min_strength <= 1.0:
            raise ValueError(f"min_strength must be within [0, 1], got {min_strength}")
        self.indicator = indicator
        self.bar_count = bar_count
        self.min_strength = min_strength

    def is_satisfied(self, index: int, record: Optional["TradingRecord"] = None) -> bool:
        falls = 0
        for i in range(index - self.bar_count + 1, index + 1):
            current = self.indicator.get_value(i)
            previous = self.indicator.get_value(i - 1)
            if not is_nan(current) and not is_nan(previous) and current < previous:
                falls += 1
        return self._trace(index, falls / self.bar_count >= self.min_strength)
