"""Strategy: an entry rule and an exit rule plus an unstable warm-up period."""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from ta_engine.strategies.rules import Rule

if TYPE_CHECKING:
    from ta_engine.trading.trading_record import TradingRecord


class Strategy:
    """
    Signals entries while no position is open and exits while one is.
    No signal is given for the first unstable_bars indices.
    """

    def __init__(self, name: str, entry_rule: Rule, exit_rule: Rule, unstable_bars: int = 0):
        if entry_rule is None or exit_rule is None:
            raise ValueError("Entry and exit rules must not be None")
        if unstable_bars < 0:
            raise ValueError(f"unstable_bars must not be negative, got {unstable_bars}")
        self.name = name
        self.entry_rule = entry_rule
        self.exit_rule = exit_rule
        self.unstable_bars = unstable_bars

    def is_unstable_at(self, index: int) -> bool:
        return index < self.unstable_bars

    def should_enter(self, index: int, record: Optional["TradingRecord"] = None) -> bool:
        return not self.is_unstable_at(index) and self.entry_rule.is_satisfied(index, record)

    def should_exit(self, index: int, record: Optional["TradingRecord"] = None) -> bool:
        return not self.is_unstable_at(index) and self.exit_rule.is_satisfied(index, record)

    def should_operate(self, index: int, record: "TradingRecord") -> bool:
        """Enter on a new position, exit on an opened one."""
        position = record.current_position
        if position.is_new:
            return self.should_enter(index, record)
        if position.is_opened:
            return self.should_exit(index, record)
        return False

    def __repr__(self) -> str:
        return f"Strategy(name={self.name!r}, unstable_bars={self.unstable_bars})"
