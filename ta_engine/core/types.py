"""
Core enums shared by trades, positions and strategies.
"""

from __future__ import annotations
from enum import Enum


class TradeType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"

    def complement(self) -> "TradeType":
        return TradeType.SELL if self is TradeType.BUY else TradeType.BUY
