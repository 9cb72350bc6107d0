"""Indicators: evaluation engine plus the building blocks used on top of it."""

from ta_engine.indicators.base import Indicator, CachedIndicator, RecursiveCachedIndicator
from ta_engine.indicators.helpers import (
    OpenPriceIndicator,
    HighPriceIndicator,
    LowPriceIndicator,
    ClosePriceIndicator,
    VolumeIndicator,
    ConstantIndicator,
    PreviousValueIndicator,
    HighestValueIndicator,
    LowestValueIndicator,
    TRIndicator,
)
from ta_engine.indicators.averages import SMAIndicator, EMAIndicator
from ta_engine.indicators.volume import CloseLocationValueIndicator, AccumulationDistributionIndicator
from ta_engine.indicators.parabolic_sar import ParabolicSarIndicator, SarState

__all__ = [
    "Indicator",
    "CachedIndicator",
    "RecursiveCachedIndicator",
    "OpenPriceIndicator",
    "HighPriceIndicator",
    "LowPriceIndicator",
    "ClosePriceIndicator",
    "VolumeIndicator",
    "ConstantIndicator",
    "PreviousValueIndicator",
    "HighestValueIndicator",
    "LowestValueIndicator",
    "TRIndicator",
    "SMAIndicator",
    "EMAIndicator",
    "CloseLocationValueIndicator",
    "AccumulationDistributionIndicator",
    "ParabolicSarIndicator",
    "SarState",
]
