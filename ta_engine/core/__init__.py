"""Core: config, logging, errors, num helpers."""

from ta_engine.core.config import load_config, Config
from ta_engine.core.logger import setup_logging
from ta_engine.core.errors import (
    TaEngineError,
    OutOfSequenceError,
    InvalidRangeError,
    SequenceError,
    InconsistentCostModelError,
    SealedBarError,
    LookAheadError,
)
from ta_engine.core.num import NaN, is_nan, num_function_for

__all__ = [
    "load_config",
    "Config",
    "setup_logging",
    "TaEngineError",
    "OutOfSequenceError",
    "InvalidRangeError",
    "SequenceError",
    "InconsistentCostModelError",
    "SealedBarError",
    "LookAheadError",
    "NaN",
    "is_nan",
    "num_function_for",
]
