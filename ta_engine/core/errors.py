"""
Error taxonomy. Structural and sequencing mistakes fail fast at the call that caused them;
undefined numeric results are represented by NaN instead of an exception.
"""

from __future__ import annotations


class TaEngineError(Exception):
    """Base class for errors raised by ta_engine."""


class OutOfSequenceError(TaEngineError, ValueError):
    """A bar was added whose end time is not after the current last bar."""


class InvalidRangeError(TaEngineError, ValueError):
    """Malformed sub-series bounds."""


class SequenceError(TaEngineError):
    """A trade was requested out of order (e.g. exit before the entry index)."""


class InconsistentCostModelError(TaEngineError, ValueError):
    """A position was built from trades whose cost model differs from its own."""


class SealedBarError(TaEngineError):
    """A historical (sealed) bar was mutated."""


class LookAheadError(TaEngineError, IndexError):
    """An indicator was queried past the end of the series."""
