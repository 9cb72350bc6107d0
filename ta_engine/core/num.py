"""
Num helpers. A series converts raw numbers through a num function (float by default, Decimal optional).
"""

from __future__ import annotations
import math
from decimal import Decimal
from typing import Any, Callable

NumFunction = Callable[[Any], Any]

NaN = float("nan")


def decimal_num(value: Any) -> Decimal:
    """Decimal conversion that goes through str() so floats keep their printed value."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def float_num(value: Any) -> float:
    return float(value)


_NUM_FUNCTIONS = {
    "float": float_num,
    "double": float_num,
    "decimal": decimal_num,
}


def num_function_for(name: str) -> NumFunction:
    """Return the num function registered under name ('float' or 'decimal')."""
    try:
        return _NUM_FUNCTIONS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unsupported num type: {name}") from None


def nan_of(num_function: NumFunction) -> Any:
    return num_function("nan")


def is_nan(value: Any) -> bool:
    """True for None, float NaN and Decimal NaN."""
    if value is None:
        return True
    if isinstance(value, Decimal):
        return value.is_nan()
    try:
        return math.isnan(value)
    except TypeError:
        return False


def zero_like(value: Any) -> Any:
    """Zero of the same Num type as value (float zero for NaN/None)."""
    if isinstance(value, Decimal):
        return Decimal(0)
    return 0.0


def safe_div(numerator: Any, denominator: Any) -> Any:
    """numerator / denominator, or NaN when the divisor is zero or undefined."""
    if is_nan(numerator) or is_nan(denominator) or denominator == 0:
        if isinstance(numerator, Decimal) or isinstance(denominator, Decimal):
            return Decimal("NaN")
        return NaN
    return numerator / denominator


def num_like(value: Any, number: Any) -> Any:
    """number converted to the Num type of value (Decimal stays Decimal, anything else is float)."""
    if isinstance(value, Decimal):
        return decimal_num(number)
    return float(number)
