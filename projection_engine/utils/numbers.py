"""Numeric input checks shared by the calculations."""

import math
from typing import Any, Iterable

from ..errors import CalculationError, InvalidInputError


def require_number(value: Any, field: str) -> float:
    """Return value as float, rejecting booleans, None, NaN and infinities."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{field} must be a number, got {type(value).__name__}",
                                field=field, value=value)
    if math.isnan(value) or math.isinf(value):
        raise InvalidInputError(f"{field} must be finite, got {value}", field=field, value=value)
    return float(value)


def require_positive(value: Any, field: str) -> float:
    number = require_number(value, field)
    if number <= 0:
        raise InvalidInputError(f"{field} must be positive, got {number}", field=field, value=value)
    return number


def require_non_negative(value: Any, field: str) -> float:
    number = require_number(value, field)
    if number < 0:
        raise InvalidInputError(f"{field} cannot be negative, got {number}", field=field, value=value)
    return number


def require_series(values: Any, field: str, allow_empty: bool = False) -> list[float]:
    """Return a list of floats from an ordered numeric sequence."""
    if values is None or isinstance(values, (str, bytes, dict)) or not isinstance(values, Iterable):
        raise InvalidInputError(f"{field} must be a sequence of numbers", field=field, value=values)
    series = [require_number(v, f"{field}[{i}]") for i, v in enumerate(values)]
    if not series and not allow_empty:
        raise InvalidInputError(f"{field} cannot be empty", field=field, value=values)
    return series


def ensure_finite(value: float, metric_name: str) -> float:
    """Guard against NaN/Infinity escaping a calculation."""
    if math.isnan(value) or math.isinf(value):
        raise CalculationError(f"Invalid {metric_name} value: {value}", metric_name=metric_name)
    return value
