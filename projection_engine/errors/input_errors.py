"""
Input error classifications for projection calculations.

These exceptions signal caller mistakes (wrong types, empty schedules,
non-positive investments) and fail fast instead of letting NaN or Infinity
leak into persisted figures.
"""

from typing import Any, Dict, Optional


class ProjectionInputError(ValueError):
    """Base class for inputs the engine refuses to calculate with."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class InvalidInputError(ProjectionInputError):
    """Non-numeric, empty or out-of-range input."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class DivisionByZeroError(ProjectionInputError):
    """A ratio whose denominator is zero, e.g. a zero contribution margin."""

    def __init__(self, message: str, numerator: Optional[float] = None,
                 denominator_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.numerator = numerator
        self.denominator_name = denominator_name
