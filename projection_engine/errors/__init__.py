"""
Error classification for the projection engine.

Input errors fail fast, sentinel outcomes are resolved to documented numbers,
and calculation errors flag results that must not reach callers.
"""

from .conditions import (
    NeverRecoveredError,
    NoConvergenceError,
    SentinelOutcome,
)
from .input_errors import (
    DivisionByZeroError,
    InvalidInputError,
    ProjectionInputError,
)
from .system_failures import CalculationError

__all__ = [
    # Input errors
    "ProjectionInputError",
    "InvalidInputError",
    "DivisionByZeroError",
    # Sentinel outcomes
    "SentinelOutcome",
    "NoConvergenceError",
    "NeverRecoveredError",
    # System failures
    "CalculationError",
]
