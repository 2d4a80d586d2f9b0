"""
System failure error classifications.

Raised when a calculation that passed input validation still produces a
value that cannot be handed to callers.
"""

from typing import Any, Dict, Optional


class CalculationError(Exception):
    """A computed figure is NaN or infinite."""

    def __init__(self, message: str, metric_name: Optional[str] = None,
                 calculation_input: Optional[Dict[str, Any]] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.metric_name = metric_name
        self.calculation_input = calculation_input
        self.context = context or {}
        self.recoverable = False
