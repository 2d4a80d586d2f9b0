"""
Sentinel outcome classifications.

Some calculations have no answer inside the business horizon: an IRR that
never crosses zero within the search domain, or an investment that is never
paid back. Solvers raise these internally; public functions resolve them to
their documented sentinel values.
"""

from typing import Any, Dict, Optional


class SentinelOutcome(Exception):
    """A legitimate "no answer" outcome resolved to a fixed sentinel value."""

    def __init__(self, message: str, sentinel: float,
                 fallback_strategy: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.sentinel = sentinel
        self.fallback_strategy = fallback_strategy
        self.context = context or {}
        self.allows_degradation = True


class NoConvergenceError(SentinelOutcome):
    """IRR search found no sign change inside its bounded domain."""

    def __init__(self, message: str, sentinel: float,
                 lower_npv: Optional[float] = None,
                 upper_npv: Optional[float] = None, **kwargs):
        kwargs.setdefault("fallback_strategy", "domain_boundary")
        super().__init__(message, sentinel, **kwargs)
        self.lower_npv = lower_npv
        self.upper_npv = upper_npv


class NeverRecoveredError(SentinelOutcome):
    """Cumulative cash flow stays negative across the whole horizon."""

    def __init__(self, message: str, periods_examined: Optional[int] = None,
                 remaining_deficit: Optional[float] = None, **kwargs):
        kwargs.setdefault("fallback_strategy", "never_recovered_sentinel")
        super().__init__(message, -1, **kwargs)
        self.periods_examined = periods_examined
        self.remaining_deficit = remaining_deficit
