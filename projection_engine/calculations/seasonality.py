"""Monthly distribution of annual revenue using seasonality weights"""

from datetime import date
from typing import Optional, Sequence

from ..errors import InvalidInputError
from ..utils.dates import DateLike, month_starts, to_date
from ..utils.numbers import require_number, require_series

MONTHS_PER_YEAR = 12


def normalize_seasonality(seasonality_factors: Optional[Sequence[float]]) -> list[float]:
    """
    Validate seasonality weights, defaulting to a flat profile

    Args:
        seasonality_factors: Twelve non-negative relative weights, or None/empty

    Returns:
        Twelve weights
    """
    if seasonality_factors is None:
        return [1.0] * MONTHS_PER_YEAR

    factors = require_series(seasonality_factors, "seasonality_factors", allow_empty=True)
    if not factors:
        return [1.0] * MONTHS_PER_YEAR

    if len(factors) != MONTHS_PER_YEAR:
        raise InvalidInputError(
            f"Expected {MONTHS_PER_YEAR} seasonality factors, got {len(factors)}",
            field="seasonality_factors",
            value=seasonality_factors,
        )
    if any(f < 0 for f in factors):
        raise InvalidInputError("Seasonality factors cannot be negative",
                                field="seasonality_factors", value=seasonality_factors)
    if sum(factors) <= 0:
        raise InvalidInputError("Seasonality factors must have a positive sum",
                                field="seasonality_factors", value=seasonality_factors)
    return factors


def distribute_monthly(
    annual_revenue: float,
    seasonality_factors: Optional[Sequence[float]] = None,
    start_date: Optional[DateLike] = None,
) -> list[float]:
    """
    Spread annual revenue over twelve months

    month_i = annual_revenue * factor_i / sum(factors)

    Factor i weights the i-th month of the schedule that begins at
    start_date's month, so the output is chronological from start_date and
    always sums to annual_revenue.

    Args:
        annual_revenue: Revenue for the whole year
        seasonality_factors: Relative monthly weights (flat when empty)
        start_date: First month of the schedule

    Returns:
        Twelve monthly amounts
    """
    annual = require_number(annual_revenue, "annual_revenue")
    if start_date is not None:
        to_date(start_date)

    factors = normalize_seasonality(seasonality_factors)
    factor_sum = sum(factors)
    return [annual * factor / factor_sum for factor in factors]


def monthly_schedule(
    annual_revenue: float,
    seasonality_factors: Optional[Sequence[float]],
    start_date: DateLike,
) -> list[tuple[date, float]]:
    """Monthly amounts paired with the first day of their calendar month"""
    start = to_date(start_date)
    amounts = distribute_monthly(annual_revenue, seasonality_factors, start)
    return list(zip(month_starts(start, MONTHS_PER_YEAR), amounts))
