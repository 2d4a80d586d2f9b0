"""Revenue growth projections (linear, compound and history-weighted)"""

import math
from typing import Any, Optional, Sequence, Union

from ..cache import ResultCache, make_key
from ..config.defaults import GrowthParams
from ..errors import CalculationError, InvalidInputError
from ..logging.config import get_calculation_logger
from ..models.enums import CalculationMethod, ConfidenceLevel, PeriodType, coerce_enum
from ..utils.numbers import ensure_finite, require_number

logger = get_calculation_logger(__name__)


def linear_projection(base_revenue: float, growth_rate_percent: float,
                      confidence_factor: float = 1.0) -> float:
    """
    Project one period of simple growth

    result = base * (1 + g/100 * confidence_factor)
    """
    return base_revenue * (1 + (growth_rate_percent / 100) * confidence_factor)


def compound_projection(base_revenue: float, growth_rate_percent: float,
                        period_exponent: float, confidence_factor: float = 1.0) -> float:
    """
    Compound an annual growth rate to a fraction of a year

    result = base * (1 + g/100 * confidence_factor) ** period_exponent

    Args:
        base_revenue: Revenue at the start of the period
        growth_rate_percent: Annual growth rate in percent
        period_exponent: 1 for a year, 1/4 for a quarter, 1/12 for a month
        confidence_factor: Multiplier applied to the rate

    Returns:
        Projected revenue at the end of the period
    """
    growth_factor = 1 + (growth_rate_percent / 100) * confidence_factor
    if growth_factor < 0 and not float(period_exponent).is_integer():
        raise InvalidInputError(
            f"Growth rate {growth_rate_percent}% cannot be compounded to a fractional period",
            field="growth_rate_percent",
            value=growth_rate_percent,
        )
    try:
        return base_revenue * growth_factor ** period_exponent
    except OverflowError:
        raise CalculationError(
            f"Compounding {growth_rate_percent}% over {period_exponent} periods overflows",
            metric_name="projected_revenue",
            calculation_input={"base_revenue": base_revenue, "growth_rate_percent": growth_rate_percent},
        ) from None


def weighted_historical_growth(historical_rates: Sequence[float]) -> float:
    """
    Weighted average of past growth rates, oldest first

    The oldest rate gets weight 1, the next weight 2 and so on, so recent
    periods dominate. An empty history averages to zero growth.
    """
    if not historical_rates:
        return 0.0

    total_weight = 0
    weighted_sum = 0.0
    for index, rate in enumerate(historical_rates):
        weight = index + 1
        weighted_sum += rate * weight
        total_weight += weight

    return weighted_sum / total_weight


def _normalize_history(historical_rates: Any) -> Optional[list[float]]:
    """Numeric history as floats, or None when absent or unusable."""
    if historical_rates is None or isinstance(historical_rates, (str, bytes, dict)):
        return None
    try:
        rates = list(historical_rates)
    except TypeError:
        return None
    if not all(isinstance(r, (int, float)) and not isinstance(r, bool) and math.isfinite(r)
               for r in rates):
        return None
    return [float(r) for r in rates]


class GrowthModel:
    """Memoized revenue projection for one growth assumption"""

    def __init__(self, params: Optional[GrowthParams] = None,
                 cache: Optional[ResultCache] = None):
        self.params = params or GrowthParams()
        self.cache = cache if cache is not None else ResultCache()
        self.calculation_count = 0

    def confidence_factor(self, confidence_level: Union[ConfidenceLevel, str]) -> float:
        level = coerce_enum(ConfidenceLevel, confidence_level, "confidence_level")
        return self.params.confidence_factors[level.value]

    def period_exponent(self, period_type: Union[PeriodType, str]) -> float:
        period = coerce_enum(PeriodType, period_type, "period_type")
        return self.params.period_exponents[period.value]

    def project_revenue(
        self,
        base_revenue: float,
        growth_rate_percent: float,
        period_type: Union[PeriodType, str],
        confidence_level: Union[ConfidenceLevel, str],
        method: Union[CalculationMethod, str],
        historical_rates: Optional[Sequence[float]] = None,
    ) -> float:
        """
        Project revenue for one period

        Identical arguments are answered from the cache without rerunning the
        arithmetic.

        Args:
            base_revenue: Revenue the projection starts from
            growth_rate_percent: Expected growth in percent (ignored for historical)
            period_type: annual, quarterly or monthly (compound only)
            confidence_level: low, medium or high (not applied to historical)
            method: linear, compound or historical
            historical_rates: Past growth percentages, oldest first

        Returns:
            Projected revenue
        """
        base = require_number(base_revenue, "base_revenue")
        growth = require_number(growth_rate_percent, "growth_rate_percent")
        period = coerce_enum(PeriodType, period_type, "period_type")
        confidence = coerce_enum(ConfidenceLevel, confidence_level, "confidence_level")
        calc_method = coerce_enum(CalculationMethod, method, "method")
        history = _normalize_history(historical_rates)

        key = make_key("project_revenue", base, growth, period, confidence, calc_method, history)
        return self.cache.get_or_compute(
            key, lambda: self._project(base, growth, period, confidence, calc_method, history)
        )

    def _project(self, base: float, growth: float, period: PeriodType,
                 confidence: ConfidenceLevel, method: CalculationMethod,
                 history: Optional[list[float]]) -> float:
        self.calculation_count += 1

        if method is CalculationMethod.LINEAR:
            result = linear_projection(base, growth, self.confidence_factor(confidence))
        elif method is CalculationMethod.COMPOUND:
            result = compound_projection(
                base, growth, self.period_exponent(period), self.confidence_factor(confidence)
            )
        else:
            # Historical rates are observed data, so no confidence adjustment
            if not history:
                logger.debug("No usable historical rates, projecting zero growth",
                             base_revenue=base)
            result = linear_projection(base, weighted_historical_growth(history or []), 1.0)

        result = ensure_finite(result, "projected_revenue")

        logger.debug(
            "Projected revenue",
            method=method.value,
            period_type=period.value,
            confidence_level=confidence.value,
            result=result,
        )
        return result
