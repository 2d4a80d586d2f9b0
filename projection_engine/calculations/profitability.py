"""Investment profitability metrics (ROI, NPV, IRR, payback, PI, MIRR)"""

from typing import Optional, Sequence

from ..cache import ResultCache, make_key
from ..config.defaults import IRRParams
from ..errors import (
    DivisionByZeroError,
    InvalidInputError,
    NeverRecoveredError,
    NoConvergenceError,
)
from ..logging.config import get_calculation_logger, log_sentinel_outcome
from ..models.results import ProfitabilityResult
from ..utils.numbers import (
    ensure_finite,
    require_non_negative,
    require_number,
    require_positive,
    require_series,
)

logger = get_calculation_logger(__name__)

NEVER_RECOVERED = -1.0


def _period_rate(rate_percent: float, annualized_rate: bool) -> float:
    """Discount rate as a per-period decimal: rate/100, or rate/1200 when not annualized."""
    period_rate = rate_percent / 100 if annualized_rate else rate_percent / 1200
    if period_rate <= -1:
        raise InvalidInputError(
            f"Discount rate {rate_percent}% gives a non-positive discount base",
            field="discount_rate",
            value=rate_percent,
        )
    return period_rate


def _npv(initial_investment: float, cash_flows: Sequence[float], period_rate: float) -> float:
    npv = -initial_investment
    for index, cash_flow in enumerate(cash_flows):
        npv += cash_flow / (1 + period_rate) ** (index + 1)
    return npv


def calculate_roi(initial_investment: float, cash_flows: Sequence[float]) -> float:
    """
    Return on investment in percent

    ROI = (sum(cash_flows) - initial_investment) / initial_investment * 100
    """
    investment = require_positive(initial_investment, "initial_investment")
    flows = require_series(cash_flows, "cash_flows")
    return (sum(flows) - investment) / investment * 100


def calculate_npv(
    initial_investment: float,
    cash_flows: Sequence[float],
    discount_rate: float,
    annualized_rate: bool = True,
) -> float:
    """
    Net present value of an investment

    NPV = -initial_investment + sum(cf[i] / (1 + p) ** (i + 1))

    where p is discount_rate/100 when annualized_rate is true and
    discount_rate/1200 otherwise. The flag changes only the rate
    conversion; every cash flow is still discounted by its own period index.

    Args:
        initial_investment: Outlay at period 0 (non-negative)
        cash_flows: One signed amount per subsequent period
        discount_rate: Rate in percent
        annualized_rate: Interpret discount_rate as a per-period percentage

    Returns:
        NPV in currency units
    """
    investment = require_non_negative(initial_investment, "initial_investment")
    flows = require_series(cash_flows, "cash_flows")
    rate = require_number(discount_rate, "discount_rate")
    return _npv(investment, flows, _period_rate(rate, annualized_rate))


def solve_irr(
    initial_investment: float,
    cash_flows: Sequence[float],
    lower_bound: float = -99.0,
    upper_bound: float = 100.0,
    max_iterations: int = 200,
    tolerance: float = 1e-7,
) -> float:
    """
    Bisection search for the rate at which calculate_npv(..., annualized_rate=False) is zero

    The search never leaves [lower_bound, upper_bound] and performs at most
    max_iterations halvings.

    Raises:
        NoConvergenceError: NPV has the same sign at both bounds. The error's
            sentinel is upper_bound when NPV stays positive, lower_bound when
            it stays negative.
    """
    investment = require_non_negative(initial_investment, "initial_investment")
    flows = require_series(cash_flows, "cash_flows")

    def npv_at(rate_percent: float) -> float:
        return _npv(investment, flows, _period_rate(rate_percent, annualized_rate=False))

    low, high = float(lower_bound), float(upper_bound)
    low_npv = npv_at(low)
    high_npv = npv_at(high)

    if low_npv == 0:
        return low
    if high_npv == 0:
        return high

    if (low_npv > 0) == (high_npv > 0):
        sentinel = high if low_npv > 0 else low
        raise NoConvergenceError(
            f"NPV does not change sign between {low}% and {high}%",
            sentinel=sentinel,
            lower_npv=low_npv,
            upper_npv=high_npv,
        )

    mid = (low + high) / 2
    for _ in range(max_iterations):
        mid = (low + high) / 2
        if mid <= low or mid >= high:
            break

        mid_npv = npv_at(mid)
        if abs(mid_npv) < tolerance:
            return mid

        if (mid_npv > 0) == (low_npv > 0):
            low, low_npv = mid, mid_npv
        else:
            high = mid

    return mid


def calculate_irr(
    initial_investment: float,
    cash_flows: Sequence[float],
    lower_bound: float = -99.0,
    upper_bound: float = 100.0,
    max_iterations: int = 200,
    tolerance: float = 1e-7,
) -> float:
    """
    Internal rate of return in percent

    Returns exactly upper_bound when NPV is still positive there (for
    example every cash flow positive and large against the outlay), and
    lower_bound when NPV is negative across the whole domain.
    """
    try:
        return solve_irr(initial_investment, cash_flows, lower_bound, upper_bound,
                         max_iterations, tolerance)
    except NoConvergenceError as e:
        log_sentinel_outcome(
            logger,
            operation="irr",
            sentinel=e.sentinel,
            reason=str(e),
            context={"lower_npv": e.lower_npv, "upper_npv": e.upper_npv},
        )
        return e.sentinel


def payback_outcome(initial_investment: float, cash_flows: Sequence[float]) -> float:
    """
    Periods needed to recover the investment

    Raises:
        NeverRecoveredError: Cumulative cash flow stays negative
    """
    investment = require_positive(initial_investment, "initial_investment")
    flows = require_series(cash_flows, "cash_flows")

    remaining = investment
    for index, cash_flow in enumerate(flows):
        remaining -= cash_flow

        if remaining <= 0:
            if remaining == 0:
                return float(index + 1)

            # Recovered part-way through this period
            deficit_at_start = remaining + cash_flow
            return index + deficit_at_start / cash_flow

    raise NeverRecoveredError(
        "Investment not recovered within the cash-flow horizon",
        periods_examined=len(flows),
        remaining_deficit=remaining,
    )


def calculate_payback_period(initial_investment: float, cash_flows: Sequence[float]) -> float:
    """
    Payback period in periods, interpolated within the recovery period

    Exact recovery at a period boundary gives a whole number; -1 when the
    investment is never recovered.
    """
    try:
        return payback_outcome(initial_investment, cash_flows)
    except NeverRecoveredError as e:
        log_sentinel_outcome(
            logger,
            operation="payback_period",
            sentinel=e.sentinel,
            reason=str(e),
            context={"periods_examined": e.periods_examined,
                     "remaining_deficit": e.remaining_deficit},
        )
        return float(e.sentinel)


def calculate_profitability_index(initial_investment: float, npv: float) -> float:
    """
    Profitability index

    PI = (npv + initial_investment) / initial_investment
    """
    investment = require_positive(initial_investment, "initial_investment")
    return (require_number(npv, "npv") + investment) / investment


def calculate_mirr(
    initial_investment: float,
    cash_flows: Sequence[float],
    financing_rate: float,
    reinvestment_rate: float,
) -> float:
    """
    Modified internal rate of return in percent

    Positive flows are compounded to the terminal period n = len(cash_flows)
    at the reinvestment rate. Negative flows are discounted to period 0 at
    the financing rate; the initial investment already sits at period 0.

    MIRR = ((FV of positives / PV of negatives) ** (1/n) - 1) * 100

    Args:
        initial_investment: Outlay at period 0
        cash_flows: One signed amount per subsequent period
        financing_rate: Cost of financing negative flows, percent per period
        reinvestment_rate: Return on reinvested positive flows, percent per period
    """
    investment = require_non_negative(initial_investment, "initial_investment")
    flows = require_series(cash_flows, "cash_flows")
    finance = _period_rate(require_number(financing_rate, "financing_rate"), annualized_rate=True)
    reinvest = _period_rate(require_number(reinvestment_rate, "reinvestment_rate"), annualized_rate=True)

    n = len(flows)
    pv_negative = investment
    fv_positive = 0.0
    for index, cash_flow in enumerate(flows):
        period = index + 1
        if cash_flow < 0:
            pv_negative += -cash_flow / (1 + finance) ** period
        elif cash_flow > 0:
            fv_positive += cash_flow * (1 + reinvest) ** (n - period)

    if pv_negative == 0:
        raise DivisionByZeroError(
            "MIRR needs an initial investment or at least one negative cash flow",
            numerator=fv_positive,
            denominator_name="present_value_of_outflows",
        )

    return ((fv_positive / pv_negative) ** (1 / n) - 1) * 100


class ProfitabilityAnalyzer:
    """Memoized profitability analysis of a cash-flow schedule"""

    def __init__(self, params: Optional[IRRParams] = None,
                 cache: Optional[ResultCache] = None):
        self.params = params or IRRParams()
        self.cache = cache if cache is not None else ResultCache()
        self.calculation_count = 0

    def irr(self, initial_investment: float, cash_flows: Sequence[float]) -> float:
        return calculate_irr(
            initial_investment,
            cash_flows,
            lower_bound=self.params.lower_bound,
            upper_bound=self.params.upper_bound,
            max_iterations=self.params.max_iterations,
            tolerance=self.params.tolerance,
        )

    def calculate_profitability(
        self,
        initial_investment: float,
        cash_flows: Sequence[float],
        discount_rate: float,
        annualized_rate: bool = True,
        financing_rate: Optional[float] = None,
        reinvestment_rate: Optional[float] = None,
    ) -> ProfitabilityResult:
        """
        All profitability metrics for one schedule

        Repeat calls with equal inputs return the same result object.

        Args:
            initial_investment: Outlay at period 0 (positive)
            cash_flows: One signed amount per subsequent period
            discount_rate: Rate in percent used for NPV
            annualized_rate: Rate conversion flag passed to NPV
            financing_rate: MIRR financing rate, defaults to discount_rate
            reinvestment_rate: MIRR reinvestment rate, defaults to discount_rate

        Returns:
            ProfitabilityResult
        """
        investment = require_positive(initial_investment, "initial_investment")
        flows = require_series(cash_flows, "cash_flows")
        rate = require_number(discount_rate, "discount_rate")
        finance = rate if financing_rate is None else require_number(financing_rate, "financing_rate")
        reinvest = rate if reinvestment_rate is None else require_number(reinvestment_rate, "reinvestment_rate")

        key = make_key("calculate_profitability", investment, flows, rate,
                       bool(annualized_rate), finance, reinvest)
        return self.cache.get_or_compute(
            key, lambda: self._analyze(investment, flows, rate, bool(annualized_rate), finance, reinvest)
        )

    def _analyze(self, investment: float, flows: list[float], rate: float,
                 annualized_rate: bool, finance: float, reinvest: float) -> ProfitabilityResult:
        self.calculation_count += 1

        npv = calculate_npv(investment, flows, rate, annualized_rate)
        result = ProfitabilityResult(
            roi=ensure_finite(calculate_roi(investment, flows), "roi"),
            npv=ensure_finite(npv, "npv"),
            irr=ensure_finite(self.irr(investment, flows), "irr"),
            payback_period=calculate_payback_period(investment, flows),
            profitability_index=ensure_finite(calculate_profitability_index(investment, npv),
                                              "profitability_index"),
            mirr=ensure_finite(calculate_mirr(investment, flows, finance, reinvest), "mirr"),
            discount_rate=rate,
            initial_investment=investment,
            cash_flows=tuple(flows),
        )

        logger.info(
            "Profitability calculated",
            roi=result.roi,
            npv=result.npv,
            irr=result.irr,
            payback_period=result.payback_period,
            periods=len(flows),
        )
        return result
