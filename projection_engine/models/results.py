"""Result types returned by the calculations."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class BreakEvenDate:
    """Month in which cumulative net cash flow turns non-negative."""
    months_to_break_even: int  # -1 when not reached within the horizon
    date: date

    @property
    def reached(self) -> bool:
        return self.months_to_break_even > 0


@dataclass(frozen=True)
class BreakEvenResult:
    """Contribution-margin break-even analysis."""
    break_even_units: float
    break_even_revenue: float
    months_to_break_even: int  # -1 when not reached within the horizon
    break_even_date: date
    fixed_costs: float
    revenue_per_unit: float
    variable_cost_per_unit: float

    @property
    def contribution_margin(self) -> float:
        return self.revenue_per_unit - self.variable_cost_per_unit


@dataclass(frozen=True)
class ProductBreakEven:
    """Share of a multi-product break-even attributed to one product."""
    name: str
    break_even_units: float
    break_even_revenue: float


@dataclass(frozen=True)
class MultiProductBreakEven:
    """Sales-mix weighted break-even."""
    break_even_revenue: float
    break_even_units: float
    contribution_margin_ratio: float
    by_product: tuple[ProductBreakEven, ...]


@dataclass(frozen=True)
class SubscriptionBreakEven:
    """Break-even of a subscription business."""
    break_even_subscribers: float
    break_even_revenue: float
    break_even_months: int
    ltv: float
    cac: float
    ltv_cac_ratio: float


@dataclass(frozen=True)
class ProfitabilityResult:
    """Investment profitability metrics for one cash-flow schedule."""
    roi: float
    npv: float
    irr: float
    payback_period: float  # -1 when never recovered
    profitability_index: float
    mirr: float
    discount_rate: float
    initial_investment: float
    cash_flows: tuple[float, ...]

    def is_profitable(self) -> bool:
        return self.npv > 0

    def is_recovered(self) -> bool:
        return self.payback_period >= 0


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of projection validation."""
    is_valid: bool
    errors: tuple[str, ...] = ()
