"""
Revenue projection records.

Immutable value types describing a plan's revenue projection and its
scenarios, as consumed by the projection validator.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .enums import PeriodType


@dataclass(frozen=True)
class ProjectionPeriod:
    """Projection time span."""
    start_date: str
    end_date: str
    period_type: PeriodType = PeriodType.ANNUAL


@dataclass(frozen=True)
class RevenueScenario:
    """One projected outcome with its probability."""
    id: str
    name: str
    projected_revenue: float
    probability_percentage: float
    is_preferred: bool = False
    description: str = ""
    assumptions: tuple[str, ...] = ()


@dataclass(frozen=True)
class RevenueProjection:
    """Revenue projection of a business plan."""
    id: Optional[str]
    plan_id: Optional[str]
    period: Optional[ProjectionPeriod]
    total_revenue: float
    scenarios: tuple[RevenueScenario, ...] = ()
    revenue_breakdown: dict[str, Any] = field(default_factory=dict)

    @property
    def preferred_scenarios(self) -> tuple[RevenueScenario, ...]:
        return tuple(s for s in self.scenarios if s.is_preferred)

    @property
    def total_probability(self) -> float:
        return sum(s.probability_percentage for s in self.scenarios)


@dataclass(frozen=True)
class ProductLine:
    """Unit economics of one product in a sales mix."""
    name: str
    revenue_per_unit: float
    variable_cost_per_unit: float
    sales_mix: float  # Percent of total unit sales
