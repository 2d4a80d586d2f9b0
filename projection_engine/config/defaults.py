"""Default configuration parameters for the projection engine."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GrowthParams:
    """Growth projection parameters."""
    # Multipliers applied to the growth rate per confidence level
    confidence_factors: dict[str, float] = field(default_factory=lambda: {
        "low": 0.8,
        "medium": 1.0,
        "high": 1.2,
    })
    # Exponent applied to the annual rate when compounding to a period
    period_exponents: dict[str, float] = field(default_factory=lambda: {
        "annual": 1.0,
        "quarterly": 1.0 / 4.0,
        "monthly": 1.0 / 12.0,
    })


@dataclass(frozen=True)
class IRRParams:
    """
    Bounded bisection parameters for the IRR search.

    The bounds double as the sentinels returned when NPV keeps one sign over
    the whole domain, so overriding upper_bound changes the value reported
    for schedules whose NPV stays positive (100 with the defaults).
    """
    lower_bound: float = -99.0                      # Percent, most negative rate searched
    upper_bound: float = 100.0                      # Percent, also the positive-NPV sentinel
    max_iterations: int = 200
    tolerance: float = 1e-7                         # Absolute NPV considered zero


@dataclass(frozen=True)
class BreakEvenParams:
    """Break-even projection parameters."""
    fallback_months: int = 12                       # Estimated date offset when never reached


@dataclass(frozen=True)
class ValidationParams:
    """Projection validation tolerances."""
    probability_tolerance: float = 0.01             # Scenario probabilities vs 100%
    sales_mix_tolerance: float = 0.1                # Product sales mix vs 100%


@dataclass(frozen=True)
class CacheParams:
    """Result cache parameters."""
    enabled: bool = True


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    growth: GrowthParams
    irr: IRRParams
    break_even: BreakEvenParams
    validation: ValidationParams
    cache: CacheParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        growth=GrowthParams(),
        irr=IRRParams(),
        break_even=BreakEvenParams(),
        validation=ValidationParams(),
        cache=CacheParams(),
    )
