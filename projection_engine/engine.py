"""
Projection engine coordinator.

Owns the configuration and the shared result cache, and routes calls to
the growth, seasonality, break-even, profitability, financial statement
and validation components.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

import structlog

from .cache import ResultCache
from .calculations.break_even import BreakEvenAnalyzer
from .calculations.growth import GrowthModel
from .calculations.profitability import (
    ProfitabilityAnalyzer,
    calculate_mirr,
    calculate_npv,
    calculate_payback_period,
    calculate_profitability_index,
    calculate_roi,
)
from .calculations.seasonality import distribute_monthly, monthly_schedule
from .calculations.statements import FinancialStatementCalculator, ItemLike
from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .errors import InvalidInputError
from .models.enums import CalculationMethod, ConfidenceLevel, PeriodType
from .models.projection import RevenueProjection
from .models.statements import BalanceSheet, FinancialStatements
from .models.results import (
    BreakEvenDate,
    BreakEvenResult,
    MultiProductBreakEven,
    ProfitabilityResult,
    SubscriptionBreakEven,
    ValidationResult,
)
from .utils.dates import DateLike
from .validation.projection_validator import ProjectionValidator

logger = structlog.get_logger(__name__)


class ProjectionEngine:
    """
    Entry point for financial projection and profitability calculations.

    All components share one ResultCache, so repeated growth projections,
    profitability analyses and financial statements with equal inputs
    return the cached results.
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        cache: Optional[ResultCache] = None,
    ) -> None:
        """Load configuration and build the calculation components."""
        self.logger = logger

        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        merged = self.config_loader.merge_config(overrides)
        validation_errors = ConfigValidator.validate_config(merged)
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            self.logger.error("Engine configuration validation failed", errors=error_msgs)
            raise InvalidInputError(
                f"Invalid engine configuration: {'; '.join(error_msgs)}",
                field="config",
                value=merged,
            )
        self.config: DefaultConfig = self.config_loader.build_config(overrides)

        self.cache = cache if cache is not None else ResultCache(enabled=self.config.cache.enabled)
        self.growth_model = GrowthModel(self.config.growth, self.cache)
        self.break_even_analyzer = BreakEvenAnalyzer(self.config.break_even, self.config.validation)
        self.profitability_analyzer = ProfitabilityAnalyzer(self.config.irr, self.cache)
        self.statement_calculator = FinancialStatementCalculator(self.cache)
        self.validator = ProjectionValidator(self.config.validation)

        self.logger.info(
            "Projection engine initialized",
            config_dir=str(self.config_loader.config_dir),
            cache_enabled=self.cache.enabled,
        )

    # Growth and seasonality

    def project_revenue(
        self,
        base_revenue: float,
        growth_rate_percent: float,
        period_type: Union[PeriodType, str],
        confidence_level: Union[ConfidenceLevel, str],
        method: Union[CalculationMethod, str],
        historical_rates: Optional[Sequence[float]] = None,
    ) -> float:
        """Projected revenue for one period (memoized)."""
        hits_before = self.cache.hits
        result = self.growth_model.project_revenue(
            base_revenue, growth_rate_percent, period_type, confidence_level, method, historical_rates
        )
        self._log_cache_use("project_revenue", hits_before)
        return result

    def distribute_monthly(
        self,
        annual_revenue: float,
        seasonality_factors: Optional[Sequence[float]] = None,
        start_date: Optional[DateLike] = None,
    ) -> list[float]:
        """Twelve monthly amounts summing to annual_revenue."""
        return distribute_monthly(annual_revenue, seasonality_factors, start_date)

    def monthly_schedule(
        self,
        annual_revenue: float,
        seasonality_factors: Optional[Sequence[float]],
        start_date: DateLike,
    ) -> list:
        return monthly_schedule(annual_revenue, seasonality_factors, start_date)

    # Break-even

    def break_even_point(self, fixed_costs: float, revenue_per_unit: float,
                         variable_cost_per_unit: float) -> float:
        return self.break_even_analyzer.break_even_point(fixed_costs, revenue_per_unit,
                                                         variable_cost_per_unit)

    def break_even_date(self, fixed_costs: float, monthly_revenue: Sequence[float],
                        monthly_costs: Sequence[float], start_date: DateLike) -> BreakEvenDate:
        return self.break_even_analyzer.break_even_date(fixed_costs, monthly_revenue,
                                                        monthly_costs, start_date)

    def analyze_break_even(self, fixed_costs: float, revenue_per_unit: float,
                           variable_cost_per_unit: float, projected_unit_sales: Sequence[float],
                           start_date: DateLike) -> BreakEvenResult:
        return self.break_even_analyzer.analyze(fixed_costs, revenue_per_unit, variable_cost_per_unit,
                                                projected_unit_sales, start_date)

    def multi_product_break_even(self, fixed_costs: float,
                                 products: Sequence[Any]) -> MultiProductBreakEven:
        return self.break_even_analyzer.multi_product(fixed_costs, products)

    def subscription_break_even(self, fixed_costs: float, monthly_subscription_revenue: float,
                                variable_cost_per_subscriber: float,
                                customer_acquisition_cost: float,
                                churn_rate_percent: float) -> SubscriptionBreakEven:
        return self.break_even_analyzer.subscription(
            fixed_costs, monthly_subscription_revenue, variable_cost_per_subscriber,
            customer_acquisition_cost, churn_rate_percent,
        )

    # Profitability

    def calculate_profitability(
        self,
        initial_investment: float,
        cash_flows: Sequence[float],
        discount_rate: float,
        annualized_rate: bool = True,
        financing_rate: Optional[float] = None,
        reinvestment_rate: Optional[float] = None,
    ) -> ProfitabilityResult:
        """All profitability metrics (memoized, same object on repeat calls)."""
        hits_before = self.cache.hits
        result = self.profitability_analyzer.calculate_profitability(
            initial_investment, cash_flows, discount_rate, annualized_rate,
            financing_rate, reinvestment_rate,
        )
        self._log_cache_use("calculate_profitability", hits_before)
        return result

    def roi(self, initial_investment: float, cash_flows: Sequence[float]) -> float:
        return calculate_roi(initial_investment, cash_flows)

    def npv(self, initial_investment: float, cash_flows: Sequence[float],
            discount_rate: float, annualized_rate: bool = True) -> float:
        return calculate_npv(initial_investment, cash_flows, discount_rate, annualized_rate)

    def irr(self, initial_investment: float, cash_flows: Sequence[float]) -> float:
        return self.profitability_analyzer.irr(initial_investment, cash_flows)

    def payback_period(self, initial_investment: float, cash_flows: Sequence[float]) -> float:
        return calculate_payback_period(initial_investment, cash_flows)

    def profitability_index(self, initial_investment: float, npv: float) -> float:
        return calculate_profitability_index(initial_investment, npv)

    def mirr(self, initial_investment: float, cash_flows: Sequence[float],
             financing_rate: float, reinvestment_rate: float) -> float:
        return calculate_mirr(initial_investment, cash_flows, financing_rate, reinvestment_rate)

    # Financial statements

    def calculate_financial_statements(
        self,
        projection_id: str,
        tax_rate: float,
        revenue_items: Sequence[ItemLike],
        expense_items: Sequence[ItemLike],
        asset_items: Sequence[ItemLike],
        liability_items: Sequence[ItemLike],
        equity_items: Sequence[ItemLike],
        previous_balance_sheet: Optional[BalanceSheet] = None,
    ) -> FinancialStatements:
        """Income statement, cash flow statement and balance sheet (memoized)."""
        hits_before = self.cache.hits
        result = self.statement_calculator.calculate_financial_statements(
            projection_id, tax_rate, revenue_items, expense_items, asset_items,
            liability_items, equity_items, previous_balance_sheet,
        )
        self._log_cache_use("calculate_financial_statements", hits_before)
        return result

    # Validation

    def validate_projection(
        self, projection: Union[RevenueProjection, Mapping[str, Any]]
    ) -> ValidationResult:
        return self.validator.validate(projection)

    # Cache

    def reset_cache(self) -> None:
        """Drop every memoized result."""
        self.cache.clear()
        self.logger.info("Result cache cleared")

    def get_cache_stats(self) -> dict[str, int]:
        return self.cache.get_stats()

    def _log_cache_use(self, operation: str, hits_before: int) -> None:
        if self.cache.hits > hits_before:
            self.logger.debug("Served from cache", operation=operation)
