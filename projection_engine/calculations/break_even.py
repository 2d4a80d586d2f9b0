"""Break-even calculations (contribution margin, cumulative cash and sales mix)"""

import math
from typing import Any, Mapping, Optional, Sequence, Union

from ..config.defaults import BreakEvenParams, ValidationParams
from ..errors import DivisionByZeroError, InvalidInputError
from ..logging.config import get_calculation_logger, log_sentinel_outcome
from ..models.projection import ProductLine
from ..models.results import (
    BreakEvenDate,
    BreakEvenResult,
    MultiProductBreakEven,
    ProductBreakEven,
    SubscriptionBreakEven,
)
from ..utils.dates import DateLike, add_months, to_date
from ..utils.numbers import require_non_negative, require_number, require_positive, require_series

logger = get_calculation_logger(__name__)

NOT_REACHED = -1


def _contribution_margin(revenue_per_unit: float, variable_cost_per_unit: float) -> float:
    margin = revenue_per_unit - variable_cost_per_unit
    if margin == 0:
        raise DivisionByZeroError(
            "Contribution margin is zero: revenue per unit equals variable cost per unit",
            denominator_name="contribution_margin",
        )
    return margin


def break_even_units(fixed_costs: float, revenue_per_unit: float,
                     variable_cost_per_unit: float) -> float:
    """
    Units to sell before fixed costs are covered

    units = fixed_costs / (revenue_per_unit - variable_cost_per_unit)

    Raises:
        DivisionByZeroError: Revenue per unit equals variable cost per unit
    """
    fixed = require_number(fixed_costs, "fixed_costs")
    rpu = require_number(revenue_per_unit, "revenue_per_unit")
    vcpu = require_number(variable_cost_per_unit, "variable_cost_per_unit")
    return fixed / _contribution_margin(rpu, vcpu)


def break_even_point(fixed_costs: float, revenue_per_unit: float,
                     variable_cost_per_unit: float) -> float:
    """
    Revenue at which fixed costs are covered

    revenue = fixed_costs / (revenue_per_unit - variable_cost_per_unit) * revenue_per_unit

    Raises:
        DivisionByZeroError: Revenue per unit equals variable cost per unit
    """
    units = break_even_units(fixed_costs, revenue_per_unit, variable_cost_per_unit)
    return units * float(revenue_per_unit)


def break_even_date(
    fixed_costs: float,
    monthly_revenue: Sequence[float],
    monthly_costs: Sequence[float],
    start_date: DateLike,
    fallback_months: int = 12,
) -> BreakEvenDate:
    """
    First month in which cumulative net cash covers the fixed costs

    The balance starts at -fixed_costs and each month adds revenue minus
    costs. A balance of exactly zero counts as break-even. When the balance
    stays negative for the whole horizon the month count is -1 and the date
    is start_date plus fallback_months.

    Args:
        fixed_costs: Up-front costs to recover
        monthly_revenue: Revenue per month, chronological
        monthly_costs: Running costs per month, same length as monthly_revenue
        start_date: Date of the first month
        fallback_months: Date offset used when break-even is not reached

    Returns:
        BreakEvenDate with 1-indexed month count and its date
    """
    fixed = require_non_negative(fixed_costs, "fixed_costs")
    revenue = require_series(monthly_revenue, "monthly_revenue")
    costs = require_series(monthly_costs, "monthly_costs")
    start = to_date(start_date)

    if len(revenue) != len(costs):
        raise InvalidInputError(
            f"monthly_revenue has {len(revenue)} entries but monthly_costs has {len(costs)}",
            field="monthly_costs",
            value=monthly_costs,
        )

    balance = -fixed
    for i, (month_revenue, month_costs) in enumerate(zip(revenue, costs)):
        balance += month_revenue - month_costs
        if balance >= 0:
            months = i + 1
            return BreakEvenDate(months_to_break_even=months, date=add_months(start, months - 1))

    log_sentinel_outcome(
        logger,
        operation="break_even_date",
        sentinel=NOT_REACHED,
        reason="cumulative balance negative across horizon",
        context={"horizon_months": len(revenue), "final_balance": balance},
    )
    return BreakEvenDate(months_to_break_even=NOT_REACHED, date=add_months(start, fallback_months))


def analyze_break_even(
    fixed_costs: float,
    revenue_per_unit: float,
    variable_cost_per_unit: float,
    projected_unit_sales: Sequence[float],
    start_date: DateLike,
    fallback_months: int = 12,
) -> BreakEvenResult:
    """
    Break-even units, revenue and month from projected unit sales

    The break-even month is the first month whose cumulative unit sales
    reach the break-even volume.

    Raises:
        DivisionByZeroError: Zero contribution margin
        InvalidInputError: Negative contribution margin or bad inputs
    """
    fixed = require_non_negative(fixed_costs, "fixed_costs")
    rpu = require_number(revenue_per_unit, "revenue_per_unit")
    vcpu = require_number(variable_cost_per_unit, "variable_cost_per_unit")
    sales = require_series(projected_unit_sales, "projected_unit_sales")
    start = to_date(start_date)

    margin = _contribution_margin(rpu, vcpu)
    if margin < 0:
        raise InvalidInputError(
            "Contribution margin must be positive to calculate break-even point",
            field="variable_cost_per_unit",
            value=vcpu,
        )

    units = fixed / margin
    months = NOT_REACHED
    cumulative_units = 0.0
    for i, month_units in enumerate(sales):
        cumulative_units += month_units
        if cumulative_units >= units:
            months = i + 1
            break

    if months == NOT_REACHED:
        log_sentinel_outcome(
            logger,
            operation="analyze_break_even",
            sentinel=NOT_REACHED,
            reason="cumulative unit sales below break-even volume",
            context={"break_even_units": units, "cumulative_units": cumulative_units},
        )
        reached_on = add_months(start, fallback_months)
    else:
        reached_on = add_months(start, months - 1)

    return BreakEvenResult(
        break_even_units=units,
        break_even_revenue=units * rpu,
        months_to_break_even=months,
        break_even_date=reached_on,
        fixed_costs=fixed,
        revenue_per_unit=rpu,
        variable_cost_per_unit=vcpu,
    )


def _as_product_line(product: Union[ProductLine, Mapping[str, Any], Sequence[Any]]) -> ProductLine:
    if isinstance(product, ProductLine):
        return product
    if isinstance(product, Mapping):
        return ProductLine(
            name=str(product.get("name", "")),
            revenue_per_unit=require_number(product.get("revenue_per_unit"), "revenue_per_unit"),
            variable_cost_per_unit=require_number(
                product.get("variable_cost_per_unit", product.get("variable_costs_per_unit")),
                "variable_cost_per_unit",
            ),
            sales_mix=require_number(product.get("sales_mix"), "sales_mix"),
        )
    try:
        name, rpu, vcpu, mix = product
    except (TypeError, ValueError):
        raise InvalidInputError("Product must be a ProductLine, mapping or 4-tuple",
                                field="products", value=product) from None
    return ProductLine(
        name=str(name),
        revenue_per_unit=require_number(rpu, "revenue_per_unit"),
        variable_cost_per_unit=require_number(vcpu, "variable_cost_per_unit"),
        sales_mix=require_number(mix, "sales_mix"),
    )


def multi_product_break_even(
    fixed_costs: float,
    products: Sequence[Union[ProductLine, Mapping[str, Any], Sequence[Any]]],
    sales_mix_tolerance: float = 0.1,
) -> MultiProductBreakEven:
    """
    Break-even of a product portfolio sold in a fixed sales mix

    Weighted contribution margin = sum(margin_i * mix_i / 100)
    Weighted margin ratio        = sum(margin_i / price_i * mix_i / 100)

    Args:
        fixed_costs: Fixed costs shared by all products
        products: Product lines with sales_mix percentages summing to 100
        sales_mix_tolerance: Allowed deviation of the sales mix total from 100

    Returns:
        MultiProductBreakEven with per-product breakdown
    """
    fixed = require_non_negative(fixed_costs, "fixed_costs")
    if not products:
        raise InvalidInputError("At least one product is required", field="products", value=products)
    lines = [_as_product_line(p) for p in products]

    total_mix = sum(line.sales_mix for line in lines)
    if abs(total_mix - 100) > sales_mix_tolerance:
        raise InvalidInputError(
            f"Sales mix percentages must sum to 100% (current: {total_mix}%)",
            field="sales_mix",
            value=total_mix,
        )

    weighted_margin = 0.0
    weighted_ratio = 0.0
    for line in lines:
        if line.revenue_per_unit == 0:
            raise DivisionByZeroError(
                f"Product {line.name!r} has zero revenue per unit",
                denominator_name="revenue_per_unit",
            )
        margin = line.revenue_per_unit - line.variable_cost_per_unit
        weighted_margin += margin * (line.sales_mix / 100)
        weighted_ratio += (margin / line.revenue_per_unit) * (line.sales_mix / 100)

    if weighted_margin == 0 or weighted_ratio == 0:
        raise DivisionByZeroError("Weighted contribution margin is zero",
                                  numerator=fixed, denominator_name="weighted_contribution_margin")

    units = fixed / weighted_margin
    by_product = tuple(
        ProductBreakEven(
            name=line.name,
            break_even_units=units * (line.sales_mix / 100),
            break_even_revenue=units * (line.sales_mix / 100) * line.revenue_per_unit,
        )
        for line in lines
    )

    return MultiProductBreakEven(
        break_even_revenue=fixed / weighted_ratio,
        break_even_units=units,
        contribution_margin_ratio=weighted_ratio,
        by_product=by_product,
    )


def subscription_break_even(
    fixed_costs: float,
    monthly_subscription_revenue: float,
    variable_cost_per_subscriber: float,
    customer_acquisition_cost: float,
    churn_rate_percent: float,
) -> SubscriptionBreakEven:
    """
    Break-even of a subscription business

    Lifetime is 1 / monthly churn, LTV is the monthly margin over that
    lifetime. Months to break-even assume fixed_costs / CAC subscribers are
    acquired per month.
    """
    fixed = require_non_negative(fixed_costs, "fixed_costs")
    revenue = require_number(monthly_subscription_revenue, "monthly_subscription_revenue")
    variable = require_number(variable_cost_per_subscriber, "variable_cost_per_subscriber")
    cac = require_positive(customer_acquisition_cost, "customer_acquisition_cost")
    churn = require_positive(churn_rate_percent, "churn_rate_percent")

    margin = _contribution_margin(revenue, variable)
    if margin < 0:
        raise InvalidInputError("Subscriber margin must be positive",
                                field="variable_cost_per_subscriber", value=variable)

    lifetime_months = 1 / (churn / 100)
    ltv = margin * lifetime_months
    subscribers = fixed / margin
    months = math.ceil(subscribers * cac / fixed) if fixed > 0 else 0

    return SubscriptionBreakEven(
        break_even_subscribers=subscribers,
        break_even_revenue=subscribers * revenue,
        break_even_months=months,
        ltv=ltv,
        cac=cac,
        ltv_cac_ratio=ltv / cac,
    )


class BreakEvenAnalyzer:
    """Break-even analysis bound to engine configuration"""

    def __init__(self, params: Optional[BreakEvenParams] = None,
                 validation_params: Optional[ValidationParams] = None):
        self.params = params or BreakEvenParams()
        self.validation_params = validation_params or ValidationParams()

    def break_even_point(self, fixed_costs: float, revenue_per_unit: float,
                         variable_cost_per_unit: float) -> float:
        return break_even_point(fixed_costs, revenue_per_unit, variable_cost_per_unit)

    def break_even_units(self, fixed_costs: float, revenue_per_unit: float,
                         variable_cost_per_unit: float) -> float:
        return break_even_units(fixed_costs, revenue_per_unit, variable_cost_per_unit)

    def break_even_date(self, fixed_costs: float, monthly_revenue: Sequence[float],
                        monthly_costs: Sequence[float], start_date: DateLike) -> BreakEvenDate:
        return break_even_date(fixed_costs, monthly_revenue, monthly_costs, start_date,
                               fallback_months=self.params.fallback_months)

    def analyze(self, fixed_costs: float, revenue_per_unit: float,
                variable_cost_per_unit: float, projected_unit_sales: Sequence[float],
                start_date: DateLike) -> BreakEvenResult:
        return analyze_break_even(fixed_costs, revenue_per_unit, variable_cost_per_unit,
                                  projected_unit_sales, start_date,
                                  fallback_months=self.params.fallback_months)

    def multi_product(self, fixed_costs: float, products: Sequence[Any]) -> MultiProductBreakEven:
        return multi_product_break_even(
            fixed_costs, products,
            sales_mix_tolerance=self.validation_params.sales_mix_tolerance,
        )

    def subscription(self, fixed_costs: float, monthly_subscription_revenue: float,
                     variable_cost_per_subscriber: float, customer_acquisition_cost: float,
                     churn_rate_percent: float) -> SubscriptionBreakEven:
        return subscription_break_even(fixed_costs, monthly_subscription_revenue,
                                       variable_cost_per_subscriber, customer_acquisition_cost,
                                       churn_rate_percent)
