"""Financial projection calculations"""

from .break_even import (
    BreakEvenAnalyzer,
    analyze_break_even,
    break_even_date,
    break_even_point,
    break_even_units,
    multi_product_break_even,
    subscription_break_even,
)
from .growth import (
    GrowthModel,
    compound_projection,
    linear_projection,
    weighted_historical_growth,
)
from .profitability import (
    ProfitabilityAnalyzer,
    calculate_irr,
    calculate_mirr,
    calculate_npv,
    calculate_payback_period,
    calculate_profitability_index,
    calculate_roi,
)
from .seasonality import distribute_monthly, monthly_schedule
from .statements import (
    FinancialStatementCalculator,
    calculate_balance_sheet,
    calculate_cash_flow_statement,
    calculate_income_statement,
)

__all__ = [
    "GrowthModel",
    "linear_projection",
    "compound_projection",
    "weighted_historical_growth",
    "distribute_monthly",
    "monthly_schedule",
    "BreakEvenAnalyzer",
    "break_even_point",
    "break_even_units",
    "break_even_date",
    "analyze_break_even",
    "multi_product_break_even",
    "subscription_break_even",
    "ProfitabilityAnalyzer",
    "calculate_roi",
    "calculate_npv",
    "calculate_irr",
    "calculate_payback_period",
    "calculate_profitability_index",
    "calculate_mirr",
    "FinancialStatementCalculator",
    "calculate_income_statement",
    "calculate_cash_flow_statement",
    "calculate_balance_sheet",
]
