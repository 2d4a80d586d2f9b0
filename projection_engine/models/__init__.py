"""
Data models and contracts module.

Immutable data structures for projection inputs and calculation results.
"""

from .enums import CalculationMethod, ConfidenceLevel, PeriodType, coerce_enum
from .projection import ProductLine, ProjectionPeriod, RevenueProjection, RevenueScenario
from .statements import (
    BalanceSheet,
    CashFlowLine,
    CashFlowStatement,
    FinancialItem,
    FinancialStatements,
    IncomeStatement,
    ItemCategory,
)
from .results import (
    BreakEvenDate,
    BreakEvenResult,
    MultiProductBreakEven,
    ProductBreakEven,
    ProfitabilityResult,
    SubscriptionBreakEven,
    ValidationResult,
)

__all__ = [
    "CalculationMethod",
    "ConfidenceLevel",
    "PeriodType",
    "coerce_enum",
    "ProductLine",
    "ProjectionPeriod",
    "RevenueProjection",
    "RevenueScenario",
    "BreakEvenDate",
    "BreakEvenResult",
    "MultiProductBreakEven",
    "ProductBreakEven",
    "ProfitabilityResult",
    "SubscriptionBreakEven",
    "ValidationResult",
    "ItemCategory",
    "FinancialItem",
    "CashFlowLine",
    "IncomeStatement",
    "CashFlowStatement",
    "BalanceSheet",
    "FinancialStatements",
]
