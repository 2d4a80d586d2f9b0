"""
Financial statement records.

Line items are grouped by category into an income statement, a cash flow
statement and a balance sheet for one projection period.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ItemCategory(str, Enum):
    """Statement line an item rolls up into."""
    REVENUE = "revenue"
    COST_OF_SALES = "costOfSales"
    OPERATING_EXPENSE = "operatingExpense"
    CURRENT_ASSET = "currentAsset"
    NON_CURRENT_ASSET = "nonCurrentAsset"
    CURRENT_LIABILITY = "currentLiability"
    NON_CURRENT_LIABILITY = "nonCurrentLiability"
    EQUITY = "equity"


@dataclass(frozen=True)
class FinancialItem:
    """One line item of a financial projection."""
    id: str
    name: str
    category: str
    amount: float
    description: str = ""


@dataclass(frozen=True)
class CashFlowLine:
    """Detail line of a cash flow section."""
    name: str
    amount: float
    description: str = ""


@dataclass(frozen=True)
class IncomeStatement:
    revenue: float
    cost_of_sales: float
    gross_profit: float
    operating_expenses: float
    operating_profit: float
    taxes: float
    net_profit: float
    revenue_items: tuple[FinancialItem, ...] = ()
    expense_items: tuple[FinancialItem, ...] = ()

    @property
    def gross_margin(self) -> Optional[float]:
        """Gross profit as a percentage of revenue, None without revenue."""
        if self.revenue == 0:
            return None
        return self.gross_profit / self.revenue * 100


@dataclass(frozen=True)
class CashFlowStatement:
    operating_cash_flow: float
    investing_cash_flow: float
    financing_cash_flow: float
    net_cash_flow: float
    beginning_cash_balance: float
    ending_cash_balance: float
    operating_activities: tuple[CashFlowLine, ...] = ()
    investing_activities: tuple[CashFlowLine, ...] = ()
    financing_activities: tuple[CashFlowLine, ...] = ()


@dataclass(frozen=True)
class BalanceSheet:
    current_assets: float
    non_current_assets: float
    total_assets: float
    current_liabilities: float
    non_current_liabilities: float
    total_liabilities: float
    equity: float
    asset_items: tuple[FinancialItem, ...] = ()
    liability_items: tuple[FinancialItem, ...] = ()
    equity_items: tuple[FinancialItem, ...] = ()

    def is_balanced(self, tolerance: float = 0.01) -> bool:
        """Assets equal liabilities plus equity within tolerance."""
        return abs(self.total_assets - self.total_liabilities - self.equity) <= tolerance


@dataclass(frozen=True)
class FinancialStatements:
    """Income statement, cash flow statement and balance sheet of one period."""
    income_statement: IncomeStatement
    cash_flow_statement: CashFlowStatement
    balance_sheet: BalanceSheet
