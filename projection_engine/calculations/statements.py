"""Financial statements (income, cash flow, balance sheet) from projection line items"""

from dataclasses import asdict, replace
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from ..cache import ResultCache, make_key
from ..errors import InvalidInputError
from ..logging.config import get_calculation_logger
from ..models.statements import (
    BalanceSheet,
    CashFlowLine,
    CashFlowStatement,
    FinancialItem,
    FinancialStatements,
    IncomeStatement,
    ItemCategory,
)
from ..utils.numbers import ensure_finite, require_non_negative, require_number

logger = get_calculation_logger(__name__)

ItemLike = Union[FinancialItem, Mapping[str, Any]]

RETAINED_EARNINGS = "Retained Earnings"
BALANCING_ADJUSTMENT = "Balancing Adjustment"
# Equity gaps up to this amount are treated as rounding
BALANCING_THRESHOLD = 1.0


def as_financial_item(item: ItemLike, field: str = "items") -> FinancialItem:
    """Accept a FinancialItem or a mapping with id, name, category and amount."""
    if isinstance(item, FinancialItem):
        require_number(item.amount, f"{field}.amount")
        return item
    if not isinstance(item, Mapping):
        raise InvalidInputError("Line item must be a FinancialItem or mapping", field=field, value=item)
    category = item.get("category", "")
    return FinancialItem(
        id=str(item.get("id", "")),
        name=str(item.get("name", "")),
        category=category.value if isinstance(category, ItemCategory) else str(category),
        amount=require_number(item.get("amount"), f"{field}.amount"),
        description=str(item.get("description", "")),
    )


def _items(items: Optional[Iterable[ItemLike]], field: str) -> list[FinancialItem]:
    if items is None:
        return []
    if isinstance(items, (str, bytes, Mapping)):
        raise InvalidInputError(f"{field} must be a sequence of line items", field=field, value=items)
    return [as_financial_item(item, field) for item in items]


def _in_category(items: Iterable[FinancialItem], category: ItemCategory) -> list[FinancialItem]:
    return [item for item in items if item.category == category.value]


def _total(items: Iterable[FinancialItem]) -> float:
    return sum(item.amount for item in items)


def _cash_item(items: Iterable[FinancialItem]) -> Optional[FinancialItem]:
    return next((item for item in items if item.name.lower() == "cash"), None)


def calculate_income_statement(
    revenue_items: Sequence[ItemLike],
    expense_items: Sequence[ItemLike],
    tax_rate: float,
) -> IncomeStatement:
    """
    Income statement for one period

    Expenses are split into cost of sales and operating expenses by
    category; items in any other category are ignored. Tax is charged only
    on a positive operating profit.

    Args:
        revenue_items: Revenue line items
        expense_items: costOfSales and operatingExpense line items
        tax_rate: Tax rate in percent

    Returns:
        IncomeStatement
    """
    revenues = _items(revenue_items, "revenue_items")
    expenses = _items(expense_items, "expense_items")
    rate = require_non_negative(tax_rate, "tax_rate")

    cost_of_sales_items = _in_category(expenses, ItemCategory.COST_OF_SALES)
    operating_items = _in_category(expenses, ItemCategory.OPERATING_EXPENSE)

    revenue = _total(revenues)
    cost_of_sales = _total(cost_of_sales_items)
    operating_expenses = _total(operating_items)

    gross_profit = revenue - cost_of_sales
    operating_profit = gross_profit - operating_expenses
    taxes = operating_profit * (rate / 100) if operating_profit > 0 else 0.0

    return IncomeStatement(
        revenue=revenue,
        cost_of_sales=cost_of_sales,
        gross_profit=gross_profit,
        operating_expenses=operating_expenses,
        operating_profit=operating_profit,
        taxes=taxes,
        net_profit=ensure_finite(operating_profit - taxes, "net_profit"),
        revenue_items=tuple(revenues),
        expense_items=tuple(cost_of_sales_items + operating_items),
    )


def calculate_cash_flow_statement(
    income_statement: IncomeStatement,
    asset_items: Sequence[ItemLike],
    liability_items: Sequence[ItemLike],
    previous_balance_sheet: Optional[BalanceSheet] = None,
) -> CashFlowStatement:
    """
    Indirect-method cash flow statement

    operating = net profit - change in current assets + change in current liabilities
    investing = -change in non-current assets
    financing = change in non-current liabilities

    Changes are measured against previous_balance_sheet, or against zero
    for the first period. The ending balance is the amount of an asset
    named "Cash" when one is given, otherwise beginning balance plus net
    cash flow.
    """
    assets = _items(asset_items, "asset_items")
    liabilities = _items(liability_items, "liability_items")
    previous = previous_balance_sheet

    change_current_assets = _total(_in_category(assets, ItemCategory.CURRENT_ASSET)) - (
        previous.current_assets if previous else 0.0)
    change_non_current_assets = _total(_in_category(assets, ItemCategory.NON_CURRENT_ASSET)) - (
        previous.non_current_assets if previous else 0.0)
    change_current_liabilities = _total(_in_category(liabilities, ItemCategory.CURRENT_LIABILITY)) - (
        previous.current_liabilities if previous else 0.0)
    change_non_current_liabilities = _total(
        _in_category(liabilities, ItemCategory.NON_CURRENT_LIABILITY)) - (
        previous.non_current_liabilities if previous else 0.0)

    operating = income_statement.net_profit - change_current_assets + change_current_liabilities
    investing = -change_non_current_assets
    financing = change_non_current_liabilities
    net_cash_flow = operating + investing + financing

    previous_cash = _cash_item(previous.asset_items) if previous else None
    beginning = previous_cash.amount if previous_cash else 0.0
    cash = _cash_item(assets)
    ending = cash.amount if cash else beginning + net_cash_flow

    return CashFlowStatement(
        operating_cash_flow=operating,
        investing_cash_flow=investing,
        financing_cash_flow=financing,
        net_cash_flow=ensure_finite(net_cash_flow, "net_cash_flow"),
        beginning_cash_balance=beginning,
        ending_cash_balance=ending,
        operating_activities=(
            CashFlowLine("Net Profit", income_statement.net_profit,
                         "Net profit from income statement"),
            CashFlowLine("Changes in Current Assets", -change_current_assets,
                         "Changes in receivables, inventory and other current assets"),
            CashFlowLine("Changes in Current Liabilities", change_current_liabilities,
                         "Changes in payables and accruals"),
        ),
        investing_activities=(
            CashFlowLine("Purchase of Non-Current Assets", -change_non_current_assets,
                         "Net investment in long-term assets"),
        ),
        financing_activities=(
            CashFlowLine("Changes in Long-term Debt", change_non_current_liabilities,
                         "Net changes in long-term loans and debt"),
        ),
    )


def calculate_balance_sheet(
    asset_items: Sequence[ItemLike],
    liability_items: Sequence[ItemLike],
    equity_items: Sequence[ItemLike],
    net_profit: float,
) -> BalanceSheet:
    """
    Balance sheet at the end of the period

    Net profit is added to the "Retained Earnings" equity item, which is
    created when missing. If equity then differs from assets minus
    liabilities by more than BALANCING_THRESHOLD, a "Balancing Adjustment"
    item closes the gap. The caller's items are never modified.
    """
    assets = _items(asset_items, "asset_items")
    liabilities = _items(liability_items, "liability_items")
    equity_lines = _items(equity_items, "equity_items")
    profit = require_number(net_profit, "net_profit")

    current_asset_items = _in_category(assets, ItemCategory.CURRENT_ASSET)
    non_current_asset_items = _in_category(assets, ItemCategory.NON_CURRENT_ASSET)
    current_liability_items = _in_category(liabilities, ItemCategory.CURRENT_LIABILITY)
    non_current_liability_items = _in_category(liabilities, ItemCategory.NON_CURRENT_LIABILITY)

    current_assets = _total(current_asset_items)
    non_current_assets = _total(non_current_asset_items)
    current_liabilities = _total(current_liability_items)
    non_current_liabilities = _total(non_current_liability_items)
    total_assets = current_assets + non_current_assets
    total_liabilities = current_liabilities + non_current_liabilities

    equity = _total(equity_lines) + profit
    for index, item in enumerate(equity_lines):
        if item.name == RETAINED_EARNINGS:
            equity_lines[index] = replace(item, amount=item.amount + profit)
            break
    else:
        equity_lines.append(FinancialItem(
            id="retained-earnings",
            name=RETAINED_EARNINGS,
            category=ItemCategory.EQUITY.value,
            amount=profit,
            description="Accumulated profits from current and previous periods",
        ))

    adjustment = (total_assets - total_liabilities) - equity
    if abs(adjustment) > BALANCING_THRESHOLD:
        logger.info("Balance sheet adjusted to close accounting equation", adjustment=adjustment)
        equity_lines.append(FinancialItem(
            id="balancing-adjustment",
            name=BALANCING_ADJUSTMENT,
            category=ItemCategory.EQUITY.value,
            amount=adjustment,
            description="Adjustment to ensure accounting equation balance",
        ))
        equity = total_assets - total_liabilities

    return BalanceSheet(
        current_assets=current_assets,
        non_current_assets=non_current_assets,
        total_assets=ensure_finite(total_assets, "total_assets"),
        current_liabilities=current_liabilities,
        non_current_liabilities=non_current_liabilities,
        total_liabilities=ensure_finite(total_liabilities, "total_liabilities"),
        equity=ensure_finite(equity, "equity"),
        asset_items=tuple(current_asset_items + non_current_asset_items),
        liability_items=tuple(current_liability_items + non_current_liability_items),
        equity_items=tuple(equity_lines),
    )


class FinancialStatementCalculator:
    """Memoized financial statements of a projection"""

    def __init__(self, cache: Optional[ResultCache] = None):
        self.cache = cache if cache is not None else ResultCache()
        self.calculation_count = 0

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
        """
        All three statements for one period

        Repeat calls with equal items, tax rate and previous balance sheet
        return the same result object.

        Args:
            projection_id: Projection the statements belong to
            tax_rate: Tax rate in percent
            revenue_items: Revenue line items
            expense_items: costOfSales and operatingExpense line items
            asset_items: currentAsset and nonCurrentAsset line items
            liability_items: currentLiability and nonCurrentLiability line items
            equity_items: Opening equity line items
            previous_balance_sheet: Balance sheet of the preceding period

        Returns:
            FinancialStatements
        """
        rate = require_non_negative(tax_rate, "tax_rate")
        revenues = _items(revenue_items, "revenue_items")
        expenses = _items(expense_items, "expense_items")
        assets = _items(asset_items, "asset_items")
        liabilities = _items(liability_items, "liability_items")
        equity_lines = _items(equity_items, "equity_items")
        if previous_balance_sheet is not None and not isinstance(previous_balance_sheet, BalanceSheet):
            raise InvalidInputError("previous_balance_sheet must be a BalanceSheet",
                                    field="previous_balance_sheet", value=previous_balance_sheet)

        key = make_key(
            "calculate_financial_statements",
            str(projection_id),
            rate,
            *([asdict(item) for item in group]
              for group in (revenues, expenses, assets, liabilities, equity_lines)),
            asdict(previous_balance_sheet) if previous_balance_sheet else None,
        )
        return self.cache.get_or_compute(
            key,
            lambda: self._calculate(projection_id, rate, revenues, expenses, assets,
                                    liabilities, equity_lines, previous_balance_sheet),
        )

    def _calculate(self, projection_id: str, rate: float, revenues: list[FinancialItem],
                   expenses: list[FinancialItem], assets: list[FinancialItem],
                   liabilities: list[FinancialItem], equity_lines: list[FinancialItem],
                   previous: Optional[BalanceSheet]) -> FinancialStatements:
        self.calculation_count += 1

        income = calculate_income_statement(revenues, expenses, rate)
        statements = FinancialStatements(
            income_statement=income,
            cash_flow_statement=calculate_cash_flow_statement(income, assets, liabilities, previous),
            balance_sheet=calculate_balance_sheet(assets, liabilities, equity_lines, income.net_profit),
        )

        logger.info(
            "Financial statements calculated",
            projection_id=projection_id,
            net_profit=income.net_profit,
            net_cash_flow=statements.cash_flow_statement.net_cash_flow,
            total_assets=statements.balance_sheet.total_assets,
        )
        return statements
