"""Tests for income, cash flow and balance sheet statements"""

import pytest
from structlog.testing import capture_logs

from projection_engine.cache import ResultCache
from projection_engine.calculations.statements import (
    FinancialStatementCalculator,
    calculate_balance_sheet,
    calculate_cash_flow_statement,
    calculate_income_statement,
)
from projection_engine.errors import InvalidInputError
from projection_engine.models.statements import BalanceSheet, FinancialItem, ItemCategory

REVENUE = [{"id": "r1", "name": "Sales", "category": "revenue", "amount": 100000}]
EXPENSES = [
    {"id": "x1", "name": "Materials", "category": "costOfSales", "amount": 40000},
    {"id": "x2", "name": "Salaries", "category": "operatingExpense", "amount": 30000},
    {"id": "x3", "name": "Misfiled", "category": "equity", "amount": 999},
]
ASSETS = [
    {"id": "a1", "name": "Cash", "category": "currentAsset", "amount": 5000},
    {"id": "a2", "name": "Receivables", "category": "currentAsset", "amount": 3000},
    {"id": "a3", "name": "Equipment", "category": "nonCurrentAsset", "amount": 20000},
]
LIABILITIES = [
    {"id": "l1", "name": "Payables", "category": "currentLiability", "amount": 2000},
    {"id": "l2", "name": "Bank Loan", "category": "nonCurrentLiability", "amount": 15000},
]


def _previous_sheet():
    return BalanceSheet(
        current_assets=6000,
        non_current_assets=20000,
        total_assets=26000,
        current_liabilities=1000,
        non_current_liabilities=15000,
        total_liabilities=16000,
        equity=10000,
        asset_items=(FinancialItem("a0", "cash", ItemCategory.CURRENT_ASSET.value, 4000),),
    )


class TestIncomeStatement:
    """Test calculate_income_statement"""

    def test_profitable_period(self):
        income = calculate_income_statement(REVENUE, EXPENSES, 25)

        assert income.revenue == pytest.approx(100000)
        assert income.cost_of_sales == pytest.approx(40000)
        assert income.gross_profit == pytest.approx(60000)
        assert income.operating_expenses == pytest.approx(30000)
        assert income.operating_profit == pytest.approx(30000)
        assert income.taxes == pytest.approx(7500)
        assert income.net_profit == pytest.approx(22500)
        assert income.gross_margin == pytest.approx(60)

    def test_uncategorized_expenses_are_ignored(self):
        income = calculate_income_statement(REVENUE, EXPENSES, 25)
        assert [item.id for item in income.expense_items] == ["x1", "x2"]

    def test_no_tax_on_operating_loss(self):
        revenue = [{"id": "r1", "name": "Sales", "category": "revenue", "amount": 10000}]
        income = calculate_income_statement(revenue, EXPENSES, 25)

        assert income.operating_profit == pytest.approx(-60000)
        assert income.taxes == 0
        assert income.net_profit == pytest.approx(-60000)

    def test_gross_margin_without_revenue(self):
        assert calculate_income_statement([], [], 20).gross_margin is None

    def test_negative_tax_rate_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_income_statement(REVENUE, EXPENSES, -5)
        assert exc_info.value.field == "tax_rate"

    def test_non_numeric_amount_rejected(self):
        revenue = [{"id": "r1", "name": "Sales", "category": "revenue", "amount": "abc"}]
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_income_statement(revenue, [], 20)
        assert exc_info.value.field == "revenue_items.amount"


class TestCashFlowStatement:
    """Test calculate_cash_flow_statement"""

    def setup_method(self):
        self.income = calculate_income_statement(REVENUE, EXPENSES, 25)

    def test_first_period_measures_against_zero(self):
        cash_flow = calculate_cash_flow_statement(self.income, ASSETS, LIABILITIES)

        # 22500 - 8000 + 2000
        assert cash_flow.operating_cash_flow == pytest.approx(16500)
        assert cash_flow.investing_cash_flow == pytest.approx(-20000)
        assert cash_flow.financing_cash_flow == pytest.approx(15000)
        assert cash_flow.net_cash_flow == pytest.approx(11500)
        assert cash_flow.beginning_cash_balance == 0
        assert cash_flow.ending_cash_balance == pytest.approx(5000)

    def test_detail_lines(self):
        cash_flow = calculate_cash_flow_statement(self.income, ASSETS, LIABILITIES)

        assert [line.name for line in cash_flow.operating_activities] == [
            "Net Profit", "Changes in Current Assets", "Changes in Current Liabilities",
        ]
        assert cash_flow.operating_activities[1].amount == pytest.approx(-8000)
        assert cash_flow.investing_activities[0].name == "Purchase of Non-Current Assets"
        assert cash_flow.financing_activities[0].amount == pytest.approx(15000)

    def test_changes_against_previous_balance_sheet(self):
        income = calculate_income_statement(
            [{"id": "r1", "name": "Sales", "category": "revenue", "amount": 1000}], [], 0)
        cash_flow = calculate_cash_flow_statement(income, ASSETS, LIABILITIES, _previous_sheet())

        # 1000 - (8000 - 6000) + (2000 - 1000)
        assert cash_flow.operating_cash_flow == pytest.approx(0)
        assert cash_flow.investing_cash_flow == pytest.approx(0)
        assert cash_flow.financing_cash_flow == pytest.approx(0)
        assert cash_flow.beginning_cash_balance == pytest.approx(4000)
        assert cash_flow.ending_cash_balance == pytest.approx(5000)

    def test_ending_balance_without_cash_item(self):
        assets = [item for item in ASSETS if item["name"] != "Cash"]
        cash_flow = calculate_cash_flow_statement(self.income, assets, LIABILITIES, _previous_sheet())

        assert cash_flow.ending_cash_balance == pytest.approx(
            cash_flow.beginning_cash_balance + cash_flow.net_cash_flow)

    def test_zero_cash_item_is_respected(self):
        assets = [{"id": "a1", "name": "Cash", "category": "currentAsset", "amount": 0}]
        cash_flow = calculate_cash_flow_statement(self.income, assets, [], _previous_sheet())
        assert cash_flow.ending_cash_balance == 0


class TestBalanceSheet:
    """Test calculate_balance_sheet"""

    def test_retained_earnings_created(self):
        equity = [{"id": "e1", "name": "Share Capital", "category": "equity", "amount": 5000}]
        sheet = calculate_balance_sheet(ASSETS, LIABILITIES, equity, 6000)

        assert sheet.total_assets == pytest.approx(28000)
        assert sheet.total_liabilities == pytest.approx(17000)
        assert sheet.equity == pytest.approx(11000)
        assert sheet.is_balanced()
        retained = sheet.equity_items[-1]
        assert retained.id == "retained-earnings"
        assert retained.name == "Retained Earnings"
        assert retained.amount == pytest.approx(6000)

    def test_existing_retained_earnings_increased(self):
        retained = FinancialItem("e2", "Retained Earnings", ItemCategory.EQUITY.value, 1000)
        equity = [FinancialItem("e1", "Share Capital", ItemCategory.EQUITY.value, 4000), retained]
        sheet = calculate_balance_sheet(ASSETS, LIABILITIES, equity, 6000)

        assert [item.id for item in sheet.equity_items] == ["e1", "e2"]
        assert sheet.equity_items[1].amount == pytest.approx(7000)
        assert sheet.is_balanced()

    def test_inputs_not_modified(self):
        retained = FinancialItem("e2", "Retained Earnings", ItemCategory.EQUITY.value, 1000)
        equity = [retained]
        mapping_equity = [{"id": "e1", "name": "Share Capital", "category": "equity", "amount": 5000}]

        calculate_balance_sheet(ASSETS, LIABILITIES, equity, 6000)
        calculate_balance_sheet(ASSETS, LIABILITIES, mapping_equity, 6000)

        assert equity == [retained]
        assert retained.amount == 1000
        assert len(mapping_equity) == 1
        assert mapping_equity[0]["amount"] == 5000

    def test_balancing_adjustment(self):
        equity = [{"id": "e1", "name": "Share Capital", "category": "equity", "amount": 1000}]
        with capture_logs() as logs:
            sheet = calculate_balance_sheet(ASSETS, LIABILITIES, equity, 0)

        adjustment = sheet.equity_items[-1]
        assert adjustment.id == "balancing-adjustment"
        assert adjustment.amount == pytest.approx(10000)
        assert sheet.equity == pytest.approx(11000)
        assert sheet.is_balanced()
        assert any(log["event"] == "Balance sheet adjusted to close accounting equation" for log in logs)

    def test_small_gap_left_alone(self):
        equity = [{"id": "e1", "name": "Share Capital", "category": "equity", "amount": 4999.5}]
        sheet = calculate_balance_sheet(ASSETS, LIABILITIES, equity, 6000)

        assert sheet.equity == pytest.approx(10999.5)
        assert all(item.id != "balancing-adjustment" for item in sheet.equity_items)


class TestFinancialStatementCalculator:
    """Test the memoized statement calculation"""

    def setup_method(self):
        self.cache = ResultCache()
        self.calculator = FinancialStatementCalculator(self.cache)

    def _calculate(self, tax_rate=25, previous=None, revenue=REVENUE):
        return self.calculator.calculate_financial_statements(
            "proj-1", tax_rate, revenue, EXPENSES, ASSETS, LIABILITIES,
            [{"id": "e1", "name": "Share Capital", "category": "equity", "amount": 5000}],
            previous,
        )

    def test_statements_are_linked(self):
        statements = self._calculate()

        net_profit = statements.income_statement.net_profit
        assert statements.cash_flow_statement.operating_activities[0].amount == net_profit
        retained = next(item for item in statements.balance_sheet.equity_items
                        if item.id == "retained-earnings")
        assert retained.amount == pytest.approx(net_profit)

    def test_repeat_call_returns_same_object(self):
        first = self._calculate()
        items = [FinancialItem("r1", "Sales", "revenue", 100000.0)]
        second = self._calculate(revenue=items)

        assert first is second
        assert self.calculator.calculation_count == 1
        assert self.cache.hits == 1

    def test_tax_rate_is_part_of_key(self):
        first = self._calculate(tax_rate=25)
        second = self._calculate(tax_rate=30)

        assert first is not second
        assert second.income_statement.taxes > first.income_statement.taxes

    def test_previous_balance_sheet_is_part_of_key(self):
        first = self._calculate()
        second = self._calculate(previous=_previous_sheet())

        assert first is not second
        assert second.cash_flow_statement.beginning_cash_balance == pytest.approx(4000)
        assert self.calculator.calculation_count == 2

    def test_previous_balance_sheet_type_checked(self):
        with pytest.raises(InvalidInputError) as exc_info:
            self._calculate(previous={"current_assets": 1})
        assert exc_info.value.field == "previous_balance_sheet"
        assert len(self.cache) == 0

    def test_logs_calculation(self):
        with capture_logs() as logs:
            self._calculate()
            self._calculate()

        calculated = [log for log in logs if log["event"] == "Financial statements calculated"]
        assert len(calculated) == 1
        assert calculated[0]["projection_id"] == "proj-1"
        assert calculated[0]["subsystem"] == "calculations"
