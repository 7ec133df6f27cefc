"""Tests for dashboard aggregation."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from finboard.domain.dashboard import DashboardService, select_recent, totals_by_type
from finboard.domain.entities import PeriodKey, Transaction, TransactionType
from finboard.domain.errors import ValidationError
from finboard.domain.periods import resolve_period


def _txn(txn_id, txn_date, txn_type, category, amount, description=None):
    return Transaction(
        id=txn_id,
        date=txn_date,
        type=TransactionType(txn_type),
        category=category,
        amount=Decimal(amount),
        description=description,
        created_at=datetime(2025, 1, 1),
    )


@pytest.fixture
def service():
    """DashboardService whose pure helpers need no database."""
    return DashboardService(db=None)


class TestSummarize:
    """Tests for period totals and changes."""

    def test_net_profit_is_revenue_minus_expenses(self, service):
        current = [
            _txn(1, date(2025, 1, 5), "Income", "Client Payment", "1000.10"),
            _txn(2, date(2025, 1, 6), "Expense", "Rent", "400.05"),
            _txn(3, date(2025, 1, 7), "Expense", "Supplies", "0.05"),
        ]
        summary = service.summarize(current, [], resolve_period("1m", today=date(2025, 1, 31)))
        assert summary.total_revenue == Decimal("1000.10")
        assert summary.total_expenses == Decimal("400.10")
        assert summary.net_profit == summary.total_revenue - summary.total_expenses

    def test_no_activity_is_zero_change(self, service):
        summary = service.summarize([], [], resolve_period("3m", today=date(2025, 1, 31)))
        assert summary.total_revenue == Decimal("0.00")
        assert summary.revenue_change == Decimal(0)
        assert summary.expense_change == Decimal(0)
        assert summary.net_profit_change == Decimal(0)

    def test_change_from_empty_previous_is_not_applicable(self, service):
        current = [_txn(1, date(2025, 1, 5), "Income", "Client Payment", "500")]
        summary = service.summarize(current, [], resolve_period("1m", today=date(2025, 1, 31)))
        assert summary.total_revenue == Decimal("500.00")
        assert summary.revenue_change is None
        assert summary.expense_change == Decimal(0)

    def test_changes_against_previous(self, service):
        current = [
            _txn(1, date(2025, 1, 5), "Income", "Client Payment", "150"),
            _txn(2, date(2025, 1, 6), "Expense", "Rent", "50"),
        ]
        previous = [
            _txn(3, date(2024, 12, 5), "Income", "Client Payment", "100"),
            _txn(4, date(2024, 12, 6), "Expense", "Rent", "100"),
        ]
        summary = service.summarize(current, previous, resolve_period("1m", today=date(2025, 1, 31)))
        assert summary.revenue_change == Decimal("50.0")
        assert summary.expense_change == Decimal("-50.0")
        # previous net is zero, current net is positive
        assert summary.net_profit_change is None

    def test_all_period_has_no_changes(self, service):
        current = [_txn(1, date(2020, 1, 5), "Income", "Client Payment", "100")]
        summary = service.summarize(current, [], resolve_period("all", today=date(2025, 1, 31)))
        assert summary.revenue_change is None
        assert summary.expense_change is None
        assert summary.net_profit_change is None


class TestExpenseBreakdown:
    """Tests for the per-category expense breakdown."""

    def test_sum_matches_total_expenses(self, service):
        transactions = [
            _txn(1, date(2025, 1, 1), "Expense", "Rent", "400"),
            _txn(2, date(2025, 1, 2), "Expense", "Supplies", "20.25"),
            _txn(3, date(2025, 1, 3), "Expense", "Supplies", "14.75"),
            _txn(4, date(2025, 1, 4), "Income", "Client Payment", "999"),
        ]
        breakdown = service.expense_breakdown(transactions)
        _, expenses = totals_by_type(transactions)
        assert sum(item.amount for item in breakdown) * 100 == expenses
        assert [item.category for item in breakdown] == ["Rent", "Supplies"]
        assert breakdown[1].amount == Decimal("35.00")

    def test_ties_are_ordered_by_name(self, service):
        transactions = [
            _txn(1, date(2025, 1, 1), "Expense", "Utilities", "10"),
            _txn(2, date(2025, 1, 2), "Expense", "Insurance", "10"),
        ]
        assert [item.category for item in service.expense_breakdown(transactions)] == [
            "Insurance",
            "Utilities",
        ]

    def test_income_only_is_empty(self, service):
        transactions = [_txn(1, date(2025, 1, 1), "Income", "Client Payment", "10")]
        assert service.expense_breakdown(transactions) == []


class TestMonthlySeries:
    """Tests for the six-month revenue vs expenses series."""

    def test_year_boundary_sorted_chronologically(self, service):
        transactions = [
            _txn(1, date(2025, 1, 5), "Income", "Client Payment", "300"),
            _txn(2, date(2024, 12, 5), "Expense", "Rent", "200"),
            _txn(3, date(2024, 11, 5), "Income", "Client Payment", "100"),
        ]
        series = service.monthly_series(transactions, today=date(2025, 1, 15))
        assert [month.label for month in series] == [
            "Aug 2024",
            "Sep 2024",
            "Oct 2024",
            "Nov 2024",
            "Dec 2024",
            "Jan 2025",
        ]
        assert series[3].revenue == Decimal("100.00")
        assert series[4].expenses == Decimal("200.00")
        assert series[5].revenue == Decimal("300.00")

    def test_empty_months_are_zero(self, service):
        series = service.monthly_series([], today=date(2025, 6, 1))
        assert len(series) == 6
        assert all(m.revenue == 0 and m.expenses == 0 for m in series)

    def test_excludes_out_of_range(self, service):
        transactions = [
            _txn(1, date(2024, 7, 31), "Income", "Client Payment", "100"),
            _txn(2, date(2025, 1, 20), "Income", "Client Payment", "100"),
        ]
        series = service.monthly_series(transactions, today=date(2025, 1, 15))
        assert sum(m.revenue for m in series) == Decimal("0.00")


class TestSelectRecent:
    """Tests for recent activity."""

    def test_at_most_five_newest_first(self):
        transactions = [
            _txn(i, date(2025, 1, i), "Expense", "Supplies", "1") for i in range(1, 9)
        ]
        recent = select_recent(transactions)
        assert len(recent) == 5
        assert [r.id for r in recent] == [8, 7, 6, 5, 4]
        dates = [r.date for r in recent]
        assert dates == sorted(dates, reverse=True)

    def test_name_falls_back_to_category(self):
        recent = select_recent(
            [
                _txn(1, date(2025, 1, 1), "Income", "Client Payment", "5", "Invoice 7"),
                _txn(2, date(2025, 1, 2), "Expense", "Rent", "5"),
            ]
        )
        assert recent[0].name == "Rent"
        assert recent[0].type == "expense"
        assert recent[1].name == "Invoice 7"
        assert recent[1].type == "income"


class TestBuildDashboard:
    """Tests for DashboardService.build_dashboard against a database."""

    def test_year_to_date_scenario(self, dashboard_service, add_transaction):
        add_transaction(date(2025, 1, 15), "Income", "Client Payment", "1000")
        add_transaction(date(2025, 2, 10), "Expense", "Rent", "400")

        data = dashboard_service.build_dashboard("ytd", today=date(2025, 3, 1))

        assert data.period.key is PeriodKey.YEAR_TO_DATE
        assert data.summary.total_revenue == Decimal("1000.00")
        assert data.summary.total_expenses == Decimal("400.00")
        assert data.summary.net_profit == Decimal("600.00")
        assert data.summary.revenue_change is None
        assert [(i.category, i.amount) for i in data.expense_breakdown] == [
            ("Rent", Decimal("400.00"))
        ]
        assert [r.name for r in data.recent_transactions] == ["Rent", "Client Payment"]

    def test_previous_window_drives_change(self, dashboard_service, add_transaction):
        add_transaction(date(2025, 2, 20), "Income", "Client Payment", "150")
        add_transaction(date(2025, 1, 20), "Income", "Client Payment", "100")

        data = dashboard_service.build_dashboard("1m", today=date(2025, 3, 1))

        assert data.summary.total_revenue == Decimal("150.00")
        assert data.summary.revenue_change == Decimal("50.0")

    def test_default_period_is_six_months(self, dashboard_service):
        data = dashboard_service.build_dashboard(today=date(2025, 3, 1))
        assert data.period.key is PeriodKey.SIX_MONTHS
        assert data.recent_transactions == ()

    def test_unknown_period(self, dashboard_service):
        with pytest.raises(ValidationError):
            dashboard_service.build_dashboard("weekly", today=date(2025, 3, 1))
