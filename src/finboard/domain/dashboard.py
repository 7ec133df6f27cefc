"""Dashboard aggregation domain service."""

import logging
from collections import defaultdict
from datetime import date
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from finboard.database.base import Database
from finboard.domain.entities import (
    DashboardData,
    ExpenseBreakdownItem,
    MonthlyTotals,
    PeriodKey,
    PeriodRange,
    RecentTransaction,
    SummaryData,
    Transaction,
    TransactionType,
)
from finboard.domain.periods import DEFAULT_PERIOD, in_window, percentage_change, resolve_period
from finboard.utils.money import from_minor_units, to_minor_units

logger = logging.getLogger(__name__)

MONTHLY_SERIES_LENGTH = 6
RECENT_ACTIVITY_LIMIT = 5


def totals_by_type(transactions: Sequence[Transaction]) -> tuple[int, int]:
    """Sum revenue and expenses in minor units."""
    revenue = 0
    expenses = 0
    for txn in transactions:
        if txn.type is TransactionType.INCOME:
            revenue += to_minor_units(txn.amount)
        else:
            expenses += to_minor_units(txn.amount)
    return revenue, expenses


def select_recent(
    transactions: Sequence[Transaction], limit: int = RECENT_ACTIVITY_LIMIT
) -> list[RecentTransaction]:
    """Project the most recent transactions for display, newest first.

    The name falls back to the category when there is no description.
    """
    newest_first = sorted(transactions, key=lambda txn: (txn.date, txn.id), reverse=True)
    return [
        RecentTransaction(
            id=txn.id,
            name=txn.description or txn.category,
            date=txn.date,
            amount=txn.amount,
            type=txn.type.value.lower(),
        )
        for txn in newest_first[:limit]
    ]


class DashboardService:
    """Service for deriving dashboard summaries and chart series."""

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db

    def fetch_transactions(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Transaction]:
        """Fetch transactions, newest first, optionally bounded by an inclusive range."""
        return self.db.list_transactions(start_date=start_date, end_date=end_date)

    def build_dashboard(
        self,
        period_key: "str | PeriodKey" = DEFAULT_PERIOD,
        today: Optional[date] = None,
    ) -> DashboardData:
        """Build all dashboard data for a period.

        Raises:
            ValidationError: If the period key is unknown
            StoreError: If transactions cannot be fetched
        """
        today = today or date.today()
        period = resolve_period(period_key, today=today)
        transactions = self.fetch_transactions()
        logger.debug(
            "Building dashboard for period %s from %d transactions",
            period.key.value,
            len(transactions),
        )

        current, previous = self.partition(transactions, period)
        return DashboardData(
            period=period,
            summary=self.summarize(current, previous, period),
            expense_breakdown=tuple(self.expense_breakdown(current)),
            monthly_series=tuple(self.monthly_series(transactions, today)),
            recent_transactions=tuple(select_recent(transactions)),
        )

    def partition(
        self, transactions: Sequence[Transaction], period: PeriodRange
    ) -> tuple[list[Transaction], list[Transaction]]:
        """Split transactions into the current and previous period windows."""
        current = [txn for txn in transactions if in_window(txn.date, period.start, period.end)]
        if not period.has_comparison:
            return current, []
        previous = [
            txn for txn in transactions if in_window(txn.date, period.prev_start, period.prev_end)
        ]
        return current, previous

    def summarize(
        self,
        current: Sequence[Transaction],
        previous: Sequence[Transaction],
        period: PeriodRange,
    ) -> SummaryData:
        """Compute totals and changes against the previous period."""
        revenue, expenses = totals_by_type(current)
        net_profit = revenue - expenses

        if period.has_comparison:
            prev_revenue, prev_expenses = totals_by_type(previous)
            revenue_change = percentage_change(revenue, prev_revenue)
            expense_change = percentage_change(expenses, prev_expenses)
            net_profit_change = percentage_change(net_profit, prev_revenue - prev_expenses)
        else:
            revenue_change = expense_change = net_profit_change = None

        return SummaryData(
            total_revenue=from_minor_units(revenue),
            total_expenses=from_minor_units(expenses),
            net_profit=from_minor_units(net_profit),
            revenue_change=revenue_change,
            expense_change=expense_change,
            net_profit_change=net_profit_change,
        )

    def expense_breakdown(self, transactions: Sequence[Transaction]) -> list[ExpenseBreakdownItem]:
        """Sum expenses per category, largest first. Zero totals are left out."""
        by_category: dict[str, int] = defaultdict(int)
        for txn in transactions:
            if txn.type is TransactionType.EXPENSE:
                by_category[txn.category] += to_minor_units(txn.amount)

        ordered = sorted(
            ((category, total) for category, total in by_category.items() if total != 0),
            key=lambda item: (-item[1], item[0]),
        )
        return [
            ExpenseBreakdownItem(category=category, amount=from_minor_units(total))
            for category, total in ordered
        ]

    def monthly_series(
        self,
        transactions: Sequence[Transaction],
        today: Optional[date] = None,
        months: int = MONTHLY_SERIES_LENGTH,
    ) -> list[MonthlyTotals]:
        """Revenue and expenses per calendar month for the trailing months.

        Covers the month containing today and the months - 1 before it,
        every month present even when empty, in calendar order.
        """
        today = today or date.today()
        first_month = today.replace(day=1) - relativedelta(months=months - 1)
        buckets: dict[tuple[int, int], list[int]] = {}
        for offset in range(months):
            month = first_month + relativedelta(months=offset)
            buckets[(month.year, month.month)] = [0, 0]

        for txn in transactions:
            if not in_window(txn.date, first_month, today):
                continue
            bucket = buckets[(txn.date.year, txn.date.month)]
            if txn.type is TransactionType.INCOME:
                bucket[0] += to_minor_units(txn.amount)
            else:
                bucket[1] += to_minor_units(txn.amount)

        return [
            MonthlyTotals(
                year=year,
                month=month,
                revenue=from_minor_units(revenue),
                expenses=from_minor_units(expenses),
            )
            for (year, month), (revenue, expenses) in sorted(buckets.items())
        ]
