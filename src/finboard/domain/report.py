"""Financial report domain service."""

import csv
from collections import defaultdict
from datetime import date
from typing import Optional, TextIO

from finboard.database.base import Database
from finboard.domain.dashboard import totals_by_type
from finboard.domain.entities import TransactionReport, TransactionType
from finboard.domain.errors import ValidationError
from finboard.domain.transaction import parse_type_filter
from finboard.utils.money import from_minor_units, to_minor_units

CSV_COLUMNS = ("Date", "Type", "Category", "Description", "Amount")


class ReportService:
    """Service for building and exporting transaction reports."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_report(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type_filter: "Optional[str | TransactionType]" = None,
    ) -> TransactionReport:
        """Build a report for a date range and optional type filter.

        Category totals cover every transaction in the report regardless of
        type and are ordered largest first.

        Raises:
            ValidationError: If the start date is after the end date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError("Start date must be on or before end date")

        transaction_type = parse_type_filter(type_filter)
        transactions = self.db.list_transactions(
            start_date=start_date, end_date=end_date, type=transaction_type
        )

        income, expense = totals_by_type(transactions)
        by_category: dict[str, int] = defaultdict(int)
        for txn in transactions:
            by_category[txn.category] += to_minor_units(txn.amount)
        category_totals = {
            category: from_minor_units(total)
            for category, total in sorted(by_category.items(), key=lambda item: (-item[1], item[0]))
        }

        return TransactionReport(
            start_date=start_date,
            end_date=end_date,
            type_filter=transaction_type,
            transactions=tuple(transactions),
            total_income=from_minor_units(income),
            total_expense=from_minor_units(expense),
            net_profit=from_minor_units(income - expense),
            category_totals=category_totals,
        )

    def export_csv(self, report: TransactionReport, stream: TextIO) -> int:
        """Write report transactions as CSV rows.

        Returns:
            Number of transaction rows written
        """
        writer = csv.writer(stream)
        writer.writerow(CSV_COLUMNS)
        for txn in report.transactions:
            writer.writerow(
                [
                    txn.date.isoformat(),
                    txn.type.value,
                    txn.category,
                    txn.description or "",
                    f"{txn.amount:.2f}",
                ]
            )
        return len(report.transactions)
