"""Tests for financial reports and CSV export."""

import csv
import io
from datetime import date
from decimal import Decimal

import pytest

from finboard.domain.entities import TransactionType
from finboard.domain.errors import ValidationError
from finboard.domain.report import CSV_COLUMNS, ReportService


@pytest.fixture
def report_service(temp_db):
    return ReportService(temp_db)


def test_report_totals(report_service, sample_transactions):
    report = report_service.build_report(start_date=date(2025, 1, 1), end_date=date(2025, 1, 31))

    assert len(report.transactions) == 3
    assert report.total_income == Decimal("1000.00")
    assert report.total_expense == Decimal("435.50")
    assert report.net_profit == Decimal("564.50")
    assert list(report.category_totals) == ["Client Payment", "Rent", "Supplies"]
    assert report.category_totals["Supplies"] == Decimal("35.50")


def test_report_type_filter(report_service, sample_transactions):
    report = report_service.build_report(type_filter="Expense")

    assert report.type_filter is TransactionType.EXPENSE
    assert report.total_income == Decimal("0.00")
    assert report.total_expense == Decimal("435.50")
    assert report.net_profit == Decimal("-435.50")


def test_report_all_type_means_no_filter(report_service, sample_transactions):
    report = report_service.build_report(type_filter="All")
    assert report.type_filter is None
    assert len(report.transactions) == 3


def test_report_empty_range(report_service, sample_transactions):
    report = report_service.build_report(start_date=date(2025, 2, 1), end_date=date(2025, 2, 28))
    assert report.transactions == ()
    assert report.net_profit == Decimal("0.00")
    assert report.category_totals == {}


def test_report_rejects_reversed_range(report_service):
    with pytest.raises(ValidationError, match="Start date"):
        report_service.build_report(start_date=date(2025, 2, 1), end_date=date(2025, 1, 1))


def test_export_csv(report_service, sample_transactions):
    report = report_service.build_report()
    buffer = io.StringIO()

    rows = report_service.export_csv(report, buffer)

    assert rows == 3
    lines = list(csv.reader(io.StringIO(buffer.getvalue())))
    assert tuple(lines[0]) == CSV_COLUMNS
    assert lines[1] == ["2025-01-22", "Expense", "Supplies", "Printer paper", "35.50"]
    assert lines[2] == ["2025-01-20", "Expense", "Rent", "", "400.00"]
    assert lines[3] == ["2025-01-15", "Income", "Client Payment", "Invoice 1001", "1000.00"]


def test_export_csv_quotes_commas(report_service, add_transaction):
    add_transaction(date(2025, 3, 1), "Expense", "Legal & Professional Fees", "70", "Review, filing")
    buffer = io.StringIO()

    report_service.export_csv(report_service.build_report(), buffer)

    assert '"Review, filing"' in buffer.getvalue()
