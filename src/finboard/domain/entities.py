"""Domain model entities for finboard.

These are pure data classes representing business concepts, independent of
database schema. Derived reporting structures (summaries, breakdowns, chart
series) live here too; they are recomputed per request and never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from finboard.domain.errors import ValidationError


class TransactionType(str, Enum):
    """Direction of a transaction. Amounts are never negative."""

    INCOME = "Income"
    EXPENSE = "Expense"

    @classmethod
    def parse(cls, value: "str | TransactionType") -> "TransactionType":
        """Parse a transaction type, ignoring case."""
        if isinstance(value, TransactionType):
            return value
        normalized = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        raise ValidationError(
            f"Invalid transaction type '{value}'. Expected one of: Income, Expense"
        )


class Role(str, Enum):
    """User role. The only place role strings are interpreted is normalize()."""

    ADMIN = "Admin"
    STANDARD = "Standard User"

    @classmethod
    def normalize(cls, value: "str | Role") -> "Role":
        """Map any accepted spelling of a role onto the enum."""
        if isinstance(value, Role):
            return value
        normalized = " ".join((value or "").strip().lower().split())
        if normalized == "admin":
            return cls.ADMIN
        if normalized in ("standard user", "standard", "user"):
            return cls.STANDARD
        raise ValidationError(
            f"Invalid role '{value}'. Expected one of: Admin, Standard User"
        )


class EventType(str, Enum):
    """Kind of mutation recorded in the audit log."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Outcome(str, Enum):
    """Outcome of an audited operation."""

    SUCCESS = "success"
    FAILURE = "failure"


class PeriodKey(str, Enum):
    """Symbolic dashboard period."""

    ONE_MONTH = "1m"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    YEAR_TO_DATE = "ytd"
    ALL = "all"

    @classmethod
    def parse(cls, value: "str | PeriodKey") -> "PeriodKey":
        if isinstance(value, PeriodKey):
            return value
        normalized = (value or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValidationError(
            f"Unknown period: '{value}'. Supported periods: 1m, 3m, 6m, ytd, all"
        )


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    date: date
    type: TransactionType
    category: str
    amount: Decimal
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class User:
    """Application user domain entity."""

    id: int
    email: str
    display_name: Optional[str]
    role: Role
    created_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class Actor:
    """Identity an audit entry is attributed to."""

    id: Optional[int]
    display_name: str


@dataclass(frozen=True)
class AuditLogEntry:
    """Audit log domain entity. Snapshots are stored as JSON text."""

    id: int
    display_name: str
    event_type: EventType
    resource: str
    resource_id: Optional[str]
    previous_state: Optional[str]
    new_state: Optional[str]
    outcome: Outcome
    timestamp: datetime


@dataclass(frozen=True)
class AuditLogPage:
    """One page of audit log entries."""

    entries: tuple[AuditLogEntry, ...]
    total: int
    page: int
    page_size: int


@dataclass(frozen=True)
class TransactionPage:
    """One page of a filtered transaction listing."""

    transactions: tuple[Transaction, ...]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size


@dataclass(frozen=True)
class PeriodRange:
    """Inclusive current and comparison date windows for a period key.

    A start of None means the window has no lower bound. Previous bounds are
    None when the period has no comparison window.
    """

    key: PeriodKey
    start: Optional[date]
    end: date
    prev_start: Optional[date] = None
    prev_end: Optional[date] = None

    @property
    def has_comparison(self) -> bool:
        return self.prev_start is not None and self.prev_end is not None


@dataclass(frozen=True)
class SummaryData:
    """Period totals and percentage changes against the previous period."""

    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    revenue_change: Optional[Decimal]
    expense_change: Optional[Decimal]
    net_profit_change: Optional[Decimal]


@dataclass(frozen=True)
class ExpenseBreakdownItem:
    """Summed expense amount for one category."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class MonthlyTotals:
    """Revenue and expense totals for one calendar month."""

    year: int
    month: int
    revenue: Decimal
    expenses: Decimal

    @property
    def label(self) -> str:
        return date(self.year, self.month, 1).strftime("%b %Y")


@dataclass(frozen=True)
class RecentTransaction:
    """Display projection of a recent transaction."""

    id: int
    name: str
    date: date
    amount: Decimal
    type: str


@dataclass(frozen=True)
class DashboardData:
    """Everything the dashboard renders for one period."""

    period: PeriodRange
    summary: SummaryData
    expense_breakdown: tuple[ExpenseBreakdownItem, ...]
    monthly_series: tuple[MonthlyTotals, ...]
    recent_transactions: tuple[RecentTransaction, ...]


@dataclass(frozen=True)
class TransactionReport:
    """Filtered transactions with income, expense and category totals."""

    start_date: Optional[date]
    end_date: Optional[date]
    type_filter: Optional[TransactionType]
    transactions: tuple[Transaction, ...]
    total_income: Decimal
    total_expense: Decimal
    net_profit: Decimal
    category_totals: dict[str, Decimal] = field(default_factory=dict)
