"""Suggested transaction categories.

Categories are free-form; these lists only seed prompts and sample data.
"""

from finboard.domain.entities import TransactionType

INCOME_CATEGORIES = (
    "Client Payment",
    "Insurance Reimbursement",
    "Government Grant",
    "Donation",
    "Interest",
    "Other Income",
)

EXPENSE_CATEGORIES = (
    "Payroll",
    "Supplies",
    "Rent",
    "Utilities",
    "Insurance",
    "Office Equipment",
    "Vehicle Expenses",
    "Marketing",
    "Training",
    "Legal & Professional",
    "Other Expenses",
)


def suggested_categories(transaction_type: "str | TransactionType") -> tuple[str, ...]:
    """Return the suggested categories for a transaction type."""
    if TransactionType.parse(transaction_type) is TransactionType.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES
