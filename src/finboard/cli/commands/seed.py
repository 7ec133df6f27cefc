"""Seed the database with sample business transactions."""

from datetime import date
from decimal import Decimal

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.errors import DomainError
from finboard.domain.transaction import TransactionService

# (type, category, amount, description), all dated SEED_DATE
SAMPLE_TRANSACTIONS = [
    ("Income", "Client Service Revenue", "380000", "Revenue from client services"),
    ("Income", "Cash Client Revenue", "21000", "Cash payments from clients"),
    ("Expense", "Caregivers Salaries & Wages", "269000", "Salaries and wages for caregivers"),
    ("Expense", "Payroll Taxes & Benefits", "16000", "Payroll taxes and employee benefits"),
    ("Expense", "Payroll Fees", "3719.82", "Fees for payroll processing"),
    ("Expense", "Transportation Expenses", "1200", "Transportation costs for services"),
    ("Expense", "Insurance", "9440", "Liability, bond, and workers compensation insurance"),
    ("Expense", "Office Rent & Utilities", "3700", "Office rent and utility expenses"),
    ("Expense", "Administrative Staff Salaries", "6500", "Salaries for administrative staff"),
    ("Expense", "Marketing & Advertising", "9200", "Marketing, advertising, and web hosting costs"),
    ("Expense", "Office Supplies & Software", "1800", "Office supplies and software subscriptions"),
    ("Expense", "Legal & Professional Fees", "7000", "Legal and professional services fees"),
    ("Expense", "Training & Development", "3500", "Staff training and development costs"),
    ("Expense", "Bonus & Gifts", "3600", "Bonuses and gifts for staff"),
    ("Expense", "Miscellaneous Expenses", "2000", "Miscellaneous operating expenses"),
    ("Expense", "Loan Interest", "2383.67", "Interest on loans"),
    ("Expense", "Car Payment & Insurance", "10741.32", "Car payments and insurance costs"),
]

SEED_DATE = date(2024, 12, 31)


@click.command("seed")
@click.option("--force", is_flag=True, help="Seed even if transactions already exist")
@click.pass_context
def seed(ctx, force: bool):
    """Load a sample year-end data set for a small care business."""
    service = TransactionService(ctx.obj["db"], ctx.obj.get("actor_provider"))

    try:
        existing = service.list_transactions()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if existing and not force:
        click.echo(
            f"Database already has {len(existing)} transaction(s). Use --force to seed anyway.",
            err=True,
        )
        ctx.exit(1)

    created = 0
    for txn_type, category, amount, description in SAMPLE_TRANSACTIONS:
        try:
            service.create_transaction(
                date=SEED_DATE,
                type=txn_type,
                category=category,
                amount=Decimal(amount),
                description=description,
            )
        except DomainError as e:
            click.echo(f"Created {created} transaction(s) before failing.", err=True)
            handle_domain_error(ctx, e)
            return
        created += 1

    click.echo(f"Created {created} sample transactions dated {SEED_DATE}")


def register_commands(cli):
    """Register seed command with main CLI."""
    cli.add_command(seed)
