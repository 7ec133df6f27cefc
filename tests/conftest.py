"""Shared pytest fixtures for finboard tests."""

import logging
import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from finboard.database.factories import create_sqlite_database
from finboard.domain.dashboard import DashboardService
from finboard.domain.entities import Role
from finboard.domain.session import DatabaseActorProvider
from finboard.domain.transaction import TransactionService
from finboard.domain.user import UserService


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo CLI logging configuration between tests."""
    yield
    logger = logging.getLogger("finboard")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def admin_user(temp_db):
    """Create the bootstrap Admin user."""
    user_id = UserService(temp_db).create_user(
        email="owner@example.com", role=Role.ADMIN, display_name="Olivia Owner"
    )
    return temp_db.get_user(user_id)


@pytest.fixture
def admin_provider(temp_db, admin_user):
    """Actor provider acting as the Admin user."""
    return DatabaseActorProvider(temp_db, admin_user.email)


@pytest.fixture
def standard_user(temp_db, admin_provider):
    """Create a Standard User."""
    user_id = UserService(temp_db, admin_provider).create_user(
        email="clerk@example.com", role=Role.STANDARD, display_name="Casey Clerk"
    )
    return temp_db.get_user(user_id)


@pytest.fixture
def transaction_service(temp_db, admin_provider):
    """Create a TransactionService acting as the Admin user."""
    return TransactionService(temp_db, admin_provider)


@pytest.fixture
def dashboard_service(temp_db):
    """Create a DashboardService with a temporary database."""
    return DashboardService(temp_db)


@pytest.fixture
def add_transaction(transaction_service):
    """Return a helper that creates a transaction with sensible defaults."""

    def _add(txn_date, txn_type="Expense", category="Supplies", amount="10.00", description=None):
        return transaction_service.create_transaction(
            date=txn_date,
            type=txn_type,
            category=category,
            amount=Decimal(amount),
            description=description,
        )

    return _add


@pytest.fixture
def sample_transactions(add_transaction):
    """A small set of January 2025 transactions, returned as a dict of IDs."""
    return {
        "payment": add_transaction(date(2025, 1, 15), "Income", "Client Payment", "1000.00", "Invoice 1001"),
        "rent": add_transaction(date(2025, 1, 20), "Expense", "Rent", "400.00"),
        "supplies": add_transaction(date(2025, 1, 22), "Expense", "Supplies", "35.50", "Printer paper"),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
