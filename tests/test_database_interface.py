"""Tests for Database interface returning domain models."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from finboard.database.factories import DB_PATH_ENV_VAR, resolve_database_path
from finboard.domain import entities
from finboard.domain.errors import NotFoundError, ValidationError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_transaction_returns_domain_model(self, temp_db):
        """Test that get_transaction returns a domain Transaction entity."""
        txn_id = temp_db.create_transaction(
            date=date(2025, 1, 15),
            type=entities.TransactionType.EXPENSE,
            category="Rent",
            amount=Decimal("400.00"),
            description="January rent",
        )

        txn = temp_db.get_transaction(txn_id)

        assert isinstance(txn, entities.Transaction)
        assert txn.id == txn_id
        assert txn.type is entities.TransactionType.EXPENSE
        assert txn.amount == Decimal("400.00")
        assert isinstance(txn.created_at, datetime)

    def test_get_missing_transaction(self, temp_db):
        assert temp_db.get_transaction(42) is None

    def test_update_missing_transaction(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_transaction(42, category="Rent")

    def test_delete_missing_transaction(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.delete_transaction(42)

    def test_insert_and_list_audit_logs(self, temp_db):
        """Test that list_audit_logs returns domain AuditLogEntry entities."""
        temp_db.insert_audit_log(
            display_name="Dana Diaz",
            event_type="create",
            resource="transaction",
            resource_id="1",
            previous_state=None,
            new_state='{"id": 1}',
            outcome="success",
        )

        entries, total = temp_db.list_audit_logs()

        assert total == 1
        [entry] = entries
        assert isinstance(entry, entities.AuditLogEntry)
        assert entry.event_type is entities.EventType.CREATE
        assert entry.outcome is entities.Outcome.SUCCESS
        assert entry.new_state == '{"id": 1}'
        assert isinstance(entry.timestamp, datetime)

    def test_audit_sort_field_whitelist(self, temp_db):
        with pytest.raises(ValidationError, match="Cannot sort audit logs"):
            temp_db.list_audit_logs(sort_field="new_state")

    def test_user_round_trip(self, temp_db):
        """Test that user operations return domain User entities."""
        user_id = temp_db.create_user(
            email="dana@example.com", display_name="Dana Diaz", role=entities.Role.ADMIN
        )

        user = temp_db.get_user_by_email("DANA@example.com")

        assert isinstance(user, entities.User)
        assert user.id == user_id
        assert user.role is entities.Role.ADMIN
        assert user.is_admin
        assert temp_db.count_users() == 1

        temp_db.update_user_role(user_id, entities.Role.STANDARD)
        assert temp_db.get_user(user_id).role is entities.Role.STANDARD

        temp_db.delete_user(user_id)
        assert temp_db.count_users() == 0


class TestResolveDatabasePath:
    """Tests for database path resolution."""

    def test_explicit_path_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv(DB_PATH_ENV_VAR, str(tmp_path / "env.db"))
        assert resolve_database_path(str(tmp_path / "explicit.db")) == str(tmp_path / "explicit.db")

    def test_environment_variable(self, monkeypatch, tmp_path):
        monkeypatch.setenv(DB_PATH_ENV_VAR, str(tmp_path / "env.db"))
        assert resolve_database_path() == str(tmp_path / "env.db")
