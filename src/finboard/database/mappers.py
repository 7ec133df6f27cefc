"""Mapper functions to convert SQLAlchemy models into domain entities.

Enum-valued columns are stored as plain strings; this is where they are
turned back into domain enums.
"""

from finboard.domain import entities as domain
from finboard.database.models import (
    AuditLog as ORMAuditLog,
    Transaction as ORMTransaction,
    User as ORMUser,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        type=domain.TransactionType(orm_transaction.type),
        category=orm_transaction.category,
        amount=orm_transaction.amount,
        description=orm_transaction.description,
        created_at=orm_transaction.created_at,
    )


def audit_log_to_domain(orm_entry: ORMAuditLog) -> domain.AuditLogEntry:
    """Convert SQLAlchemy AuditLog model to domain AuditLogEntry entity."""
    return domain.AuditLogEntry(
        id=orm_entry.id,
        display_name=orm_entry.display_name,
        event_type=domain.EventType(orm_entry.event_type),
        resource=orm_entry.resource,
        resource_id=orm_entry.resource_id,
        previous_state=orm_entry.previous_state,
        new_state=orm_entry.new_state,
        outcome=domain.Outcome(orm_entry.outcome),
        timestamp=orm_entry.timestamp,
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        display_name=orm_user.display_name,
        role=domain.Role.normalize(orm_user.role),
        created_at=orm_user.created_at,
    )
