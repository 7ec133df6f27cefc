"""Abstract database interface.

This is the contract finboard holds with its backing store. Every method
is a single request/response call; implementations raise StoreError when
the store cannot complete a call.
"""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from finboard.domain.entities import (
    AuditLogEntry,
    Role,
    Transaction,
    TransactionType,
    User,
)


class Database(ABC):
    """Abstract database interface for finboard."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date: date,
        type: TransactionType,
        category: str,
        amount: Decimal,
        description: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        date: Optional[date] = None,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        clear_description: bool = False,
    ) -> None:
        """Update the provided transaction fields.

        Args:
            clear_description: If True, set description to NULL
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[TransactionType] = None,
        search: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions, newest first.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            type: Optional transaction type filter
            search: Optional case-insensitive substring of description or category
        """
        pass

    # Audit log operations
    @abstractmethod
    def insert_audit_log(
        self,
        display_name: str,
        event_type: str,
        resource: str,
        resource_id: Optional[str],
        previous_state: Optional[str],
        new_state: Optional[str],
        outcome: str,
    ) -> int:
        """Append an audit log entry. Returns entry ID."""
        pass

    @abstractmethod
    def list_audit_logs(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        display_name: Optional[str] = None,
        event_type: Optional[str] = None,
        resource: Optional[str] = None,
        outcome: Optional[str] = None,
        sort_field: str = "timestamp",
        descending: bool = True,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> tuple[list[AuditLogEntry], int]:
        """List audit log entries matching the filters.

        Returns the requested slice and the total number of matching entries.
        """
        pass

    # User operations
    @abstractmethod
    def create_user(self, email: str, display_name: Optional[str], role: Role) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email, ignoring case."""
        pass

    @abstractmethod
    def list_users(self, search: Optional[str] = None) -> list[User]:
        """List users, optionally filtered by email or display name substring."""
        pass

    @abstractmethod
    def update_user_role(self, user_id: int, role: Role) -> None:
        """Change a user's role."""
        pass

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """Delete a user."""
        pass

    @abstractmethod
    def count_users(self) -> int:
        """Return the number of users."""
        pass
