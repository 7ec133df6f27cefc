"""Transaction domain service."""

import logging
from typing import Any, Optional
from datetime import date
from decimal import Decimal

from finboard.database.base import Database
from finboard.domain.audit import TRANSACTION_RESOURCE, AuditRecorder, transaction_snapshot
from finboard.domain.entities import (
    EventType,
    Outcome,
    Transaction as TransactionEntity,
    TransactionPage,
    TransactionType,
)
from finboard.domain.errors import (
    NotFoundError,
    StoreError,
    ValidationError,
    previous_state_unavailable,
    transaction_not_found,
)
from finboard.domain.session import ActorProvider
from finboard.utils.money import quantize_amount

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MIN_DESCRIPTION_LENGTH = 3


def parse_type_filter(value: "Optional[str | TransactionType]") -> Optional[TransactionType]:
    """Parse a type filter where "All" (or nothing) means no filter."""
    if value is None or (isinstance(value, str) and value.strip().lower() in ("", "all")):
        return None
    return TransactionType.parse(value)


def validate_amount(amount: Decimal) -> Decimal:
    """Return the amount rounded to cents.

    Raises:
        ValidationError: If the amount is not a positive number
    """
    try:
        amount = Decimal(amount)
    except (TypeError, ValueError, ArithmeticError):
        raise ValidationError(f"Amount must be a positive number, got '{amount}'")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Amount must be a positive number.")
    amount = quantize_amount(amount)
    if amount == 0:
        raise ValidationError("Amount must be a positive number.")
    return amount


def validate_category(category: Optional[str]) -> str:
    category = (category or "").strip()
    if not category:
        raise ValidationError("Please select a category.")
    return category


def validate_description(description: Optional[str]) -> Optional[str]:
    """Blank descriptions become None; others need at least three characters."""
    if description is None:
        return None
    description = description.strip()
    if not description:
        return None
    if len(description) < MIN_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters."
        )
    return description


def validate_date(value: Optional[date]) -> date:
    if not isinstance(value, date):
        raise ValidationError("A date is required.")
    return value


class TransactionService:
    """Service for managing transactions.

    Every create, update and delete is recorded in the audit log. The audit
    write never changes what the caller sees: the primary store call alone
    decides success or failure.
    """

    def __init__(
        self,
        db: Database,
        actor_provider: Optional[ActorProvider] = None,
        audit: Optional[AuditRecorder] = None,
    ):
        """Initialize transaction service.

        Args:
            db: Database instance
            actor_provider: Resolves who audit entries are attributed to
            audit: Audit recorder, built from db and actor_provider if omitted
        """
        self.db = db
        self.audit = audit or AuditRecorder(db, actor_provider)

    def create_transaction(
        self,
        date: date,
        type: "str | TransactionType",
        category: str,
        amount: Decimal,
        description: Optional[str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            date: Transaction date
            type: Income or Expense
            category: Category name
            amount: Positive amount in major currency units
            description: Optional description

        Returns:
            Transaction ID

        Raises:
            ValidationError: If any field is invalid (nothing is stored or audited)
            StoreError: If the store rejects the insert (a failure entry is audited)
        """
        fields = {
            "date": validate_date(date),
            "type": TransactionType.parse(type),
            "category": validate_category(category),
            "amount": validate_amount(amount),
            "description": validate_description(description),
        }

        try:
            transaction_id = self.db.create_transaction(**fields)
        except Exception:
            self.audit.record(
                EventType.CREATE, TRANSACTION_RESOURCE, None, None, fields, Outcome.FAILURE
            )
            raise

        logger.info("Created transaction %s", transaction_id)
        self.audit.record(
            EventType.CREATE,
            TRANSACTION_RESOURCE,
            transaction_id,
            None,
            {"id": transaction_id, **fields},
            Outcome.SUCCESS,
        )
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: int,
        date: Optional[date] = None,
        type: "Optional[str | TransactionType]" = None,
        category: Optional[str] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        clear_description: bool = False,
    ) -> None:
        """Update the provided transaction fields.

        The stored row is read before the update is issued. If it cannot be
        read the update is not attempted.

        Raises:
            ValidationError: If no fields are given or a field is invalid
            NotFoundError: If the transaction doesn't exist
            StoreError: If the pre-read or the update fails
        """
        changes: dict[str, Any] = {}
        if date is not None:
            changes["date"] = validate_date(date)
        if type is not None:
            changes["type"] = TransactionType.parse(type)
        if category is not None:
            changes["category"] = validate_category(category)
        if amount is not None:
            changes["amount"] = validate_amount(amount)
        if clear_description:
            if description is not None:
                raise ValidationError("Cannot set both description and clear_description")
            changes["description"] = None
        elif description is not None:
            changes["description"] = validate_description(description)
        if not changes:
            raise ValidationError("No fields to update")

        previous_state = self._read_previous_state(transaction_id, EventType.UPDATE, changes)
        new_state = {**previous_state, **changes}

        try:
            self.db.update_transaction(
                transaction_id,
                date=changes.get("date"),
                type=changes.get("type"),
                category=changes.get("category"),
                amount=changes.get("amount"),
                description=changes.get("description"),
                clear_description="description" in changes and changes["description"] is None,
            )
        except Exception:
            self.audit.record(
                EventType.UPDATE,
                TRANSACTION_RESOURCE,
                transaction_id,
                previous_state,
                new_state,
                Outcome.FAILURE,
            )
            raise

        logger.info("Updated transaction %s", transaction_id)
        self.audit.record(
            EventType.UPDATE,
            TRANSACTION_RESOURCE,
            transaction_id,
            previous_state,
            new_state,
            Outcome.SUCCESS,
        )

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
            StoreError: If the pre-read or the delete fails
        """
        previous_state = self._read_previous_state(transaction_id, EventType.DELETE, None)

        try:
            self.db.delete_transaction(transaction_id)
        except Exception:
            self.audit.record(
                EventType.DELETE,
                TRANSACTION_RESOURCE,
                transaction_id,
                previous_state,
                None,
                Outcome.FAILURE,
            )
            raise

        logger.info("Deleted transaction %s", transaction_id)
        self.audit.record(
            EventType.DELETE,
            TRANSACTION_RESOURCE,
            transaction_id,
            previous_state,
            None,
            Outcome.SUCCESS,
        )

    def _read_previous_state(
        self,
        transaction_id: int,
        event_type: EventType,
        attempted_state: Optional[dict[str, Any]],
    ) -> dict[str, Any]:
        """Read the stored row ahead of a mutation, auditing a failure if it can't be read."""
        try:
            txn = self.db.get_transaction(transaction_id)
        except Exception as e:
            self.audit.record(
                event_type, TRANSACTION_RESOURCE, transaction_id, None, attempted_state, Outcome.FAILURE
            )
            raise StoreError(previous_state_unavailable(transaction_id, event_type.value)) from e

        if txn is None:
            self.audit.record(
                event_type, TRANSACTION_RESOURCE, transaction_id, None, attempted_state, Outcome.FAILURE
            )
            raise NotFoundError(transaction_not_found(transaction_id))

        return transaction_snapshot(txn)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type_filter: "Optional[str | TransactionType]" = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, newest first.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            type_filter: Optional type filter; "All" means no filter

        Returns:
            List of transaction entities
        """
        return self.db.list_transactions(
            start_date=start_date, end_date=end_date, type=parse_type_filter(type_filter)
        )

    def search_transactions(
        self,
        search: Optional[str] = None,
        type_filter: "Optional[str | TransactionType]" = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> TransactionPage:
        """Search transactions by description or category and return one page.

        Args:
            search: Optional case-insensitive substring of description or category
            type_filter: Optional type filter; "All" means no filter
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            page: 1-based page number
            page_size: Transactions per page

        Raises:
            ValidationError: If page or page_size is less than 1
        """
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if page_size < 1:
            raise ValidationError("Page size must be 1 or greater")

        matches = self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            type=parse_type_filter(type_filter),
            search=(search or "").strip() or None,
        )
        offset = (page - 1) * page_size
        return TransactionPage(
            transactions=tuple(matches[offset:offset + page_size]),
            total=len(matches),
            page=page,
            page_size=page_size,
        )
