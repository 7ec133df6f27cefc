"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class PermissionDeniedError(DomainError):
    """The acting user's role does not allow the operation."""


class StoreError(DomainError):
    """The backing store failed to complete a request. Safe to retry."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def duplicate_user_email(email: str) -> str:
    """Return message for duplicate user email."""
    return f"User with email '{email}' already exists"


def admin_required(action: str) -> str:
    """Return message when an admin-only action is attempted."""
    return f"Only Admin users can {action}"


def previous_state_unavailable(transaction_id: int, action: str) -> str:
    """Return message when a mutation is aborted because the prior row could not be read."""
    return (
        f"Cannot {action} transaction {transaction_id}: "
        "its current state could not be read"
    )
