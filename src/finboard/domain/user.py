"""User management domain service."""

import logging
import re
from typing import Optional

from finboard.database.base import Database
from finboard.domain.entities import Role, User
from finboard.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    admin_required,
    duplicate_user_email,
    user_not_found,
)
from finboard.domain.session import ActorProvider

logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_admin(actor_provider: Optional[ActorProvider], action: str) -> User:
    """Return the current user if they are an admin.

    Raises:
        PermissionDeniedError: If there is no current user or they are not an admin
    """
    user = actor_provider.get_current_user() if actor_provider is not None else None
    if user is None or not user.is_admin:
        raise PermissionDeniedError(admin_required(action))
    return user


class UserService:
    """Service for managing users and their roles."""

    def __init__(self, db: Database, actor_provider: Optional[ActorProvider] = None):
        """Initialize user service.

        Args:
            db: Database instance
            actor_provider: Resolves the user performing management actions
        """
        self.db = db
        self.actor_provider = actor_provider

    def create_user(
        self, email: str, role: "str | Role", display_name: Optional[str] = None
    ) -> int:
        """Create a user.

        The very first user may be created without an acting admin, and must
        be an Admin. After that only admins may create users.

        Returns:
            User ID

        Raises:
            PermissionDeniedError: If the acting user may not create users
            ValidationError: If email or role is invalid
            ConflictError: If the email is already registered
        """
        email = (email or "").strip()
        if not _EMAIL_PATTERN.match(email):
            raise ValidationError(f"Invalid email address '{email}'")
        role = Role.normalize(role)

        if self.db.count_users() == 0:
            if role is not Role.ADMIN:
                raise ValidationError("The first user must be an Admin")
        else:
            require_admin(self.actor_provider, "create users")

        if self.db.get_user_by_email(email) is not None:
            raise ConflictError(duplicate_user_email(email))

        user_id = self.db.create_user(
            email=email, display_name=(display_name or "").strip() or None, role=role
        )
        logger.info("Created user %s with role %s", email, role.value)
        return user_id

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get_user(user_id)

    def list_users(self, search: Optional[str] = None) -> list[User]:
        """List users, optionally filtered by an email or name substring.

        Raises:
            PermissionDeniedError: If the acting user is not an admin
        """
        require_admin(self.actor_provider, "list users")
        return self.db.list_users(search=search)

    def change_role(self, user_id: int, role: "str | Role") -> None:
        """Change a user's role.

        Raises:
            PermissionDeniedError: If the acting user is not an admin
            NotFoundError: If the user doesn't exist
            DependencyError: If this would remove the last admin
        """
        acting = require_admin(self.actor_provider, "change user roles")
        role = Role.normalize(role)
        user = self._require_user(user_id)
        if user.is_admin and role is not Role.ADMIN:
            self._ensure_other_admin_exists(user_id, "demote")
        self.db.update_user_role(user_id, role)
        logger.info("%s changed role of %s to %s", acting.email, user.email, role.value)

    def delete_user(self, user_id: int) -> None:
        """Delete a user.

        Raises:
            PermissionDeniedError: If the acting user is not an admin
            NotFoundError: If the user doesn't exist
            ValidationError: If the user is the acting user
            DependencyError: If the user is the last admin
        """
        acting = require_admin(self.actor_provider, "delete users")
        user = self._require_user(user_id)
        if user.id == acting.id:
            raise ValidationError("You cannot delete your own user")
        if user.is_admin:
            self._ensure_other_admin_exists(user_id, "delete")
        self.db.delete_user(user_id)
        logger.info("%s deleted user %s", acting.email, user.email)

    def _require_user(self, user_id: int) -> User:
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        return user

    def _ensure_other_admin_exists(self, user_id: int, action: str) -> None:
        admins = [u for u in self.db.list_users() if u.is_admin and u.id != user_id]
        if not admins:
            raise DependencyError(f"Cannot {action} the last Admin user")
