"""Acting identity resolution.

Services receive an ActorProvider explicitly instead of reading a global
session, so audit attribution can be swapped out in tests.
"""

import logging
from typing import Optional, Protocol

from finboard.database.base import Database
from finboard.domain.entities import Actor, User
from finboard.domain.errors import StoreError

logger = logging.getLogger(__name__)

UNKNOWN_ACTOR_NAME = "Unknown"


class ActorProvider(Protocol):
    """Resolves who is performing the current operation."""

    def get_current_actor(self) -> Optional[Actor]:
        ...

    def get_current_user(self) -> Optional[User]:
        ...


def actor_for_user(user: User) -> Actor:
    """Build the audit identity for a user."""
    return Actor(id=user.id, display_name=user.display_name or user.email)


class StaticActorProvider:
    """Provider that always returns the same identity."""

    def __init__(self, actor: Optional[Actor] = None, user: Optional[User] = None):
        if actor is None and user is not None:
            actor = actor_for_user(user)
        self.actor = actor
        self.user = user

    def get_current_actor(self) -> Optional[Actor]:
        return self.actor

    def get_current_user(self) -> Optional[User]:
        return self.user


class DatabaseActorProvider:
    """Resolve the acting user by email from the users table.

    Lookup failures resolve to no actor rather than raising; callers fall
    back to the "Unknown" label.
    """

    def __init__(self, db: Database, email: Optional[str]):
        self.db = db
        self.email = email

    def get_current_user(self) -> Optional[User]:
        if not self.email:
            return None
        try:
            return self.db.get_user_by_email(self.email)
        except StoreError as e:
            logger.warning("Could not resolve current user %s: %s", self.email, e)
            return None

    def get_current_actor(self) -> Optional[Actor]:
        user = self.get_current_user()
        if user is None:
            return None
        return actor_for_user(user)


def resolve_display_name(provider: Optional[ActorProvider]) -> str:
    """Best-effort display name for audit attribution."""
    if provider is None:
        return UNKNOWN_ACTOR_NAME
    try:
        actor = provider.get_current_actor()
    except Exception:
        logger.warning("Actor lookup failed; attributing to %s", UNKNOWN_ACTOR_NAME, exc_info=True)
        return UNKNOWN_ACTOR_NAME
    if actor is None or not actor.display_name:
        return UNKNOWN_ACTOR_NAME
    return actor.display_name
