"""Audit logging domain services."""

import json
import logging
from datetime import date, datetime, time, timezone, tzinfo
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from finboard.database.base import Database
from finboard.domain.entities import AuditLogPage, EventType, Outcome, Transaction
from finboard.domain.errors import ValidationError
from finboard.domain.session import ActorProvider, resolve_display_name
from finboard.domain.user import require_admin

logger = logging.getLogger(__name__)

TRANSACTION_RESOURCE = "transaction"
DEFAULT_AUDIT_SORT = "timestamp:desc"
DEFAULT_AUDIT_PAGE_SIZE = 20
MAX_AUDIT_PAGE_SIZE = 100


def transaction_snapshot(txn: Transaction) -> dict[str, Any]:
    """Return the stored fields of a transaction as a plain dict."""
    return {
        "id": txn.id,
        "date": txn.date,
        "type": txn.type,
        "category": txn.category,
        "amount": txn.amount,
        "description": txn.description,
    }


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {value.__class__.__name__} is not JSON serializable")


def serialize_state(state: Optional[dict[str, Any]]) -> Optional[str]:
    """Serialize a snapshot to JSON text; None stays None."""
    if state is None:
        return None
    return json.dumps(state, default=_json_default, sort_keys=True)


def utc_day_bound(day: date, at: time, tz: Optional[tzinfo] = None) -> datetime:
    """Naive UTC datetime for the wall-clock time `at` on `day` in `tz`.

    A tz of None means the host's local zone.
    """
    local = datetime.combine(day, at)
    aware = local.replace(tzinfo=tz) if tz is not None else local.astimezone()
    return aware.astimezone(timezone.utc).replace(tzinfo=None)

class AuditRecorder:
    """Writes audit entries on a best-effort basis.

    A failed audit write is logged and reported through the return value;
    it is never raised, so it cannot change the outcome of the operation
    being audited.
    """

    def __init__(self, db: Database, actor_provider: Optional[ActorProvider] = None):
        """Initialize audit recorder.

        Args:
            db: Database instance
            actor_provider: Resolves the display name entries are attributed to
        """
        self.db = db
        self.actor_provider = actor_provider

    def record(
        self,
        event_type: EventType,
        resource: str,
        resource_id: Optional[Any],
        previous_state: Optional[dict[str, Any]],
        new_state: Optional[dict[str, Any]],
        outcome: Outcome,
    ) -> bool:
        """Write one audit entry.

        Returns:
            True if the entry was stored, False if the write failed
        """
        try:
            self.db.insert_audit_log(
                display_name=resolve_display_name(self.actor_provider),
                event_type=EventType(event_type).value,
                resource=resource,
                resource_id=str(resource_id) if resource_id is not None else None,
                previous_state=serialize_state(previous_state),
                new_state=serialize_state(new_state),
                outcome=Outcome(outcome).value,
            )
        except Exception:
            logger.exception(
                "Audit log write failed for %s %s (id=%s, outcome=%s)",
                EventType(event_type).value,
                resource,
                resource_id,
                Outcome(outcome).value,
            )
            return False
        return True


class AuditLogService:
    """Read access to the audit log, restricted to admins.

    Date filters are calendar days in `tz` (the host's local zone when
    None) and are converted to the naive UTC timestamps the store holds.
    """

    def __init__(
        self,
        db: Database,
        actor_provider: Optional[ActorProvider] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.db = db
        self.actor_provider = actor_provider
        self.tz = tz

    def list_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        display_name: Optional[str] = None,
        event_type: Optional[str] = None,
        resource: Optional[str] = None,
        outcome: Optional[str] = None,
        sort: str = DEFAULT_AUDIT_SORT,
        page: int = 1,
        page_size: int = DEFAULT_AUDIT_PAGE_SIZE,
    ) -> AuditLogPage:
        """Query audit entries.

        Args:
            start_date: Optional inclusive start date of the entry timestamp
            end_date: Optional inclusive end date of the entry timestamp
            display_name: Optional case-insensitive substring of the actor name
            event_type: Optional event type (create, update, delete)
            resource: Optional resource name
            outcome: Optional outcome (success, failure)
            sort: "field:asc" or "field:desc"
            page: 1-based page number
            page_size: Entries per page, capped at 100

        Raises:
            PermissionDeniedError: If the current user is not an admin
            ValidationError: If a filter, sort or paging value is invalid
        """
        require_admin(self.actor_provider, "view audit logs")

        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if page_size < 1:
            raise ValidationError("Page size must be 1 or greater")
        page_size = min(page_size, MAX_AUDIT_PAGE_SIZE)

        sort_field, descending = self.parse_sort(sort)
        entries, total = self.db.list_audit_logs(
            start=utc_day_bound(start_date, time.min, self.tz) if start_date else None,
            end=utc_day_bound(end_date, time.max, self.tz) if end_date else None,
            display_name=display_name,
            event_type=self._enum_value(EventType, event_type, "event type"),
            resource=resource,
            outcome=self._enum_value(Outcome, outcome, "outcome"),
            sort_field=sort_field,
            descending=descending,
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        return AuditLogPage(entries=tuple(entries), total=total, page=page, page_size=page_size)

    def parse_sort(self, sort: str) -> tuple[str, bool]:
        """Split "field:direction" into the field and a descending flag."""
        field, _, direction = (sort or DEFAULT_AUDIT_SORT).partition(":")
        direction = (direction or "desc").strip().lower()
        if direction not in ("asc", "desc"):
            raise ValidationError(f"Invalid sort direction '{direction}'. Use asc or desc")
        return field.strip(), direction == "desc"

    def _enum_value(self, enum_cls, value: Optional[str], label: str) -> Optional[str]:
        if not value:
            return None
        try:
            return enum_cls(value.strip().lower()).value
        except ValueError:
            choices = ", ".join(member.value for member in enum_cls)
            raise ValidationError(f"Invalid {label} '{value}'. Expected one of: {choices}")
