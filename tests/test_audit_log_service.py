"""Tests for the audit recorder and the admin audit log viewer."""

import json
import time as clock
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

import pytest

from finboard.domain.audit import AuditLogService, AuditRecorder, serialize_state, utc_day_bound
from finboard.domain.entities import Actor, EventType, Outcome, TransactionType
from finboard.domain.errors import PermissionDeniedError, ValidationError
from finboard.domain.session import DatabaseActorProvider, StaticActorProvider


def test_serialize_state():
    state = {
        "amount": Decimal("10.50"),
        "date": date(2025, 1, 2),
        "type": TransactionType.EXPENSE,
        "description": None,
    }
    assert json.loads(serialize_state(state)) == {
        "amount": "10.50",
        "date": "2025-01-02",
        "type": "Expense",
        "description": None,
    }
    assert serialize_state(None) is None


class TestAuditRecorder:
    """Tests for best-effort audit writes."""

    def test_record_returns_true(self, temp_db):
        recorder = AuditRecorder(temp_db, StaticActorProvider(actor=Actor(id=1, display_name="Dana")))

        assert recorder.record(EventType.CREATE, "transaction", 5, None, {"id": 5}, Outcome.SUCCESS)

        entries, total = temp_db.list_audit_logs()
        assert total == 1
        assert entries[0].display_name == "Dana"
        assert entries[0].resource_id == "5"

    def test_record_failure_is_swallowed_and_logged(self, temp_db, monkeypatch, caplog):
        def failing_insert(**kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(temp_db, "insert_audit_log", failing_insert)
        recorder = AuditRecorder(temp_db)

        assert recorder.record(EventType.DELETE, "transaction", 5, None, None, Outcome.SUCCESS) is False
        assert "Audit log write failed" in caplog.text

    def test_actor_lookup_failure_falls_back_to_unknown(self, temp_db):
        class BrokenProvider:
            def get_current_actor(self):
                raise RuntimeError("session expired")

            def get_current_user(self):
                return None

        recorder = AuditRecorder(temp_db, BrokenProvider())
        assert recorder.record(EventType.CREATE, "transaction", 1, None, None, Outcome.SUCCESS)

        entries, _ = temp_db.list_audit_logs()
        assert entries[0].display_name == "Unknown"


@pytest.fixture
def host_timezone(monkeypatch):
    """Return a function that switches the process time zone for one test."""
    if not hasattr(clock, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    def _set(name):
        monkeypatch.setenv("TZ", name)
        clock.tzset()

    yield _set
    monkeypatch.undo()
    clock.tzset()


class TestUtcDayBound:
    """Tests for converting local calendar-day bounds to stored UTC time."""

    def test_west_of_utc(self):
        west = timezone(timedelta(hours=-12))
        assert utc_day_bound(date(2026, 10, 18), time.min, west) == datetime(2026, 10, 18, 12, 0)
        assert utc_day_bound(date(2026, 10, 18), time.max, west) == datetime(
            2026, 10, 19, 11, 59, 59, 999999
        )

    def test_east_of_utc(self):
        east = timezone(timedelta(hours=5, minutes=30))
        assert utc_day_bound(date(2025, 1, 1), time.min, east) == datetime(2024, 12, 31, 18, 30)

    def test_host_zone(self, host_timezone):
        host_timezone("EAT-3")
        assert utc_day_bound(date(2025, 6, 1), time.min) == datetime(2025, 5, 31, 21, 0)


@pytest.fixture
def populated_log(temp_db):
    """Audit entries from two actors across all event types."""
    dana = AuditRecorder(temp_db, StaticActorProvider(actor=Actor(id=1, display_name="Dana Diaz")))
    sam = AuditRecorder(temp_db, StaticActorProvider(actor=Actor(id=2, display_name="Sam Smith")))
    dana.record(EventType.CREATE, "transaction", 1, None, {"id": 1}, Outcome.SUCCESS)
    dana.record(EventType.UPDATE, "transaction", 1, {"id": 1}, {"id": 1}, Outcome.SUCCESS)
    sam.record(EventType.DELETE, "transaction", 1, {"id": 1}, None, Outcome.FAILURE)
    sam.record(EventType.CREATE, "transaction", 2, None, {"id": 2}, Outcome.SUCCESS)
    return temp_db


class TestAuditLogService:
    """Tests for querying the audit log."""

    def test_requires_admin(self, populated_log, standard_user):
        service = AuditLogService(populated_log, DatabaseActorProvider(populated_log, standard_user.email))
        with pytest.raises(PermissionDeniedError, match="Only Admin users"):
            service.list_entries()

    def test_requires_a_user(self, populated_log):
        with pytest.raises(PermissionDeniedError):
            AuditLogService(populated_log).list_entries()

    def test_default_is_newest_first(self, populated_log, admin_provider):
        result = AuditLogService(populated_log, admin_provider).list_entries()
        assert result.total == 4
        assert result.page_size == 20
        assert [e.resource_id for e in result.entries] == ["2", "1", "1", "1"]
        assert result.entries[0].event_type is EventType.CREATE

    def test_filters(self, populated_log, admin_provider):
        service = AuditLogService(populated_log, admin_provider)

        assert service.list_entries(display_name="dana").total == 2
        assert service.list_entries(event_type="CREATE").total == 2
        assert service.list_entries(outcome="failure").total == 1
        assert service.list_entries(resource="transaction").total == 4
        assert service.list_entries(resource="user").total == 0

    def test_date_filter_uses_viewer_timezone(self, populated_log, admin_provider):
        """Test that date bounds are calendar days in the viewer's zone, not UTC."""
        west = timezone(timedelta(hours=-12))
        service = AuditLogService(populated_log, admin_provider, tz=west)
        stored = service.list_entries().entries[0].timestamp
        local_day = stored.replace(tzinfo=timezone.utc).astimezone(west).date()

        assert service.list_entries(start_date=local_day, end_date=local_day).total == 4
        assert service.list_entries(end_date=local_day - timedelta(days=1)).total == 0
        assert service.list_entries(start_date=local_day + timedelta(days=1)).total == 0

    def test_today_filter_on_non_utc_host(self, populated_log, admin_provider, host_timezone):
        """Test that entries written today match today's local date on a far-west host."""
        host_timezone("FAR+12")
        service = AuditLogService(populated_log, admin_provider)
        today = date.today()

        assert service.list_entries(start_date=today, end_date=today).total == 4

    def test_sort_ascending_by_name(self, populated_log, admin_provider):
        result = AuditLogService(populated_log, admin_provider).list_entries(sort="display_name:asc")
        assert [e.display_name for e in result.entries] == [
            "Dana Diaz",
            "Dana Diaz",
            "Sam Smith",
            "Sam Smith",
        ]

    def test_paging_and_cap(self, populated_log, admin_provider):
        service = AuditLogService(populated_log, admin_provider)

        second = service.list_entries(page=2, page_size=3)
        assert second.total == 4
        assert len(second.entries) == 1

        assert service.list_entries(page_size=500).page_size == 100

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"sort": "previous_state:asc"},
            {"sort": "timestamp:sideways"},
            {"event_type": "rename"},
            {"outcome": "maybe"},
            {"page": 0},
            {"page_size": 0},
        ],
    )
    def test_invalid_arguments(self, populated_log, admin_provider, kwargs):
        with pytest.raises(ValidationError):
            AuditLogService(populated_log, admin_provider).list_entries(**kwargs)
