from datetime import datetime, timedelta

import pytest

from realty.errors import PersistenceError, SchemaDriftError, StoreUnavailable
from realty.models.lead import CANCELLED, PENDING, SCHEDULED
from realty.services.lead_repository import LeadRepository, SchedulingUpdate
from realty.services.lead_validator import validate_lead
from realty.storage import LeadStore


class MemoryStore(LeadStore):
    """In-memory contacts table that can pretend to lack columns or be unreachable."""

    def __init__(self, name="memory", missing=(), unavailable=False):
        self.name = name
        self.missing = set(missing)
        self.unavailable = unavailable
        self.rows = []
        self.inserts = []

    def _check(self):
        if self.unavailable:
            raise StoreUnavailable(f"{self.name} unreachable")

    def insert(self, row):
        self._check()
        self.inserts.append(dict(row))
        for column in row:
            if column in self.missing:
                raise SchemaDriftError(column)
        persisted = dict(row, id=len(self.rows) + 1, created_at=datetime.utcnow() + timedelta(seconds=len(self.rows)))
        self.rows.append(persisted)
        return dict(persisted)

    def latest_by_email(self, email):
        self._check()
        matches = [row for row in self.rows if row["email"].lower() == email.strip().lower()]
        if not matches:
            return None
        return dict(max(matches, key=lambda row: (row["created_at"], row["id"])))

    def by_event_id(self, event_id):
        self._check()
        matches = [row for row in self.rows if row.get("calendly_event_id") == event_id]
        return dict(matches[0]) if matches else None

    def update(self, lead_id, values):
        self._check()
        for row in self.rows:
            if row["id"] == lead_id:
                row.update(values)
                return dict(row)
        return None

    def all(self):
        self._check()
        return [dict(row) for row in self.rows]

    def ping(self):
        return not self.unavailable


def _scheduling(event_id="evt-1", status=SCHEDULED):
    return SchedulingUpdate(
        calendly_event_id=event_id,
        calendly_status=status,
        appointment_date=datetime(2026, 11, 3, 15, 0),
        calendly_invitee_name="Ana Gomez",
        calendly_raw_payload={"event": "invitee.created"},
    )


def test_create_returns_persisted_lead(lead_payload):
    store = MemoryStore()
    repository = LeadRepository(store)

    lead = repository.create(validate_lead(lead_payload(email="ana@example.com")))

    assert lead.id == 1
    assert lead.email == "ana@example.com"
    assert lead.calendly_status == PENDING
    assert lead.appointment_date is None
    assert lead.created_at is not None


def test_created_lead_is_found_by_email(lead_payload):
    repository = LeadRepository(MemoryStore())
    created = repository.create(validate_lead(lead_payload(email="Ana@Example.com")))

    found = repository.find_by_email("ana@example.com")

    assert found.id == created.id
    assert found.full_name == created.full_name


def test_create_drops_missing_optional_column_and_retries(lead_payload):
    store = MemoryStore(missing={"project_slug"})
    repository = LeadRepository(store)

    lead = repository.create(validate_lead(lead_payload()))

    assert len(store.inserts) == 2
    assert "project_slug" in store.inserts[0]
    assert "project_slug" not in store.inserts[1]
    assert lead.project_slug is None
    assert lead.down_payment is not None


def test_create_drops_each_drifted_column_once(lead_payload):
    store = MemoryStore(missing={"down_payment", "what_in_mind", "project_slug"})
    repository = LeadRepository(store)

    lead = repository.create(validate_lead(lead_payload()))

    assert len(store.inserts) == 4
    assert set(store.inserts[-1]) == {"full_name", "email", "phone", "budget", "calendly_status"}
    assert lead.full_name


def test_missing_required_column_is_not_dropped(lead_payload):
    store = MemoryStore(missing={"phone"})
    repository = LeadRepository(store)

    with pytest.raises(PersistenceError) as exc_info:
        repository.create(validate_lead(lead_payload()))

    assert len(store.inserts) == 1
    assert "phone" in str(exc_info.value)


def test_missing_non_tolerant_optional_column_fails(lead_payload):
    store = MemoryStore(missing={"budget"})

    with pytest.raises(PersistenceError):
        LeadRepository(store).create(validate_lead(lead_payload()))

    assert len(store.inserts) == 1


def test_create_falls_back_when_primary_unreachable(lead_payload):
    primary = MemoryStore("sql", unavailable=True)
    fallback = MemoryStore("rest")
    repository = LeadRepository(primary, fallback)

    lead = repository.create(validate_lead(lead_payload()))

    assert lead.id == 1
    assert primary.rows == []
    assert len(fallback.rows) == 1


def test_fallback_also_tolerates_drift(lead_payload):
    primary = MemoryStore("sql", unavailable=True)
    fallback = MemoryStore("rest", missing={"what_in_mind"})

    lead = LeadRepository(primary, fallback).create(validate_lead(lead_payload()))

    assert lead.what_in_mind is None
    assert len(fallback.inserts) == 2


def test_all_transports_down_raises_with_attempted(lead_payload):
    repository = LeadRepository(MemoryStore("sql", unavailable=True), MemoryStore("rest", unavailable=True))

    with pytest.raises(PersistenceError) as exc_info:
        repository.create(validate_lead(lead_payload()))

    assert exc_info.value.attempted == ["sql", "rest"]


def test_persistence_error_on_primary_does_not_fall_back(lead_payload):
    primary = MemoryStore("sql", missing={"email"})
    fallback = MemoryStore("rest")

    with pytest.raises(PersistenceError) as exc_info:
        LeadRepository(primary, fallback).create(validate_lead(lead_payload()))

    assert fallback.inserts == []
    assert exc_info.value.attempted == ["sql"]


def test_find_by_email_picks_most_recent_match(lead_payload):
    repository = LeadRepository(MemoryStore())
    repository.create(validate_lead(lead_payload(email="ana@example.com")))
    newest = repository.create(validate_lead(lead_payload(email="ANA@example.com")))

    assert repository.find_by_email("ana@example.com").id == newest.id


def test_find_by_email_returns_none_without_match():
    assert LeadRepository(MemoryStore()).find_by_email("nobody@example.com") is None


def test_update_scheduling_overwrites_latest_lead(lead_payload):
    store = MemoryStore()
    repository = LeadRepository(store)
    older = repository.create(validate_lead(lead_payload(email="ana@example.com")))
    newer = repository.create(validate_lead(lead_payload(email="ana@example.com")))

    lead = repository.update_scheduling("ana@example.com", _scheduling())

    assert lead.id == newer.id
    assert lead.calendly_status == SCHEDULED
    assert lead.calendly_event_id == "evt-1"
    assert lead.appointment_date == datetime(2026, 11, 3, 15, 0)
    assert store.rows[older.id - 1]["calendly_status"] == PENDING


def test_update_scheduling_is_idempotent(lead_payload):
    repository = LeadRepository(MemoryStore())
    repository.create(validate_lead(lead_payload(email="ana@example.com")))

    first = repository.update_scheduling("ana@example.com", _scheduling())
    second = repository.update_scheduling("ana@example.com", _scheduling())

    assert first.to_dict() == second.to_dict()


def test_update_scheduling_without_match_returns_none():
    store = MemoryStore()

    assert LeadRepository(store).update_scheduling("nobody@example.com", _scheduling()) is None
    assert store.rows == []


def test_list_returns_all_leads(lead_payload):
    repository = LeadRepository(MemoryStore())
    for _ in range(3):
        repository.create(validate_lead(lead_payload()))

    assert [lead.id for lead in repository.list()] == [1, 2, 3]


def test_update_scheduling_prefers_lead_holding_event_id(lead_payload):
    repository = LeadRepository(MemoryStore())
    booked = repository.create(validate_lead(lead_payload(email="ana@example.com")))
    repository.update_scheduling("ana@example.com", _scheduling("evt-1"))
    resubmitted = repository.create(validate_lead(lead_payload(email="ana@example.com")))

    cancelled = repository.update_scheduling("ana@example.com", _scheduling("evt-1", status=CANCELLED))
    fresh = repository.update_scheduling("ana@example.com", _scheduling("evt-2"))

    assert cancelled.id == booked.id
    assert cancelled.calendly_status == CANCELLED
    assert fresh.id == resubmitted.id
