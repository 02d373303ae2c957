"""Record Mutation Service - rules tested against in-memory stores.

Tests cover:
    - Total recomputed from stored + changed cost components
    - Zero affected rows -> ResourceNotFoundError, no commit
    - Validation failures never commit
    - Bulk entry de-duplicates staff and snapshots names
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pytest

from pdtracker.core.errors import FieldValidationError, ResourceNotFoundError
from pdtracker.core.field_presence import Present
from pdtracker.core.record_changes import NewRecordEntry, RecordChanges
from pdtracker.services.record_mutation import RecordMutationService


@dataclass
class StoredRecord:
    id: int
    start_date: date
    end_date: date | None = None
    venue_id: int | None = 10
    venue_other: str | None = None
    crt: Decimal = Decimal("100.00")
    enrol: Decimal = Decimal("0.00")
    other: Decimal = Decimal("5.00")


class FakeDb:
    def __init__(self):
        self.commits = 0

    async def commit(self):
        self.commits += 1


class FakeRecordStore:
    def __init__(self, *records, update_rowcount=None):
        self.records = {r.id: r for r in records}
        self.update_rowcount = update_rowcount
        self.updates = []
        self.inserted = []

    async def get_active(self, record_id):
        return self.records.get(record_id)

    async def update_active(self, record_id, assignments, modified_at, modified_by):
        self.updates.append((record_id, assignments, modified_by))
        if self.update_rowcount is not None:
            return self.update_rowcount
        return 1 if record_id in self.records else 0

    async def soft_delete(self, record_id, deleted_at, deleted_by):
        return 1 if self.records.pop(record_id, None) else 0

    async def insert_many(self, rows):
        self.inserted.extend(rows)
        return len(rows)

    async def area_exists(self, area_id):
        return area_id in (1, 2)

    async def venue_exists(self, venue_id):
        return venue_id in (10, 11)


class FakeStaffStore:
    names = {1: "Ana Lima", 2: "Bruno Costa"}

    async def active_names(self, staff_ids):
        return {i: n for i, n in self.names.items() if i in staff_ids}


def make_service(*records, **store_kw):
    db = FakeDb()
    store = FakeRecordStore(*records, **store_kw)
    service = RecordMutationService(db, records=store, staff=FakeStaffStore())
    return service, store, db


# ─── update ─────────────────────────────────────────────────────

async def test_total_recomputed_from_stored_and_changed_costs():
    service, store, db = make_service(StoredRecord(1, date(2025, 1, 1)))
    await service.update(1, RecordChanges(enrol=Present(Decimal("20"))), "jsmith")

    record_id, assignments, actor = store.updates[0]
    assert assignments["enrol"] == Decimal("20.00")
    assert assignments["total"] == Decimal("125.00")
    assert actor == "jsmith"
    assert db.commits == 1


async def test_title_change_leaves_total_alone():
    service, store, _ = make_service(StoredRecord(1, date(2025, 1, 1)))
    await service.update(1, RecordChanges(title=Present("New")), None)
    assert "total" not in store.updates[0][1]


async def test_empty_update_rejected_without_commit():
    service, store, db = make_service(StoredRecord(1, date(2025, 1, 1)))
    with pytest.raises(FieldValidationError):
        await service.update(1, RecordChanges(), None)
    assert store.updates == []
    assert db.commits == 0


async def test_missing_record_is_not_found():
    service, _, db = make_service()
    with pytest.raises(ResourceNotFoundError):
        await service.update(7, RecordChanges(title=Present("X")), None)
    assert db.commits == 0


async def test_zero_affected_rows_is_not_found():
    service, _, db = make_service(StoredRecord(1, date(2025, 1, 1)), update_rowcount=0)
    with pytest.raises(ResourceNotFoundError):
        await service.update(1, RecordChanges(title=Present("X")), None)
    assert db.commits == 0


async def test_end_date_checked_against_stored_start():
    service, _, _ = make_service(StoredRecord(1, date(2025, 5, 1)))
    with pytest.raises(FieldValidationError):
        await service.update(1, RecordChanges(end_date=Present(date(2025, 4, 1))), None)


async def test_unknown_venue_rejected():
    service, _, _ = make_service(StoredRecord(1, date(2025, 1, 1)))
    with pytest.raises(FieldValidationError):
        await service.update(1, RecordChanges(venue_id=Present(99)), None)


async def test_hours_beyond_column_rejected_before_store():
    service, store, db = make_service(StoredRecord(1, date(2025, 1, 1)))
    with pytest.raises(FieldValidationError):
        await service.update(1, RecordChanges(hours=Present(Decimal("100000"))), None)
    assert store.updates == []
    assert db.commits == 0


async def test_venue_switch_to_free_text():
    service, store, _ = make_service(StoredRecord(1, date(2025, 1, 1)))
    await service.update(
        1, RecordChanges(venue_id=Present(None), venue_other=Present("Hall")), None,
    )
    assignments = store.updates[0][1]
    assert assignments["venue_id"] is None
    assert assignments["venue_other"] == "Hall"


# ─── soft_delete ────────────────────────────────────────────────

async def test_soft_delete_twice():
    service, _, db = make_service(StoredRecord(1, date(2025, 1, 1)))
    await service.soft_delete(1, "admin")
    with pytest.raises(ResourceNotFoundError):
        await service.soft_delete(1, "admin")
    assert db.commits == 1


# ─── create_bulk ────────────────────────────────────────────────

def make_entry(**overrides):
    values = dict(
        staff_ids=(1, 2, 1),
        start_date=date(2025, 6, 1),
        area_id=1,
        title=" Coaching ",
        hours=Decimal("1.5"),
        venue_id=11,
        crt=Decimal("10"),
    )
    values.update(overrides)
    return NewRecordEntry(**values)


async def test_bulk_snapshots_names_once_per_staff():
    service, store, db = make_service()
    inserted = await service.create_bulk(make_entry(), "office")

    assert inserted == 2
    assert [r["staff_name_snapshot"] for r in store.inserted] == ["Ana Lima", "Bruno Costa"]
    first = store.inserted[0]
    assert first["title"] == "Coaching"
    assert first["venue_other"] is None
    assert first["total"] == Decimal("10.00")
    assert first["enrol"] == Decimal("0.00")
    assert first["modified_by"] == "office"
    assert db.commits == 1


async def test_bulk_unknown_staff_inserts_nothing():
    service, store, db = make_service()
    with pytest.raises(FieldValidationError):
        await service.create_bulk(make_entry(staff_ids=(1, 3)), None)
    assert store.inserted == []
    assert db.commits == 0


async def test_bulk_requires_staff():
    service, _, _ = make_service()
    with pytest.raises(FieldValidationError):
        await service.create_bulk(make_entry(staff_ids=()), None)


async def test_bulk_requires_venue():
    service, _, _ = make_service()
    with pytest.raises(FieldValidationError):
        await service.create_bulk(make_entry(venue_id=None, venue_other=None), None)
