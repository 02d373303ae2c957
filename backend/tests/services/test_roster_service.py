"""Roster Service - lifecycle rules tested against an in-memory staff store.

Tests cover:
    - restore over an active namesake -> ConflictError, nothing written
    - archive on the wrong state -> ResourceNotFoundError, no commit
    - successful writes commit once
"""

from dataclasses import dataclass

import pytest

from pdtracker.core.errors import ConflictError, ResourceNotFoundError
from pdtracker.core.roster_filters import StaffFields
from pdtracker.services.roster_service import RosterService


@dataclass
class StoredStaff:
    id: int
    name: str
    is_archived: bool = False


class FakeDb:
    def __init__(self):
        self.commits = 0

    async def commit(self):
        self.commits += 1


class FakeStaffStore:
    def __init__(self, *members):
        self.members = {m.id: m for m in members}
        self.archive_calls = []

    async def list_staff(self, filters):
        return [{"StaffID": m.id, "Name": m.name} for m in self.members.values()]

    async def get(self, staff_id):
        return self.members.get(staff_id)

    async def active_name_taken(self, name, exclude_id=None):
        return any(
            m.name == name and not m.is_archived and m.id != exclude_id
            for m in self.members.values()
        )

    async def active_names(self, staff_ids):
        return {}

    async def create(self, fields, actor):
        new_id = max(self.members, default=0) + 1
        self.members[new_id] = StoredStaff(new_id, fields.name)
        return new_id

    async def update(self, staff_id, fields, actor):
        return 1 if staff_id in self.members else 0

    async def set_archived(self, staff_id, archived, actor):
        self.archive_calls.append((staff_id, archived))
        member = self.members.get(staff_id)
        if member is None or member.is_archived == archived:
            return 0
        member.is_archived = archived
        return 1


def make_service(*members):
    db = FakeDb()
    store = FakeStaffStore(*members)
    return RosterService(db, staff=store), store, db


async def test_restore_over_active_namesake_writes_nothing():
    service, store, db = make_service(
        StoredStaff(1, "Carla Dias", is_archived=True), StoredStaff(2, "Carla Dias"),
    )
    with pytest.raises(ConflictError):
        await service.restore(1, "hr")
    assert store.archive_calls == []
    assert db.commits == 0


async def test_restore_archived_member():
    service, store, db = make_service(StoredStaff(1, "Carla Dias", is_archived=True))
    assert await service.restore(1, "hr") == 1
    assert store.members[1].is_archived is False
    assert db.commits == 1


async def test_archive_twice_is_not_found():
    service, _, db = make_service(StoredStaff(1, "Ana Lima"))
    await service.archive(1, "hr")
    with pytest.raises(ResourceNotFoundError):
        await service.archive(1, "hr")
    assert db.commits == 1


async def test_update_missing_member_is_not_found():
    service, _, db = make_service()
    with pytest.raises(ResourceNotFoundError):
        await service.update(9, StaffFields(name="Nobody"), None)
    assert db.commits == 0


async def test_create_commits_and_returns_id():
    service, _, db = make_service(StoredStaff(1, "Ana Lima"))
    assert await service.create(StaffFields(name="Dana Reis"), "hr") == 2
    assert db.commits == 1
