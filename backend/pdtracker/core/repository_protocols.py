"""Boundary Protocols - contracts between core/services and the persistence shell.

Invariants:
    - Stores bind every filter value as a SQL parameter
    - Update/delete/archive operations report affected-row counts so callers can
      tell "not found" from "success"
    - Stores raise tagged PDTrackerError kinds (ConflictError, DatabaseError),
      never bare driver exceptions

Design Decisions:
    - Protocol over ABC: structural subtyping, tests may pass fakes
"""

from datetime import datetime
from typing import Protocol

from pdtracker.core.domain_types import AreaId, RecordId, StaffId, VenueId
from pdtracker.core.roster_filters import RosterFilters, StaffFields


class ActiveRecordLike(Protocol):
    """Subset of a PD record the mutation service needs before an update."""
    id: RecordId
    start_date: object
    end_date: object
    venue_id: VenueId | None
    venue_other: str | None
    crt: object
    enrol: object
    other: object


class StaffLike(Protocol):
    """Subset of a staff member the roster service reads before a restore."""
    id: StaffId
    name: str
    is_archived: bool


class RecordStore(Protocol):
    """Contract for PD record writes."""
    async def get_active(self, record_id: RecordId) -> ActiveRecordLike | None: ...
    async def update_active(
        self, record_id: RecordId, assignments: dict[str, object],
        modified_at: datetime, modified_by: str | None,
    ) -> int: ...
    async def soft_delete(
        self, record_id: RecordId, deleted_at: datetime, deleted_by: str | None,
    ) -> int: ...
    async def insert_many(self, rows: list[dict]) -> int: ...
    async def area_exists(self, area_id: AreaId) -> bool: ...
    async def venue_exists(self, venue_id: VenueId) -> bool: ...


class StaffStore(Protocol):
    """Contract for staff roster persistence."""
    async def list_staff(self, filters: RosterFilters) -> list[dict]: ...
    async def get(self, staff_id: StaffId) -> StaffLike | None: ...
    async def active_name_taken(self, name: str, exclude_id: StaffId | None = None) -> bool: ...
    async def active_names(self, staff_ids: list[StaffId]) -> dict[StaffId, str]: ...
    async def create(self, fields: StaffFields, actor: str | None) -> StaffId: ...
    async def update(self, staff_id: StaffId, fields: StaffFields, actor: str | None) -> int: ...
    async def set_archived(self, staff_id: StaffId, archived: bool, actor: str | None) -> int: ...
