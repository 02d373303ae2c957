"""Roster Service - staff list, create, update, archive and restore.

Invariants:
    - Names are unique among active (non-archived) staff
    - archive: missing or already archived -> ResourceNotFoundError
    - restore: missing or not archived -> ResourceNotFoundError;
      an active namesake -> ConflictError
    - PD records are never modified by roster operations
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from pdtracker.core.domain_types import StaffId
from pdtracker.core.errors import ConflictError, ResourceNotFoundError
from pdtracker.core.repository_protocols import StaffStore
from pdtracker.core.roster_filters import RosterFilters, StaffFields
from pdtracker.services.staff_repository import StaffRepository, duplicate_name_message

logger = logging.getLogger(__name__)

STAFF_NOT_FOUND_MESSAGE = "Staff member not found."


class RosterService:

    def __init__(self, db: AsyncSession, staff: StaffStore | None = None):
        self.db = db
        self.staff = staff or StaffRepository(db)

    async def list(self, filters: RosterFilters) -> list[dict]:
        return await self.staff.list_staff(filters)

    async def create(self, fields: StaffFields, actor: str | None) -> StaffId:
        staff_id = await self.staff.create(fields, actor)
        await self.db.commit()
        logger.info(
            f"Staff {staff_id} created", extra={"staff_id": staff_id, "actor": actor},
        )
        return staff_id

    async def update(self, staff_id: StaffId, fields: StaffFields, actor: str | None) -> StaffId:
        if await self.staff.update(staff_id, fields, actor) == 0:
            raise ResourceNotFoundError(STAFF_NOT_FOUND_MESSAGE, "staff", staff_id)
        await self.db.commit()
        logger.info(
            f"Staff {staff_id} updated", extra={"staff_id": staff_id, "actor": actor},
        )
        return staff_id

    async def archive(self, staff_id: StaffId, actor: str | None) -> StaffId:
        if await self.staff.set_archived(staff_id, True, actor) == 0:
            raise ResourceNotFoundError(
                "Staff member not found or already archived.", "staff", staff_id,
            )
        await self.db.commit()
        logger.info(
            f"Staff {staff_id} archived", extra={"staff_id": staff_id, "actor": actor},
        )
        return staff_id

    async def restore(self, staff_id: StaffId, actor: str | None) -> StaffId:
        staff = await self.staff.get(staff_id)
        if staff is None or not staff.is_archived:
            raise ResourceNotFoundError(
                "Staff member not found or not archived.", "staff", staff_id,
            )
        if await self.staff.active_name_taken(staff.name, exclude_id=staff_id):
            raise ConflictError(duplicate_name_message(staff.name))
        if await self.staff.set_archived(staff_id, False, actor) == 0:
            raise ResourceNotFoundError(
                "Staff member not found or not archived.", "staff", staff_id,
            )
        await self.db.commit()
        logger.info(
            f"Staff {staff_id} restored", extra={"staff_id": staff_id, "actor": actor},
        )
        return staff_id
