"""Staff Repository - SQLAlchemy implementation of the StaffStore contract.

Invariants:
    - Active-name uniqueness is checked before writing AND enforced by the
      partial unique index; an IntegrityError from that index becomes ConflictError
    - update/set_archived return rowcount (0 = missing or wrong archive state)
    - Archiving never touches pd_records
    - Never commits; RosterService owns the transaction
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pdtracker.core.errors import ConflictError
from pdtracker.core.roster_filters import RosterFilters, StaffFields
from pdtracker.models.staff import Staff

logger = logging.getLogger(__name__)


def duplicate_name_message(name: str) -> str:
    return f"An active staff member named '{name}' already exists."


def staff_to_row(staff: Staff) -> dict:
    return {
        "StaffID": staff.id,
        "Name": staff.name,
        "Campus1": staff.campus1,
        "Campus2": staff.campus2,
        "Position": staff.position,
        "Sector": staff.sector,
        "TONumber": staff.tonumber,
        "IsArchived": staff.is_archived,
        "ArchivedAt": staff.archived_at,
        "ModifiedAt": staff.modified_at,
        "ModifiedBy": staff.modified_by,
    }


class StaffRepository:
    """Staff roster persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_staff(self, filters: RosterFilters) -> list[dict]:
        stmt = select(Staff)
        if not filters.include_archived:
            stmt = stmt.where(Staff.is_archived.is_(False))
        if filters.search:
            stmt = stmt.where(
                func.lower(Staff.name).contains(filters.search.lower(), autoescape=True),
            )
        if filters.campuses:
            stmt = stmt.where(or_(
                Staff.campus1.in_(filters.campuses),
                Staff.campus2.in_(filters.campuses),
            ))
        if filters.positions:
            stmt = stmt.where(Staff.position.in_(filters.positions))
        if filters.sectors:
            stmt = stmt.where(Staff.sector.in_(filters.sectors))
        stmt = stmt.order_by(Staff.name, Staff.id)

        result = await self.db.execute(stmt)
        return [staff_to_row(s) for s in result.scalars()]

    async def get(self, staff_id: int) -> Staff | None:
        return await self.db.get(Staff, staff_id)

    async def active_name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        stmt = select(Staff.id).where(Staff.name == name, Staff.is_archived.is_(False))
        if exclude_id is not None:
            stmt = stmt.where(Staff.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def active_names(self, staff_ids: list[int]) -> dict[int, str]:
        """Current names for the given ids, skipping missing and archived staff."""
        if not staff_ids:
            return {}
        result = await self.db.execute(
            select(Staff.id, Staff.name).where(
                Staff.id.in_(staff_ids), Staff.is_archived.is_(False),
            ),
        )
        return {row.id: row.name for row in result}

    async def create(self, fields: StaffFields, actor: str | None) -> int:
        if await self.active_name_taken(fields.name):
            raise ConflictError(duplicate_name_message(fields.name))
        staff = Staff(
            name=fields.name,
            campus1=fields.campus1,
            campus2=fields.campus2,
            position=fields.position,
            sector=fields.sector,
            tonumber=fields.tonumber,
            modified_at=datetime.now(timezone.utc),
            modified_by=actor,
        )
        self.db.add(staff)
        await self._flush_unique(fields.name)
        return staff.id

    async def update(self, staff_id: int, fields: StaffFields, actor: str | None) -> int:
        if await self.get(staff_id) is None:
            return 0
        if await self.active_name_taken(fields.name, exclude_id=staff_id):
            raise ConflictError(duplicate_name_message(fields.name))
        stmt = (
            update(Staff)
            .where(Staff.id == staff_id)
            .values(
                name=fields.name,
                campus1=fields.campus1,
                campus2=fields.campus2,
                position=fields.position,
                sector=fields.sector,
                tonumber=fields.tonumber,
                modified_at=datetime.now(timezone.utc),
                modified_by=actor,
            )
            .execution_options(synchronize_session=False)
        )
        return await self._execute_unique(stmt, fields.name)

    async def set_archived(self, staff_id: int, archived: bool, actor: str | None) -> int:
        """Flip the archive flag; rows already in the target state are not counted."""
        now = datetime.now(timezone.utc)
        stmt = (
            update(Staff)
            .where(Staff.id == staff_id, Staff.is_archived.is_(not archived))
            .values(
                is_archived=archived,
                archived_at=now if archived else None,
                modified_at=now,
                modified_by=actor,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def _flush_unique(self, name: str) -> None:
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.warning(f"Staff name collision on flush: {e.orig}")
            raise ConflictError(duplicate_name_message(name))

    async def _execute_unique(self, stmt, name: str) -> int:
        try:
            result = await self.db.execute(stmt)
        except IntegrityError as e:
            logger.warning(f"Staff name collision on update: {e.orig}")
            raise ConflictError(duplicate_name_message(name))
        return result.rowcount

