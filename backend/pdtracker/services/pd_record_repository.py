"""PD Record Repository - SQLAlchemy implementation of the RecordStore contract.

Invariants:
    - Clause values are always bound parameters (SQLAlchemy expressions, no SQL text)
    - List rows LEFT JOIN staff/area/venue: unlinked historical rows still appear,
      with StaffNameCurrent null
    - update_active/soft_delete only touch non-deleted rows and return rowcount
    - Never commits; the calling service owns the transaction
"""

import logging
from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from pdtracker.core.certificate_composer import CertificateRow
from pdtracker.core.domain_types import ClauseOp, RecordField
from pdtracker.core.record_query import Clause, RecordQuery
from pdtracker.core.venue_rule import venue_display
from pdtracker.models.lookups import Area, Venue
from pdtracker.models.pd_record import PDRecord
from pdtracker.models.staff import Staff

logger = logging.getLogger(__name__)

_COLUMNS = {
    RecordField.IS_DELETED: PDRecord.is_deleted,
    RecordField.START_DATE: PDRecord.start_date,
    RecordField.STAFF_ID: PDRecord.staff_id,
    RecordField.AREA_ID: PDRecord.area_id,
    RecordField.VENUE_ID: PDRecord.venue_id,
    RecordField.IS_ACCRUAL: PDRecord.is_accrual,
    RecordField.TITLE: PDRecord.title,
}


def compile_clause(clause: Clause) -> ColumnElement[bool]:
    """Clause descriptor -> bound SQLAlchemy boolean expression."""
    column = _COLUMNS[clause.field]
    if clause.op is ClauseOp.EQ:
        return column == clause.value
    if clause.op is ClauseOp.GTE:
        return column >= clause.value
    if clause.op is ClauseOp.LTE:
        return column <= clause.value
    if clause.op is ClauseOp.CONTAINS_CI:
        return func.lower(column).contains(
            str(clause.value).lower(), autoescape=True,
        )
    raise ValueError(f"Unsupported clause operator: {clause.op}")


def compile_predicate(query: RecordQuery) -> list[ColumnElement[bool]]:
    return [compile_clause(c) for c in query.clauses]


def _joined_select(*columns):
    return (
        select(*columns)
        .select_from(PDRecord)
        .outerjoin(Staff, Staff.id == PDRecord.staff_id)
        .outerjoin(Area, Area.id == PDRecord.area_id)
        .outerjoin(Venue, Venue.id == PDRecord.venue_id)
    )


def record_to_row(
    record: PDRecord,
    staff_name_current: str | None,
    area_name: str | None,
    venue_name: str | None,
) -> dict:
    """Flat JSON row using the column names the UI expects."""
    return {
        "PDRecordID": record.id,
        "MeetingId": record.meeting_id,
        "StaffID": record.staff_id,
        "StaffNameSnapshot": record.staff_name_snapshot,
        "StaffNameCurrent": staff_name_current,
        "StartDate": record.start_date,
        "EndDate": record.end_date,
        "AreaID": record.area_id,
        "AreaName": area_name,
        "Title": record.title,
        "VenueID": record.venue_id,
        "VenueOther": record.venue_other,
        "VenueDisplay": venue_display(record.venue_id, venue_name, record.venue_other),
        "Hours": record.hours,
        "CRT": record.crt,
        "Enrol": record.enrol,
        "Other": record.other,
        "Total": record.total,
        "IsAccrual": record.is_accrual,
        "AccrualHours": record.accrual_hours,
        "ModifiedAt": record.modified_at,
        "ModifiedBy": record.modified_by,
    }


class PDRecordRepository:
    """PD record persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count(self, query: RecordQuery) -> int:
        stmt = (
            select(func.count())
            .select_from(PDRecord)
            .where(*compile_predicate(query))
        )
        return int((await self.db.execute(stmt)).scalar_one())

    async def list_page(self, query: RecordQuery) -> list[dict]:
        """One page of rows, newest start date first."""
        stmt = (
            _joined_select(
                PDRecord,
                Staff.name.label("staff_name_current"),
                Area.name.label("area_name"),
                Venue.name.label("venue_name"),
            )
            .where(*compile_predicate(query))
            .order_by(PDRecord.start_date.desc(), PDRecord.id.desc())
            .offset(query.offset)
            .limit(query.limit)
        )
        result = await self.db.execute(stmt)
        return [
            record_to_row(
                row.PDRecord, row.staff_name_current, row.area_name, row.venue_name,
            )
            for row in result
        ]

    async def list_certificate_rows(self, query: RecordQuery) -> list[CertificateRow]:
        """All matching rows (page window ignored), ordered by staff, date, id."""
        stmt = (
            _joined_select(
                PDRecord.id,
                PDRecord.staff_id,
                PDRecord.staff_name_snapshot,
                Staff.name.label("staff_name_current"),
                PDRecord.start_date,
                Area.name.label("area_name"),
                PDRecord.venue_id,
                Venue.name.label("venue_name"),
                PDRecord.venue_other,
                PDRecord.title,
                PDRecord.hours,
            )
            .where(*compile_predicate(query))
            .order_by(
                func.coalesce(Staff.name, PDRecord.staff_name_snapshot),
                PDRecord.start_date,
                PDRecord.id,
            )
        )
        result = await self.db.execute(stmt)
        return [
            CertificateRow(
                record_id=row.id,
                staff_id=row.staff_id,
                staff_name_snapshot=row.staff_name_snapshot,
                staff_name_current=row.staff_name_current,
                start_date=row.start_date,
                area_name=row.area_name,
                venue_display=venue_display(
                    row.venue_id, row.venue_name, row.venue_other,
                ),
                title=row.title,
                hours=row.hours,
            )
            for row in result
        ]

    async def get_active(self, record_id: int) -> PDRecord | None:
        result = await self.db.execute(
            select(PDRecord).where(
                PDRecord.id == record_id, PDRecord.is_deleted.is_(False),
            ),
        )
        return result.scalar_one_or_none()

    async def update_active(
        self,
        record_id: int,
        assignments: dict[str, object],
        modified_at: datetime,
        modified_by: str | None,
    ) -> int:
        """Apply assignments + modification stamp in one UPDATE. Returns rowcount."""
        stmt = (
            update(PDRecord)
            .where(PDRecord.id == record_id, PDRecord.is_deleted.is_(False))
            .values(**assignments, modified_at=modified_at, modified_by=modified_by)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def soft_delete(
        self, record_id: int, deleted_at: datetime, deleted_by: str | None,
    ) -> int:
        stmt = (
            update(PDRecord)
            .where(PDRecord.id == record_id, PDRecord.is_deleted.is_(False))
            .values(is_deleted=True, deleted_at=deleted_at, deleted_by=deleted_by)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def insert_many(self, rows: list[dict]) -> int:
        records = [PDRecord(**row) for row in rows]
        self.db.add_all(records)
        await self.db.flush()
        return len(records)

    async def area_exists(self, area_id: int) -> bool:
        result = await self.db.execute(select(Area.id).where(Area.id == area_id))
        return result.scalar_one_or_none() is not None

    async def venue_exists(self, venue_id: int) -> bool:
        result = await self.db.execute(select(Venue.id).where(Venue.id == venue_id))
        return result.scalar_one_or_none() is not None
