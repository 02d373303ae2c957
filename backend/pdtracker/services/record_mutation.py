"""Record Mutation Service - validated partial update, soft delete and bulk entry of PD records.

Invariants:
    - Only whitelisted fields reach the UPDATE (RecordChanges)
    - modified_at / modified_by are written in the same statement as the change
    - Zero affected rows -> ResourceNotFoundError (missing or already deleted)
    - Total is recomputed whenever CRT, Enrol or Other changes
    - One commit per operation; any raised error leaves the transaction uncommitted
      (DatabaseSessionManager rolls back)

Design Decisions:
    - Validation order: fields, then record existence, then references (area/venue),
      then cross-field rules (venue, date order)
    - Bulk entry snapshots each staff member's current name at insert time
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from pdtracker.core.domain_types import AreaId, RecordId, VenueId
from pdtracker.core.errors import FieldValidationError, ResourceNotFoundError
from pdtracker.core.record_changes import (
    NewRecordEntry,
    RecordChanges,
    check_date_order,
    compute_total,
    normalize_changes,
)
from pdtracker.core.repository_protocols import RecordStore, StaffStore
from pdtracker.core.venue_rule import VenueState, resolve_new_venue, resolve_venue_write
from pdtracker.services.pd_record_repository import PDRecordRepository
from pdtracker.services.staff_repository import StaffRepository

logger = logging.getLogger(__name__)

RECORD_NOT_FOUND_MESSAGE = "PD record not found."


class RecordMutationService:
    """Writes to pd_records on behalf of the API."""

    def __init__(
        self,
        db: AsyncSession,
        records: RecordStore | None = None,
        staff: StaffStore | None = None,
    ):
        self.db = db
        self.records = records or PDRecordRepository(db)
        self.staff = staff or StaffRepository(db)

    async def update(
        self, record_id: RecordId, changes: RecordChanges, actor: str | None,
    ) -> None:
        normalized = normalize_changes(changes)
        current = await self.records.get_active(record_id)
        if current is None:
            raise ResourceNotFoundError(RECORD_NOT_FOUND_MESSAGE, "pd_record", record_id)

        values = normalized.present()
        if "area_id" in values:
            await self._require_area(values["area_id"])

        venue = resolve_venue_write(
            normalized.venue_id,
            normalized.venue_other,
            VenueState(current.venue_id, current.venue_other),
        )
        if venue.get("venue_id") is not None:
            await self._require_venue(venue["venue_id"])

        check_date_order(
            values.get("start_date", current.start_date),
            values.get("end_date", current.end_date),
        )

        assignments = {
            k: v for k, v in values.items() if k not in ("venue_id", "venue_other")
        }
        assignments.update(venue)
        if normalized.touches_total:
            assignments["total"] = compute_total(
                values.get("crt", current.crt),
                values.get("enrol", current.enrol),
                values.get("other", current.other),
            )

        affected = await self.records.update_active(
            record_id, assignments, datetime.now(timezone.utc), actor,
        )
        if affected == 0:
            raise ResourceNotFoundError(RECORD_NOT_FOUND_MESSAGE, "pd_record", record_id)
        await self.db.commit()
        logger.info(
            f"PD record {record_id} updated: {sorted(assignments)}",
            extra={"record_id": record_id, "actor": actor},
        )

    async def soft_delete(self, record_id: RecordId, actor: str | None) -> None:
        affected = await self.records.soft_delete(
            record_id, datetime.now(timezone.utc), actor,
        )
        if affected == 0:
            raise ResourceNotFoundError(RECORD_NOT_FOUND_MESSAGE, "pd_record", record_id)
        await self.db.commit()
        logger.info(
            f"PD record {record_id} soft-deleted",
            extra={"record_id": record_id, "actor": actor},
        )

    async def create_bulk(self, entry: NewRecordEntry, actor: str | None) -> int:
        """Insert one record per distinct staff id. Returns inserted row count."""
        staff_ids = list(dict.fromkeys(entry.staff_ids))
        if not staff_ids:
            raise FieldValidationError(
                "Select at least one staff member.", field="StaffIDs",
            )
        activity = normalize_changes(
            RecordChanges.from_mapping(entry.activity_fields()),
        ).present()
        await self._require_area(activity["area_id"])
        venue = resolve_new_venue(entry.venue_id, entry.venue_other)
        if venue.venue_id is not None:
            await self._require_venue(venue.venue_id)
        check_date_order(activity["start_date"], activity["end_date"])

        names = await self.staff.active_names(staff_ids)
        unknown = [sid for sid in staff_ids if sid not in names]
        if unknown:
            raise FieldValidationError(
                f"Unknown or archived staff ids: {', '.join(map(str, unknown))}",
                field="StaffIDs",
            )

        now = datetime.now(timezone.utc)
        total = compute_total(activity["crt"], activity["enrol"], activity["other"])
        rows = [
            {
                **activity,
                "meeting_id": entry.meeting_id,
                "staff_id": sid,
                "staff_name_snapshot": names[sid],
                "venue_id": venue.venue_id,
                "venue_other": venue.venue_other,
                "total": total,
                "modified_at": now,
                "modified_by": actor,
            }
            for sid in staff_ids
        ]
        inserted = await self.records.insert_many(rows)
        await self.db.commit()
        logger.info(
            f"Inserted {inserted} PD records",
            extra={"row_count": inserted, "actor": actor},
        )
        return inserted

    async def _require_area(self, area_id: AreaId) -> None:
        if not await self.records.area_exists(area_id):
            raise FieldValidationError(f"Unknown AreaID: {area_id}", field="AreaID")

    async def _require_venue(self, venue_id: VenueId) -> None:
        if not await self.records.venue_exists(venue_id):
            raise FieldValidationError(f"Unknown VenueID: {venue_id}", field="VenueID")
