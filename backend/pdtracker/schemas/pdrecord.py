"""PD Record Schemas - request bodies for record edit and bulk entry.

Invariants:
    - RecordPatch wire names match the row keys (StartDate, AreaID, VenueOther, ...);
      BulkRecordCreate uses the entry form keys (startDate, areaId, staffIds, ...)
    - Unknown keys are ignored, never rejected
    - RecordPatch keeps presence: a key sent as null differs from a key not sent
    - Amounts are non-negative and fit their columns; ids are positive

Design Decisions:
    - model_fields_set drives presence: Pydantic already tracks which keys
      arrived, so no sentinel defaults are needed on the model itself
"""

from datetime import date
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from pdtracker.core.domain_types import MAX_AMOUNT, MAX_HOURS, MAX_INT32
from pdtracker.core.record_changes import NewRecordEntry, RecordChanges

StaffIdItem = Annotated[int, Field(gt=0, le=MAX_INT32)]


class RecordPatch(BaseModel):
    """Partial update of one PD record."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    start_date: date | None = Field(None, alias="StartDate")
    end_date: date | None = Field(None, alias="EndDate")
    area_id: int | None = Field(None, alias="AreaID", gt=0, le=MAX_INT32)
    title: str | None = Field(None, alias="Title", max_length=300)
    venue_id: int | None = Field(None, alias="VenueID", gt=0, le=MAX_INT32)
    venue_other: str | None = Field(None, alias="VenueOther", max_length=200)
    hours: Decimal | None = Field(None, alias="Hours", ge=0, le=MAX_HOURS)
    crt: Decimal | None = Field(None, alias="CRT", ge=0, le=MAX_AMOUNT)
    enrol: Decimal | None = Field(None, alias="Enrol", ge=0, le=MAX_AMOUNT)
    other: Decimal | None = Field(None, alias="Other", ge=0, le=MAX_AMOUNT)
    is_accrual: bool | None = Field(None, alias="IsAccrual")
    accrual_hours: Decimal | None = Field(None, alias="AccrualHours", ge=0, le=MAX_HOURS)

    def to_changes(self) -> RecordChanges:
        return RecordChanges.from_mapping(
            {name: getattr(self, name) for name in self.model_fields_set},
        )


class BulkRecordCreate(BaseModel):
    """Bulk entry: one activity logged against several staff members."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    staff_ids: list[StaffIdItem] = Field(alias="staffIds", min_length=1)
    start_date: date = Field(alias="startDate")
    end_date: date | None = Field(None, alias="endDate")
    area_id: int = Field(alias="areaId", gt=0, le=MAX_INT32)
    title: str = Field(max_length=300)
    venue_id: int | None = Field(None, alias="venueId", gt=0, le=MAX_INT32)
    venue_other: str | None = Field(None, alias="venueOther", max_length=200)
    hours: Decimal = Field(ge=0, le=MAX_HOURS)
    crt: Decimal | None = Field(None, ge=0, le=MAX_AMOUNT)
    enrol: Decimal | None = Field(None, ge=0, le=MAX_AMOUNT)
    other: Decimal | None = Field(None, ge=0, le=MAX_AMOUNT)
    is_accrual: bool = Field(False, alias="isAccrual")
    accrual_hours: Decimal | None = Field(None, alias="accrualHours", ge=0, le=MAX_HOURS)
    meeting_id: str | None = Field(None, alias="meetingId", max_length=100)

    def to_entry(self) -> NewRecordEntry:
        return NewRecordEntry(
            staff_ids=tuple(self.staff_ids),
            start_date=self.start_date,
            end_date=self.end_date,
            area_id=self.area_id,
            title=self.title,
            venue_id=self.venue_id,
            venue_other=self.venue_other,
            hours=self.hours,
            crt=self.crt,
            enrol=self.enrol,
            other=self.other,
            is_accrual=self.is_accrual,
            accrual_hours=self.accrual_hours,
            meeting_id=self.meeting_id,
        )
