"""Request Schemas - presence tracking for edits, aliases for staff and bulk entry.

Invariants:
    - A key sent as null is Present(None); a key not sent is ABSENT
    - Unknown keys are ignored
    - TONumber is accepted as an alias of tonumber
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pdtracker.core.field_presence import ABSENT, Present
from pdtracker.schemas.pdrecord import BulkRecordCreate, RecordPatch
from pdtracker.schemas.staff import StaffWrite


# --- RecordPatch --------------------------------------------------------------

def test_patch_tracks_explicit_null_separately_from_absent():
    changes = RecordPatch.model_validate({"VenueID": None, "Title": "PD"}).to_changes()
    assert changes.venue_id == Present(None)
    assert changes.title == Present("PD")
    assert changes.venue_other is ABSENT
    assert changes.hours is ABSENT


def test_patch_ignores_unknown_keys():
    changes = RecordPatch.model_validate({"IsDeleted": True, "StaffID": 3}).to_changes()
    assert changes.is_empty


def test_patch_parses_dates_and_amounts():
    changes = RecordPatch.model_validate(
        {"StartDate": "2025-06-01", "CRT": "12.50"},
    ).to_changes()
    assert changes.start_date == Present(date(2025, 6, 1))
    assert changes.crt == Present(Decimal("12.50"))


def test_patch_rejects_negative_hours():
    with pytest.raises(ValidationError):
        RecordPatch.model_validate({"Hours": -2})


def test_patch_rejects_non_positive_area():
    with pytest.raises(ValidationError):
        RecordPatch.model_validate({"AreaID": 0})


@pytest.mark.parametrize("payload", [
    {"Hours": "10000"},
    {"Enrol": "100000000"},
    {"VenueID": 2_147_483_648},
])
def test_patch_rejects_values_beyond_columns(payload):
    with pytest.raises(ValidationError):
        RecordPatch.model_validate(payload)


# --- BulkRecordCreate ---------------------------------------------------------

def test_bulk_entry_from_form_keys():
    body = BulkRecordCreate.model_validate({
        "startDate": "2025-06-01",
        "areaId": 2,
        "title": "Coaching",
        "venueOther": "Hall",
        "hours": "1.5",
        "staffIds": [4, 4, 5],
        "isAccrual": True,
    })
    entry = body.to_entry()
    assert entry.staff_ids == (4, 4, 5)
    assert entry.venue_id is None
    assert entry.venue_other == "Hall"
    assert entry.is_accrual is True
    assert entry.crt is None


def test_bulk_entry_requires_staff():
    with pytest.raises(ValidationError):
        BulkRecordCreate.model_validate({
            "startDate": "2025-06-01", "areaId": 2, "title": "X",
            "hours": 1, "staffIds": [],
        })


# --- StaffWrite ---------------------------------------------------------------

def test_staff_tonumber_alias():
    fields = StaffWrite.model_validate({"name": "Gil", "TONumber": "88"}).to_fields()
    assert fields.tonumber == 88


def test_staff_lowercase_tonumber():
    fields = StaffWrite.model_validate({"name": "Gil", "tonumber": 9}).to_fields()
    assert fields.tonumber == 9


def test_staff_ignores_unknown_keys():
    fields = StaffWrite.model_validate({"name": "Gil", "IsArchived": True}).to_fields()
    assert fields.name == "Gil"
