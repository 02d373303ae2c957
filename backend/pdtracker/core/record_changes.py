"""Record Changes - the whitelisted, presence-aware field set of a PD record update.

Invariants:
    - Only the twelve editable fields exist here; anything else never reaches the store
    - Each field is ABSENT or Present(value); Present(None) is an explicit null
    - Required columns (StartDate, AreaID, Title, Hours, IsAccrual) reject explicit null
    - CRT / Enrol / Other null means zero; all amounts are >= 0 and two-decimal
    - Amounts fit their columns: hours <= MAX_HOURS, costs <= MAX_AMOUNT
    - total = crt + enrol + other
"""

from dataclasses import dataclass, fields, replace
from datetime import date
from decimal import Decimal

from pdtracker.core.domain_types import MAX_AMOUNT, MAX_HOURS, quantize_2dp
from pdtracker.core.errors import FieldValidationError
from pdtracker.core.field_presence import ABSENT, FieldValue, Present

# attribute name -> wire (JSON) name
WIRE_NAMES: dict[str, str] = {
    "start_date": "StartDate",
    "end_date": "EndDate",
    "area_id": "AreaID",
    "title": "Title",
    "venue_id": "VenueID",
    "venue_other": "VenueOther",
    "hours": "Hours",
    "crt": "CRT",
    "enrol": "Enrol",
    "other": "Other",
    "is_accrual": "IsAccrual",
    "accrual_hours": "AccrualHours",
}

REQUIRED_FIELDS = frozenset({"start_date", "area_id", "title", "hours", "is_accrual"})
ZERO_WHEN_NULL = frozenset({"crt", "enrol", "other"})
AMOUNT_LIMITS: dict[str, Decimal] = {
    "hours": MAX_HOURS,
    "accrual_hours": MAX_HOURS,
    "crt": MAX_AMOUNT,
    "enrol": MAX_AMOUNT,
    "other": MAX_AMOUNT,
}
TOTAL_COMPONENTS = ("crt", "enrol", "other")
VENUE_FIELDS = frozenset({"venue_id", "venue_other"})


@dataclass(frozen=True)
class RecordChanges:
    start_date: FieldValue = ABSENT
    end_date: FieldValue = ABSENT
    area_id: FieldValue = ABSENT
    title: FieldValue = ABSENT
    venue_id: FieldValue = ABSENT
    venue_other: FieldValue = ABSENT
    hours: FieldValue = ABSENT
    crt: FieldValue = ABSENT
    enrol: FieldValue = ABSENT
    other: FieldValue = ABSENT
    is_accrual: FieldValue = ABSENT
    accrual_hours: FieldValue = ABSENT

    def present(self) -> dict[str, object]:
        """Supplied fields and their values, keyed by attribute name."""
        out = {}
        for f in fields(self):
            fv = getattr(self, f.name)
            if isinstance(fv, Present):
                out[f.name] = fv.value
        return out

    @property
    def is_empty(self) -> bool:
        return not self.present()

    @property
    def touches_total(self) -> bool:
        return any(name in self.present() for name in TOTAL_COMPONENTS)

    @classmethod
    def from_mapping(cls, values: dict[str, object]) -> "RecordChanges":
        """Build from attribute-name keys; unknown keys are dropped."""
        known = {f.name for f in fields(cls)}
        return cls(**{
            name: Present(value) for name, value in values.items() if name in known
        })


def _normalize_amount(name: str, value: object) -> Decimal | None:
    if value is None:
        return Decimal("0.00") if name in ZERO_WHEN_NULL else None
    amount = Decimal(str(value))
    if not amount.is_finite():
        raise FieldValidationError(f"{WIRE_NAMES[name]} must be a number", field=WIRE_NAMES[name])
    if amount < 0:
        raise FieldValidationError(
            f"{WIRE_NAMES[name]} must not be negative", field=WIRE_NAMES[name],
        )
    amount = quantize_2dp(amount)
    if amount > AMOUNT_LIMITS[name]:
        raise FieldValidationError(
            f"{WIRE_NAMES[name]} must not exceed {AMOUNT_LIMITS[name]}", field=WIRE_NAMES[name],
        )
    return amount


def normalize_changes(changes: RecordChanges) -> RecordChanges:
    """Validate explicit nulls and normalize values. Raises FieldValidationError."""
    if changes.is_empty:
        raise FieldValidationError("No editable fields provided.")

    updates: dict[str, Present] = {}
    for name, value in changes.present().items():
        wire = WIRE_NAMES[name]
        if value is None and name in REQUIRED_FIELDS:
            raise FieldValidationError(f"{wire} cannot be null", field=wire)
        if name == "title":
            value = str(value).strip()
            if not value:
                raise FieldValidationError("Title is required.", field=wire)
        elif name in AMOUNT_LIMITS:
            value = _normalize_amount(name, value)
        updates[name] = Present(value)
    return replace(changes, **updates)


def compute_total(crt: Decimal | None, enrol: Decimal | None, other: Decimal | None) -> Decimal:
    """Stored Total of the three cost components."""
    parts = [p if p is not None else Decimal("0") for p in (crt, enrol, other)]
    return quantize_2dp(sum(parts, Decimal("0")))


def check_date_order(start_date, end_date) -> None:
    if start_date is not None and end_date is not None and end_date < start_date:
        raise FieldValidationError(
            "EndDate must not be before StartDate", field="EndDate",
        )


@dataclass(frozen=True)
class NewRecordEntry:
    """One bulk-entry submission: shared activity fields + the staff it applies to."""
    staff_ids: tuple[int, ...]
    start_date: date | None
    area_id: int | None
    title: str | None
    hours: Decimal | None
    end_date: date | None = None
    venue_id: int | None = None
    venue_other: str | None = None
    crt: Decimal | None = None
    enrol: Decimal | None = None
    other: Decimal | None = None
    is_accrual: bool = False
    accrual_hours: Decimal | None = None
    meeting_id: str | None = None

    def activity_fields(self) -> dict[str, object]:
        """Per-record columns, keyed like RecordChanges (venue handled separately)."""
        return {
            "start_date": self.start_date,
            "end_date": self.end_date,
            "area_id": self.area_id,
            "title": self.title,
            "hours": self.hours,
            "crt": self.crt,
            "enrol": self.enrol,
            "other": self.other,
            "is_accrual": self.is_accrual,
            "accrual_hours": self.accrual_hours,
        }
