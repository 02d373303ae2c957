"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - RecordId, StaffId, AreaId, VenueId wrap positive ints
    - Money and hour values are Decimals quantized to two places
    - Filter operators encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", int)
StaffId = NewType("StaffId", int)
AreaId = NewType("AreaId", int)
VenueId = NewType("VenueId", int)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_PAGE = 1
MAX_PAGE = 1_000_000
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200
DEFAULT_ROWS_PER_CERTIFICATE_PAGE = 18
UNKNOWN_STAFF_NAME = "Unknown Staff"

TWO_PLACES = Decimal("0.01")
MAX_HOURS = Decimal("9999.99")
MAX_AMOUNT = Decimal("99999999.99")
MAX_INT32 = 2_147_483_647


def quantize_2dp(value: Decimal) -> Decimal:
    """Round to two decimal places, half-up."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


# ─── Enums ───────────────────────────────────────────────────────

class ClauseOp(str, Enum):
    """Predicate operators the record query can emit."""
    EQ = "eq"
    GTE = "gte"
    LTE = "lte"
    CONTAINS_CI = "contains_ci"


class RecordField(str, Enum):
    """Filterable PD record columns."""
    IS_DELETED = "is_deleted"
    START_DATE = "start_date"
    STAFF_ID = "staff_id"
    AREA_ID = "area_id"
    VENUE_ID = "venue_id"
    IS_ACCRUAL = "is_accrual"
    TITLE = "title"
