"""Record Query Builder - optional filters to a parameterized predicate + page window.

Invariants:
    - The first clause always excludes soft-deleted records
    - One clause per supplied filter, ANDed; omitted/blank filters add nothing
    - Non-integer or non-positive ids are treated as absent
    - page clamped to [1, MAX_PAGE]; page_size clamped to [1, MAX_PAGE_SIZE]
    - Clauses carry values, never SQL text; the repository binds them as parameters

Design Decisions:
    - Pure descriptors (field, op, value) instead of SQLAlchemy expressions:
      core stays free of the ORM and the same RecordQuery drives listing,
      CSV export and certificates
"""

from dataclasses import dataclass
from datetime import date

from pdtracker.core.domain_types import (
    ClauseOp,
    RecordField,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE,
    MAX_PAGE_SIZE,
)
from pdtracker.core.parse_params import (
    blank_to_none,
    clamp,
    parse_date,
    parse_flag,
    parse_int_or_none,
    parse_positive_id,
)


@dataclass(frozen=True)
class Clause:
    """One predicate term: `field <op> value`."""
    field: RecordField
    op: ClauseOp
    value: object


NOT_DELETED = Clause(RecordField.IS_DELETED, ClauseOp.EQ, False)


@dataclass(frozen=True)
class RecordFilters:
    """Parsed filter inputs (all optional)."""
    date_from: date | None = None
    date_to: date | None = None
    staff_id: int | None = None
    area_id: int | None = None
    venue_id: int | None = None
    accrual: bool | None = None
    q: str | None = None


@dataclass(frozen=True)
class RecordQuery:
    """Reusable (predicate, page window) pair."""
    clauses: tuple[Clause, ...]
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    def for_page(self, page: int) -> "RecordQuery":
        """Same predicate, different page."""
        return RecordQuery(
            self.clauses, clamp(page, 1, MAX_PAGE), self.page_size,
        )


def parse_record_filters(
    date_from: object = None,
    date_to: object = None,
    staff_id: object = None,
    area_id: object = None,
    venue_id: object = None,
    accrual: object = None,
    q: object = None,
) -> RecordFilters:
    """Convert raw query-string values into RecordFilters."""
    return RecordFilters(
        date_from=parse_date(date_from, "from"),
        date_to=parse_date(date_to, "to"),
        staff_id=parse_positive_id(staff_id),
        area_id=parse_positive_id(area_id),
        venue_id=parse_positive_id(venue_id),
        accrual=parse_flag(accrual),
        q=blank_to_none(q),
    )


def build_clauses(filters: RecordFilters) -> tuple[Clause, ...]:
    """Predicate clauses for the given filters, not-deleted first."""
    clauses = [NOT_DELETED]
    if filters.date_from is not None:
        clauses.append(Clause(RecordField.START_DATE, ClauseOp.GTE, filters.date_from))
    if filters.date_to is not None:
        clauses.append(Clause(RecordField.START_DATE, ClauseOp.LTE, filters.date_to))
    if filters.staff_id is not None:
        clauses.append(Clause(RecordField.STAFF_ID, ClauseOp.EQ, filters.staff_id))
    if filters.area_id is not None:
        clauses.append(Clause(RecordField.AREA_ID, ClauseOp.EQ, filters.area_id))
    if filters.venue_id is not None:
        clauses.append(Clause(RecordField.VENUE_ID, ClauseOp.EQ, filters.venue_id))
    if filters.accrual is not None:
        clauses.append(Clause(RecordField.IS_ACCRUAL, ClauseOp.EQ, filters.accrual))
    if filters.q:
        clauses.append(Clause(RecordField.TITLE, ClauseOp.CONTAINS_CI, filters.q))
    return tuple(clauses)


def resolve_page(
    page: object,
    page_size: object,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> tuple[int, int]:
    """Clamp raw page/page_size into range, defaulting malformed values."""
    parsed_page = parse_int_or_none(page)
    parsed_size = parse_int_or_none(page_size)
    resolved_page = clamp(
        DEFAULT_PAGE if parsed_page is None else parsed_page, 1, MAX_PAGE,
    )
    resolved_size = clamp(
        default_page_size if parsed_size is None else parsed_size, 1, max_page_size,
    )
    return resolved_page, resolved_size


def build_record_query(
    filters: RecordFilters,
    page: object = None,
    page_size: object = None,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> RecordQuery:
    """Filters + paging into a RecordQuery."""
    resolved_page, resolved_size = resolve_page(
        page, page_size, default_page_size, max_page_size,
    )
    return RecordQuery(build_clauses(filters), resolved_page, resolved_size)
