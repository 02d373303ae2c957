"""Certificate Composer - groups PD rows by staff and paginates them into certificate pages.

Invariants:
    - Group key is the staff id, else "name:<snapshot>" (unlinked rows with different
      snapshot names never share a group)
    - Rows inside a group are ordered by (start date, record id), regardless of input order
    - Groups are ordered by display name, accent- and case-insensitively, independent
      of input order; ties break on exact name then key (deterministic output)
    - Each group yields ceil(n / rows_per_page) pages, and exactly one page when n == 0
    - Only the last page of a group carries the signature block; all others are "continued"

Design Decisions:
    - Pure and synchronous: rendering and PDF conversion live in the shell
      (services/certificate_service.py, infrastructure/pdf_renderer.py)
"""

import unicodedata
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from pdtracker.core.domain_types import (
    DEFAULT_ROWS_PER_CERTIFICATE_PAGE,
    UNKNOWN_STAFF_NAME,
)


@dataclass(frozen=True)
class CertificateRow:
    """One activity line on a certificate."""
    record_id: int
    staff_id: int | None
    staff_name_snapshot: str | None
    staff_name_current: str | None
    start_date: date | None
    area_name: str | None
    venue_display: str | None
    title: str | None
    hours: Decimal | None


@dataclass
class CertificateGroup:
    """All rows for one staff member."""
    key: str
    staff_name: str
    rows: list[CertificateRow] = field(default_factory=list)


@dataclass(frozen=True)
class CertificatePage:
    """One printed page of one staff member's certificate."""
    staff_name: str
    rows: tuple[CertificateRow, ...]
    page_number: int
    page_count: int

    @property
    def is_last_page_for_staff(self) -> bool:
        return self.page_number == self.page_count

    @property
    def show_signature(self) -> bool:
        return self.is_last_page_for_staff

    @property
    def show_continued(self) -> bool:
        return not self.is_last_page_for_staff


def staff_key(row: CertificateRow) -> str:
    if row.staff_id is not None:
        return str(row.staff_id)
    return f"name:{row.staff_name_snapshot or 'Unknown'}"


def staff_display_name(row: CertificateRow) -> str:
    return row.staff_name_current or row.staff_name_snapshot or UNKNOWN_STAFF_NAME


def name_sort_key(name: str) -> str:
    """Accent- and case-insensitive collation key."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold()


def _row_order(row: CertificateRow) -> tuple[date, int]:
    return (row.start_date or date.min, row.record_id)


def group_rows_by_staff(rows: Iterable[CertificateRow]) -> list[CertificateGroup]:
    """Group rows per staff member, sorted by display name."""
    groups: dict[str, CertificateGroup] = {}
    for row in rows:
        key = staff_key(row)
        group = groups.get(key)
        if group is None:
            group = groups[key] = CertificateGroup(key, staff_display_name(row))
        group.rows.append(row)

    for group in groups.values():
        group.rows.sort(key=_row_order)

    return sorted(
        groups.values(),
        key=lambda g: (name_sort_key(g.staff_name), g.staff_name, g.key),
    )


def chunk(rows: list[CertificateRow], size: int) -> list[list[CertificateRow]]:
    return [rows[i:i + size] for i in range(0, len(rows), size)]


def paginate_group(
    group: CertificateGroup,
    rows_per_page: int = DEFAULT_ROWS_PER_CERTIFICATE_PAGE,
) -> list[CertificatePage]:
    """Split one group into pages; an empty group still gets one page."""
    if rows_per_page < 1:
        raise ValueError("rows_per_page must be >= 1")
    chunks = chunk(group.rows, rows_per_page) or [[]]
    return [
        CertificatePage(
            staff_name=group.staff_name,
            rows=tuple(rows),
            page_number=index,
            page_count=len(chunks),
        )
        for index, rows in enumerate(chunks, start=1)
    ]


def paginate_groups(
    groups: Iterable[CertificateGroup],
    rows_per_page: int = DEFAULT_ROWS_PER_CERTIFICATE_PAGE,
) -> list[CertificatePage]:
    pages: list[CertificatePage] = []
    for group in groups:
        pages.extend(paginate_group(group, rows_per_page))
    return pages


def compose_certificate_pages(
    rows: Iterable[CertificateRow],
    rows_per_page: int = DEFAULT_ROWS_PER_CERTIFICATE_PAGE,
) -> list[CertificatePage]:
    """Rows -> ordered page descriptors for the whole document."""
    return paginate_groups(group_rows_by_staff(rows), rows_per_page)
