"""Certificate Composer - tests for grouping, ordering and pagination.

Tests cover:
    - 25 rows for one staff member at 18 per page -> 2 pages, signature on page 2
    - Empty group -> one empty page
    - Unlinked rows group by snapshot name
    - Group order is accent/case-insensitive and independent of input order
    - Row order inside a group is (start date, record id)
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from pdtracker.core.certificate_composer import (
    CertificateGroup,
    CertificateRow,
    compose_certificate_pages,
    group_rows_by_staff,
    paginate_group,
)


def make_row(record_id, staff_id=1, current="Ana", snapshot="Ana", start=None):
    return CertificateRow(
        record_id=record_id,
        staff_id=staff_id,
        staff_name_snapshot=snapshot,
        staff_name_current=current,
        start_date=start or date(2025, 1, 1),
        area_name="Curriculum",
        venue_display="Main Campus",
        title=f"Session {record_id}",
        hours=Decimal("1.50"),
    )


# ─── paginate_group ─────────────────────────────────────────────

def test_twenty_five_rows_make_two_pages():
    rows = [make_row(i, start=date(2025, 1, 1) + timedelta(days=i)) for i in range(1, 26)]
    pages = compose_certificate_pages(rows, rows_per_page=18)

    assert len(pages) == 2
    assert [len(p.rows) for p in pages] == [18, 7]
    assert pages[0].show_continued and not pages[0].show_signature
    assert pages[1].show_signature and not pages[1].show_continued
    assert pages[1].page_number == 2 and pages[1].page_count == 2


def test_exact_multiple_has_no_empty_trailing_page():
    group = CertificateGroup("1", "Ana", [make_row(i) for i in range(1, 19)])
    pages = paginate_group(group, 18)
    assert len(pages) == 1
    assert pages[0].is_last_page_for_staff


def test_empty_group_yields_one_page():
    pages = paginate_group(CertificateGroup("1", "Ana"), 18)
    assert len(pages) == 1
    assert pages[0].rows == ()
    assert pages[0].show_signature


def test_rows_per_page_below_one_rejected():
    with pytest.raises(ValueError):
        paginate_group(CertificateGroup("1", "Ana"), 0)


def test_no_rows_yields_no_pages():
    assert compose_certificate_pages([]) == []


# ─── group_rows_by_staff ────────────────────────────────────────

def test_current_name_preferred_over_snapshot():
    groups = group_rows_by_staff([make_row(1, current="Ana Lima", snapshot="Ana")])
    assert groups[0].staff_name == "Ana Lima"


def test_unlinked_rows_grouped_by_snapshot():
    rows = [
        make_row(1, staff_id=None, current=None, snapshot="Old Name"),
        make_row(2, staff_id=None, current=None, snapshot="Other Name"),
        make_row(3, staff_id=None, current=None, snapshot="Old Name"),
    ]
    groups = group_rows_by_staff(rows)
    assert [g.key for g in groups] == ["name:Old Name", "name:Other Name"]
    assert [r.record_id for r in groups[0].rows] == [1, 3]


def test_missing_names_fall_back_to_unknown_staff():
    groups = group_rows_by_staff([make_row(1, staff_id=None, current=None, snapshot=None)])
    assert groups[0].staff_name == "Unknown Staff"
    assert groups[0].key == "name:Unknown"


def test_groups_sorted_accent_and_case_insensitively():
    rows = [
        make_row(1, staff_id=1, current="zoe"),
        make_row(2, staff_id=2, current="Éva"),
        make_row(3, staff_id=3, current="adam"),
    ]
    names = [g.staff_name for g in group_rows_by_staff(rows)]
    assert names == ["adam", "Éva", "zoe"]


def test_group_order_independent_of_input_order():
    rows = [make_row(i, staff_id=i, current=n) for i, n in enumerate(["C", "a", "B"], 1)]
    forward = [g.key for g in group_rows_by_staff(rows)]
    backward = [g.key for g in group_rows_by_staff(list(reversed(rows)))]
    assert forward == backward == ["2", "3", "1"]


def test_rows_sorted_by_date_then_id_within_group():
    rows = [
        make_row(9, start=date(2025, 2, 1)),
        make_row(5, start=date(2025, 1, 1)),
        make_row(3, start=date(2025, 2, 1)),
    ]
    group = group_rows_by_staff(rows)[0]
    assert [r.record_id for r in group.rows] == [5, 3, 9]
