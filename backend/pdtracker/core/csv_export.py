"""CSV Export - flatten listed PD rows into the spreadsheet layout.

Invariants:
    - Header order: StartDate, Staff, Area, Venue, Title, Hours, Total, Accrual
    - Dates rendered DD/MM/YYYY; staff name prefers the current name over the snapshot
    - Quoting handled by the csv module (QUOTE_MINIMAL)
"""

import csv
import io
from typing import Iterable

from pdtracker.core.formatting import format_date_dmy

CSV_HEADER = ("StartDate", "Staff", "Area", "Venue", "Title", "Hours", "Total", "Accrual")


def row_to_csv_fields(row: dict) -> list[str]:
    staff_name = row.get("StaffNameCurrent") or row.get("StaffNameSnapshot") or ""
    hours = row.get("Hours")
    total = row.get("Total")
    return [
        format_date_dmy(row.get("StartDate")),
        staff_name,
        row.get("AreaName") or "",
        row.get("VenueDisplay") or "",
        row.get("Title") or "",
        "" if hours is None else str(hours),
        "" if total is None else str(total),
        "Yes" if row.get("IsAccrual") else "No",
    ]


def render_csv(rows: Iterable[dict]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow(row_to_csv_fields(row))
    return buffer.getvalue()
