"""Request Dependencies - shared query-string and header parsing for routes.

Invariants:
    - Record filters are parsed once, leniently, into a RecordQuery; listing,
      certificates and CSV export receive identical predicates
    - The acting user comes from the X-User header (None when absent or blank)
"""

from fastapi import Depends, Header, Query

from pdtracker.config import Settings, get_settings
from pdtracker.core.parse_params import blank_to_none
from pdtracker.core.record_query import (
    RecordQuery,
    build_record_query,
    parse_record_filters,
)


def record_query(
    date_from: str | None = Query(None, alias="from"),
    date_to: str | None = Query(None, alias="to"),
    staff_id: str | None = Query(None, alias="staffId"),
    area_id: str | None = Query(None, alias="areaId"),
    venue_id: str | None = Query(None, alias="venueId"),
    accrual: str | None = Query(None),
    q: str | None = Query(None),
    page: str | None = Query(None),
    page_size: str | None = Query(None, alias="pageSize"),
    settings: Settings = Depends(get_settings),
) -> RecordQuery:
    filters = parse_record_filters(
        date_from=date_from,
        date_to=date_to,
        staff_id=staff_id,
        area_id=area_id,
        venue_id=venue_id,
        accrual=accrual,
        q=q,
    )
    return build_record_query(
        filters,
        page=page,
        page_size=page_size,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


def current_actor(x_user: str | None = Header(None, alias="X-User")) -> str | None:
    return blank_to_none(x_user)
