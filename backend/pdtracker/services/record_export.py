"""Record Export - every row matching a filter set, walked page by page into CSV.

Invariants:
    - Same predicate as the listing; only the page window changes
    - At most max_pages pages are read (hard cap against runaway exports)
    - A short page ends the walk
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from pdtracker.core.csv_export import render_csv
from pdtracker.core.record_query import RecordQuery
from pdtracker.services.pd_record_repository import PDRecordRepository

logger = logging.getLogger(__name__)


async def collect_rows(
    repo: PDRecordRepository, query: RecordQuery, max_pages: int,
) -> list[dict]:
    rows: list[dict] = []
    for page in range(1, max_pages + 1):
        batch = await repo.list_page(query.for_page(page))
        rows.extend(batch)
        if len(batch) < query.page_size:
            break
    else:
        logger.warning(
            f"CSV export stopped at the {max_pages}-page cap",
            extra={"row_count": len(rows)},
        )
    return rows


async def export_csv(
    db: AsyncSession, query: RecordQuery, max_pages: int,
) -> str:
    rows = await collect_rows(PDRecordRepository(db), query, max_pages)
    logger.info(f"Exported {len(rows)} PD rows to CSV", extra={"row_count": len(rows)})
    return render_csv(rows)
