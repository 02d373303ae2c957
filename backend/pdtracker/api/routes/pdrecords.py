"""PD Record Routes - list, bulk entry, edit, soft delete, certificates and CSV export.

Invariants:
    - /certificates.pdf and /export.csv are declared before /{record_id}
    - Path ids must be positive integers (400 otherwise)
    - Errors propagate as PDTrackerError and are shaped by api/error_handlers.py
"""

import logging

from fastapi import APIRouter, Depends, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from pdtracker.api.dependencies import current_actor, record_query
from pdtracker.config import Settings, get_settings
from pdtracker.core.formatting import dated_filename
from pdtracker.core.record_query import RecordQuery
from pdtracker.infrastructure.database import get_db
from pdtracker.schemas.pdrecord import BulkRecordCreate, RecordPatch
from pdtracker.services.certificate_service import CertificateService
from pdtracker.services.pd_record_repository import PDRecordRepository
from pdtracker.services.record_export import export_csv
from pdtracker.services.record_mutation import RecordMutationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/pdrecords", tags=["pdrecords"])


@router.get("")
async def list_records(
    query: RecordQuery = Depends(record_query),
    db: AsyncSession = Depends(get_db),
):
    repo = PDRecordRepository(db)
    total = await repo.count(query)
    rows = await repo.list_page(query)
    return {
        "page": query.page,
        "pageSize": query.page_size,
        "total": total,
        "rows": rows,
    }


@router.post("")
async def create_records(
    body: BulkRecordCreate,
    actor: str | None = Depends(current_actor),
    db: AsyncSession = Depends(get_db),
):
    inserted = await RecordMutationService(db).create_bulk(body.to_entry(), actor)
    return {"ok": True, "insertedRows": inserted}


@router.get("/certificates.pdf")
async def certificates_pdf(
    query: RecordQuery = Depends(record_query),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    pdf_bytes = await CertificateService(db, settings).build_pdf(query)
    filename = dated_filename("pd-certificates", "pdf")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )


@router.get("/export.csv")
async def export_records_csv(
    query: RecordQuery = Depends(record_query),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    export_query = RecordQuery(query.clauses, 1, settings.export_page_size)
    body = await export_csv(db, export_query, settings.export_max_pages)
    filename = dated_filename("pd-records", "csv")
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.patch("/{record_id}")
async def update_record(
    body: RecordPatch,
    record_id: int = Path(gt=0),
    actor: str | None = Depends(current_actor),
    db: AsyncSession = Depends(get_db),
):
    await RecordMutationService(db).update(record_id, body.to_changes(), actor)
    return {"ok": True}


@router.delete("/{record_id}")
async def delete_record(
    record_id: int = Path(gt=0),
    actor: str | None = Depends(current_actor),
    db: AsyncSession = Depends(get_db),
):
    await RecordMutationService(db).soft_delete(record_id, actor)
    return {"ok": True}
