"""Staff Routes - roster list, create, update, archive (DELETE) and restore.

Invariants:
    - DELETE archives; staff rows are never removed
    - Path ids must be positive integers (400 otherwise)
    - Actor comes from the X-Actor header, falling back to settings.default_staff_actor
"""

import logging

from fastapi import APIRouter, Depends, Header, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from pdtracker.config import Settings, get_settings
from pdtracker.core.parse_params import blank_to_none
from pdtracker.core.roster_filters import parse_roster_filters
from pdtracker.infrastructure.database import get_db
from pdtracker.schemas.staff import StaffWrite
from pdtracker.services.roster_service import RosterService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/staff", tags=["staff"])


def staff_actor(
    x_actor: str | None = Header(None, alias="X-Actor"),
    settings: Settings = Depends(get_settings),
) -> str:
    return blank_to_none(x_actor) or settings.default_staff_actor


@router.get("")
async def list_staff(
    include_archived: str | None = Query(None, alias="includeArchived"),
    search: str | None = Query(None),
    campus: str | None = Query(None),
    campuses: str | None = Query(None),
    position: str | None = Query(None),
    positions: str | None = Query(None),
    sector: str | None = Query(None),
    sectors: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    filters = parse_roster_filters(
        include_archived=include_archived,
        search=search,
        campus=campus or campuses,
        position=position or positions,
        sector=sector or sectors,
    )
    staff = await RosterService(db).list(filters)
    return {"ok": True, "staff": staff}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_staff(
    body: StaffWrite,
    actor: str = Depends(staff_actor),
    db: AsyncSession = Depends(get_db),
):
    staff_id = await RosterService(db).create(body.to_fields(), actor)
    return {"ok": True, "staffId": staff_id}


@router.put("/{staff_id}")
async def update_staff(
    body: StaffWrite,
    staff_id: int = Path(gt=0),
    actor: str = Depends(staff_actor),
    db: AsyncSession = Depends(get_db),
):
    await RosterService(db).update(staff_id, body.to_fields(), actor)
    return {"ok": True, "staffId": staff_id}


@router.delete("/{staff_id}")
async def archive_staff(
    staff_id: int = Path(gt=0),
    actor: str = Depends(staff_actor),
    db: AsyncSession = Depends(get_db),
):
    await RosterService(db).archive(staff_id, actor)
    return {"ok": True, "staffId": staff_id}


@router.patch("/{staff_id}/restore")
async def restore_staff(
    staff_id: int = Path(gt=0),
    actor: str = Depends(staff_actor),
    db: AsyncSession = Depends(get_db),
):
    await RosterService(db).restore(staff_id, actor)
    return {"ok": True, "staffId": staff_id}
