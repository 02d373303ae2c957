"""Lookup Routes - venues, areas, sectors and sites for the entry and filter forms."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pdtracker.infrastructure.database import get_db
from pdtracker.services.lookup_repository import LookupRepository

router = APIRouter(prefix="/api", tags=["lookups"])


@router.get("/venues")
async def list_venues(db: AsyncSession = Depends(get_db)):
    return {"ok": True, "venues": await LookupRepository(db).venues()}


@router.get("/lookups")
async def list_lookups(db: AsyncSession = Depends(get_db)):
    repo = LookupRepository(db)
    return {
        "ok": True,
        "areas": await repo.areas(),
        "sectors": await repo.sectors(),
        "sites": await repo.sites(),
    }
