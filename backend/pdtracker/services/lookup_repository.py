"""Lookup Repository - read-only reference lists for the entry and filter forms."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pdtracker.models.lookups import Area, Sector, Site, Venue


class LookupRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _named(self, model, id_key: str, name_key: str) -> list[dict]:
        result = await self.db.execute(
            select(model.id, model.name).order_by(model.name),
        )
        return [{id_key: row.id, name_key: row.name} for row in result]

    async def venues(self) -> list[dict]:
        return await self._named(Venue, "VenueID", "VenueName")

    async def areas(self) -> list[dict]:
        return await self._named(Area, "AreaID", "AreaName")

    async def sectors(self) -> list[dict]:
        return await self._named(Sector, "SectorID", "SectorName")

    async def sites(self) -> list[dict]:
        return await self._named(Site, "SiteID", "SiteName")
