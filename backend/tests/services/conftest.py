"""Service test fixtures - async DB, FastAPI test client and seed data.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager points at the test engine so the readiness probe works
    - PDF rendering is replaced by a recorder (WeasyPrint is never loaded)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (the partial unique index on staff names is supported by SQLite too)
"""

from datetime import date
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import pdtracker.infrastructure.database as db_module
from pdtracker.db.base import Base
from pdtracker.infrastructure.database import DatabaseSessionManager, get_db
from pdtracker.main import app
from pdtracker.models import Area, PDRecord, Sector, Site, Staff, Venue


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed(test_db):
    """Lookups, three staff (one archived) and five PD records.

    Records (id order):
        1  Ana    2025-02-10  Curriculum  Main Campus      accrual
        2  Ana    2025-03-05  Wellbeing   "Town Hall"
        3  Bruno  2025-03-20  Curriculum  Online
        4  (unlinked, snapshot "Old Timer") 2024-11-01 Curriculum "Library"
        5  Bruno  2025-04-01  Wellbeing   Main Campus      soft-deleted
    """
    curriculum, wellbeing = Area(name="Curriculum"), Area(name="Wellbeing")
    main_campus, online = Venue(name="Main Campus"), Venue(name="Online")
    ana = Staff(name="Ana Lima", campus1="North", position="Teacher", sector="Primary")
    bruno = Staff(
        name="Bruno Costa", campus1="South", campus2="North",
        position="Coordinator", sector="Secondary",
    )
    carla = Staff(name="Carla Dias", campus1="South", position="Teacher", is_archived=True)
    test_db.add_all([
        curriculum, wellbeing, main_campus, online, ana, bruno, carla,
        Sector(name="Primary"), Sector(name="Secondary"), Site(name="North"),
    ])
    await test_db.flush()

    def record(staff, snapshot, start, area, title, venue=None, venue_other=None, **kw):
        crt = kw.pop("crt", Decimal("0.00"))
        return PDRecord(
            staff_id=staff.id if staff else None,
            staff_name_snapshot=snapshot,
            start_date=start,
            area_id=area.id,
            title=title,
            venue_id=venue.id if venue else None,
            venue_other=venue_other,
            hours=Decimal("2.00"),
            crt=crt,
            total=crt,
            **kw,
        )

    records = [
        record(ana, "Ana Lima", date(2025, 2, 10), curriculum, "Literacy Workshop",
               main_campus, is_accrual=True, crt=Decimal("150.00")),
        record(ana, "Ana Lima", date(2025, 3, 5), wellbeing, "First Aid Refresher",
               venue_other="Town Hall"),
        record(bruno, "Bruno Costa", date(2025, 3, 20), curriculum, "Numeracy 100% Online",
               online),
        record(None, "Old Timer", date(2024, 11, 1), curriculum, "Archive Skills",
               venue_other="Library"),
        record(bruno, "Bruno Costa", date(2025, 4, 1), wellbeing, "Deleted Session",
               main_campus, is_deleted=True),
    ]
    test_db.add_all(records)
    await test_db.commit()

    return {
        "areas": {"curriculum": curriculum, "wellbeing": wellbeing},
        "venues": {"main": main_campus, "online": online},
        "staff": {"ana": ana, "bruno": bruno, "carla": carla},
        "records": records,
    }


@pytest.fixture
def rendered_pdfs(monkeypatch):
    """Replace PDF conversion; returns the list of HTML documents rendered."""
    documents: list[str] = []

    async def fake_render_pdf(html, base_url=None):
        documents.append(html)
        return b"%PDF-1.7 fake"

    monkeypatch.setattr(
        "pdtracker.services.certificate_service.render_pdf", fake_render_pdf,
    )
    return documents
