"""PD Record ORM - one professional-development activity attended by one staff member.

Invariants:
    - staff_name_snapshot is captured at creation and never rewritten
    - staff_id is nullable: historical rows may predate the roster
    - venue_id XOR venue_other for non-deleted rows (enforced by core/venue_rule.py)
    - total = crt + enrol + other, recomputed by the writer
    - Soft delete only: is_deleted/deleted_at/deleted_by, row kept

Design Decisions:
    - Numeric(p, 2) for hours and money: exact two-decimal arithmetic
    - No relationship() attributes: list queries join explicitly and return flat rows
"""

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean, Date, DateTime, ForeignKey, Index, Integer, Numeric, String,
)
from sqlalchemy.orm import Mapped, mapped_column

from pdtracker.db.base import Base


class PDRecord(Base):
    __tablename__ = "pd_records"
    __table_args__ = (
        Index("ix_pd_records_start_date", "start_date"),
        Index("ix_pd_records_staff_id", "staff_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    meeting_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    staff_id: Mapped[int | None] = mapped_column(
        ForeignKey("staff.id"), nullable=True,
    )
    staff_name_snapshot: Mapped[str] = mapped_column(String(200), nullable=False)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    area_id: Mapped[int] = mapped_column(ForeignKey("areas.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(300), nullable=False)

    venue_id: Mapped[int | None] = mapped_column(
        ForeignKey("venues.id"), nullable=True,
    )
    venue_other: Mapped[str | None] = mapped_column(String(200), nullable=True)

    hours: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)
    crt: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0.00"),
    )
    enrol: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0.00"),
    )
    other: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0.00"),
    )
    total: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0.00"),
    )
    is_accrual: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    accrual_hours: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    deleted_by: Mapped[str | None] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    modified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    modified_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
