"""Staff ORM - roster of people PD records are logged against.

Invariants:
    - name is unique among non-archived staff (partial unique index)
    - Archiving sets is_archived/archived_at; rows are never deleted
    - PD records keep their own name snapshot; nothing here cascades to them
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from pdtracker.db.base import Base


class Staff(Base):
    __tablename__ = "staff"
    __table_args__ = (
        Index(
            "uq_staff_active_name", "name", unique=True,
            sqlite_where=text("NOT is_archived"),
            postgresql_where=text("NOT is_archived"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    campus1: Mapped[str | None] = mapped_column(String(100), nullable=True)
    campus2: Mapped[str | None] = mapped_column(String(100), nullable=True)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    sector: Mapped[str | None] = mapped_column(String(50), nullable=True)
    tonumber: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_archived: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    archived_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    modified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    modified_by: Mapped[str | None] = mapped_column(String(128), nullable=True)
