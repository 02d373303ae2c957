"""Initial schema - lookups, staff, pd_records.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LOOKUP_TABLES = (("areas", 100), ("venues", 200), ("sectors", 50), ("sites", 100))


def upgrade() -> None:
    for table, length in LOOKUP_TABLES:
        op.create_table(
            table,
            sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("name", sa.String(length), nullable=False, unique=True),
        )

    op.create_table(
        "staff",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("campus1", sa.String(100), nullable=True),
        sa.Column("campus2", sa.String(100), nullable=True),
        sa.Column("position", sa.String(100), nullable=True),
        sa.Column("sector", sa.String(50), nullable=True),
        sa.Column("tonumber", sa.Integer, nullable=True),
        sa.Column("is_archived", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("modified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("modified_by", sa.String(128), nullable=True),
    )
    op.create_index(
        "uq_staff_active_name", "staff", ["name"], unique=True,
        postgresql_where=sa.text("NOT is_archived"),
        sqlite_where=sa.text("NOT is_archived"),
    )

    op.create_table(
        "pd_records",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("meeting_id", sa.String(100), nullable=True),
        sa.Column("staff_id", sa.Integer, sa.ForeignKey("staff.id"), nullable=True),
        sa.Column("staff_name_snapshot", sa.String(200), nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=True),
        sa.Column("area_id", sa.Integer, sa.ForeignKey("areas.id"), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("venue_id", sa.Integer, sa.ForeignKey("venues.id"), nullable=True),
        sa.Column("venue_other", sa.String(200), nullable=True),
        sa.Column("hours", sa.Numeric(6, 2), nullable=False),
        sa.Column("crt", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("enrol", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("other", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("total", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("is_accrual", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("accrual_hours", sa.Numeric(6, 2), nullable=True),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_by", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("modified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("modified_by", sa.String(128), nullable=True),
    )
    op.create_index("ix_pd_records_start_date", "pd_records", ["start_date"])
    op.create_index("ix_pd_records_staff_id", "pd_records", ["staff_id"])


def downgrade() -> None:
    op.drop_index("ix_pd_records_staff_id", table_name="pd_records")
    op.drop_index("ix_pd_records_start_date", table_name="pd_records")
    op.drop_table("pd_records")
    op.drop_index("uq_staff_active_name", table_name="staff")
    op.drop_table("staff")
    for table, _ in reversed(LOOKUP_TABLES):
        op.drop_table(table)
