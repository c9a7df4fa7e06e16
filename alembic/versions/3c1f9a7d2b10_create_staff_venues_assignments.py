"""Create staff, venues and assignments

Revision ID: 3c1f9a7d2b10
Revises:
Create Date: 2026-10-16 10:12:44.201733
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2b10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

VENUE_TYPE_ENUM = "venue_type"
ASSIGNMENT_STATUS_ENUM = "assignment_status"


def upgrade() -> None:
    # --- staff ---
    op.create_table(
        "staff",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("role", sa.String(length=100), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_staff_name"), "staff", ["name"], unique=False)

    # --- venues ---
    op.create_table(
        "venues",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("type", sa.Enum("MARKET", "SHOW", name=VENUE_TYPE_ENUM), nullable=False, server_default="MARKET"),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("town", sa.String(length=100), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("typical_days", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_venues_name_town", "venues", ["name", "town"], unique=False)

    # --- assignments: at most one per (date, staff) ---
    op.create_table(
        "assignments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("staff_id", sa.Uuid(), nullable=False),
        sa.Column("venue_id", sa.Uuid(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=True),
        sa.Column("end_time", sa.String(length=5), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("PLANNED", "CONFIRMED", "CANCELLED", name=ASSIGNMENT_STATUS_ENUM),
            nullable=False,
            server_default="PLANNED",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["staff_id"], ["staff.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["venue_id"], ["venues.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("date", "staff_id", name="uq_assignment_date_staff"),
    )
    op.create_index(op.f("ix_assignments_date"), "assignments", ["date"], unique=False)
    op.create_index(op.f("ix_assignments_staff_id"), "assignments", ["staff_id"], unique=False)
    op.create_index(op.f("ix_assignments_venue_id"), "assignments", ["venue_id"], unique=False)
    op.create_index("ix_assignments_date_venue", "assignments", ["date", "venue_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_assignments_date_venue", table_name="assignments")
    op.drop_index(op.f("ix_assignments_venue_id"), table_name="assignments")
    op.drop_index(op.f("ix_assignments_staff_id"), table_name="assignments")
    op.drop_index(op.f("ix_assignments_date"), table_name="assignments")
    op.drop_table("assignments")

    op.drop_index("ix_venues_name_town", table_name="venues")
    op.drop_table("venues")

    op.drop_index(op.f("ix_staff_name"), table_name="staff")
    op.drop_table("staff")

    # enum types only exist as types on PostgreSQL
    sa.Enum(name=ASSIGNMENT_STATUS_ENUM).drop(op.get_bind(), checkfirst=True)
    sa.Enum(name=VENUE_TYPE_ENUM).drop(op.get_bind(), checkfirst=True)
