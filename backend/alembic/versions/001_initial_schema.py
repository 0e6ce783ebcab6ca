"""Initial schema: storage_slots, event_logs.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "storage_slots",
        sa.Column("field", sa.String(32), primary_key=True),
        sa.Column("slot_key", sa.LargeBinary(64), primary_key=True),
        sa.Column("value", sa.LargeBinary, nullable=False),
    )

    op.create_table(
        "event_logs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("event", sa.String(32), nullable=False),
        sa.Column("caller", sa.String(42), nullable=False),
        sa.Column("contract_address", sa.String(42), nullable=False),
        sa.Column("topics", sa.JSON, nullable=False),
        sa.Column("data", sa.LargeBinary, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_event_logs_event", "event_logs", ["event"])
    op.create_index("ix_event_logs_caller", "event_logs", ["caller"])


def downgrade() -> None:
    op.drop_index("ix_event_logs_caller", table_name="event_logs")
    op.drop_index("ix_event_logs_event", table_name="event_logs")
    op.drop_table("event_logs")
    op.drop_table("storage_slots")
