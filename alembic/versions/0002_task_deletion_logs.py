"""task deletion log

Revision ID: 0002_task_deletion_logs
Revises: 0001_init
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "0002_task_deletion_logs"
down_revision: Union[str, None] = "0001_init"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def upgrade() -> None:
    task_status = postgresql.ENUM(
        "NOT_STARTED", "ON_PROGRESS", "DONE", "REJECT", name="task_status", create_type=False
    )
    op.create_table(
        "task_deletion_logs",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("task_id", sa.Uuid(), nullable=False),
        sa.Column("deleted_by_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", task_status, nullable=False),
        sa.Column("assignee_id", sa.Uuid(), nullable=True),
        sa.Column("created_by_id", sa.Uuid(), nullable=False),
        sa.Column("task_created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_task_deletion_logs_task_id", "task_deletion_logs", ["task_id"])
    op.create_index("ix_task_deletion_logs_deleted_at", "task_deletion_logs", ["deleted_at"])

def downgrade() -> None:
    op.drop_index("ix_task_deletion_logs_deleted_at", table_name="task_deletion_logs")
    op.drop_index("ix_task_deletion_logs_task_id", table_name="task_deletion_logs")
    op.drop_table("task_deletion_logs")
