"""init schema

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "0001_init"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def upgrade() -> None:
    # enums
    role_create = postgresql.ENUM("LEAD", "TEAM", name="role")
    task_status_create = postgresql.ENUM("NOT_STARTED", "ON_PROGRESS", "DONE", "REJECT", name="task_status")
    history_action_create = postgresql.ENUM("TASK_CREATED", "TASK_UPDATED", "TASK_DELETED", name="history_action")

    role_create.create(op.get_bind(), checkfirst=True)
    task_status_create.create(op.get_bind(), checkfirst=True)
    history_action_create.create(op.get_bind(), checkfirst=True)

    role = postgresql.ENUM("LEAD", "TEAM", name="role", create_type=False)
    task_status = postgresql.ENUM(
        "NOT_STARTED", "ON_PROGRESS", "DONE", "REJECT", name="task_status", create_type=False
    )
    history_action = postgresql.ENUM(
        "TASK_CREATED", "TASK_UPDATED", "TASK_DELETED", name="history_action", create_type=False
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", role, nullable=False, server_default="TEAM"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "tasks",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", task_status, nullable=False, server_default="NOT_STARTED"),
        sa.Column("created_by_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("assigned_to_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_tasks_created_by_id", "tasks", ["created_by_id"])
    op.create_index("ix_tasks_assigned_to_id", "tasks", ["assigned_to_id"])

    op.create_table(
        "task_history",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("task_id", sa.Uuid(), sa.ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("action", history_action, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("previous_title", sa.String(length=300), nullable=True),
        sa.Column("new_title", sa.String(length=300), nullable=True),
        sa.Column("previous_desc", sa.Text(), nullable=True),
        sa.Column("new_desc", sa.Text(), nullable=True),
        sa.Column("previous_status", task_status, nullable=True),
        sa.Column("new_status", task_status, nullable=True),
        sa.Column("previous_assignee", sa.Uuid(), nullable=True),
        sa.Column("new_assignee", sa.Uuid(), nullable=True),
    )
    op.create_index("ix_task_history_task_id", "task_history", ["task_id"])
    op.create_index("ix_task_history_user_id", "task_history", ["user_id"])
    op.create_index("ix_task_history_timestamp", "task_history", ["timestamp"])

def downgrade() -> None:
    op.drop_index("ix_task_history_timestamp", table_name="task_history")
    op.drop_index("ix_task_history_user_id", table_name="task_history")
    op.drop_index("ix_task_history_task_id", table_name="task_history")
    op.drop_table("task_history")

    op.drop_index("ix_tasks_assigned_to_id", table_name="tasks")
    op.drop_index("ix_tasks_created_by_id", table_name="tasks")
    op.drop_table("tasks")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    postgresql.ENUM(name="history_action").drop(op.get_bind(), checkfirst=True)
    postgresql.ENUM(name="task_status").drop(op.get_bind(), checkfirst=True)
    postgresql.ENUM(name="role").drop(op.get_bind(), checkfirst=True)
