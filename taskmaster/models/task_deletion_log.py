import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskmaster.models.base import Base, now_utc
from taskmaster.models.enums import TaskStatus
from taskmaster.models.user import User

class TaskDeletionLog(Base):
    __tablename__ = "task_deletion_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # no fk: the task row is gone by the time this is read
    task_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True, nullable=False)
    deleted_by_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    deleted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, index=True, nullable=False
    )

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[TaskStatus] = mapped_column(Enum(TaskStatus, name="task_status"), nullable=False)
    assignee_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    created_by_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    task_created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    deleted_by: Mapped[User] = relationship()
