import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskmaster.models.base import Base, now_utc
from taskmaster.models.enums import HistoryAction, TaskStatus
from taskmaster.models.task import Task
from taskmaster.models.user import User

class TaskHistory(Base):
    """
    One audit row per task mutation. Rows are inserted and never updated;
    they only go away together with their task.
    """

    __tablename__ = "task_history"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    task_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tasks.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), index=True, nullable=False)
    action: Mapped[HistoryAction] = mapped_column(Enum(HistoryAction, name="history_action"), nullable=False)

    # app-side default: microsecond resolution keeps ordering stable
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, index=True, nullable=False
    )

    previous_title: Mapped[str | None] = mapped_column(String(300), nullable=True)
    new_title: Mapped[str | None] = mapped_column(String(300), nullable=True)
    previous_desc: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_desc: Mapped[str | None] = mapped_column(Text, nullable=True)
    previous_status: Mapped[TaskStatus | None] = mapped_column(Enum(TaskStatus, name="task_status"), nullable=True)
    new_status: Mapped[TaskStatus | None] = mapped_column(Enum(TaskStatus, name="task_status"), nullable=True)
    previous_assignee: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    new_assignee: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    user: Mapped[User] = relationship()
    task: Mapped[Task] = relationship()
