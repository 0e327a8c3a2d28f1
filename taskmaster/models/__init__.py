from taskmaster.models.base import Base
from taskmaster.models.task import Task
from taskmaster.models.task_deletion_log import TaskDeletionLog
from taskmaster.models.task_history import TaskHistory
from taskmaster.models.user import User

__all__ = ["Base", "User", "Task", "TaskHistory", "TaskDeletionLog"]
