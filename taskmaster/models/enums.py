from enum import Enum

class Role(str, Enum):
    LEAD = "LEAD"
    TEAM = "TEAM"

class TaskStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    ON_PROGRESS = "ON_PROGRESS"
    DONE = "DONE"
    REJECT = "REJECT"

class HistoryAction(str, Enum):
    TASK_CREATED = "TASK_CREATED"
    TASK_UPDATED = "TASK_UPDATED"
    TASK_DELETED = "TASK_DELETED"
