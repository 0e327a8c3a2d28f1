import uuid
from datetime import datetime
from typing import Any

from taskmaster.models.enums import TaskStatus
from taskmaster.schemas.common import CamelModel
from taskmaster.schemas.users import UserSummaryOut

# values are checked by the task service, after permissions

class TaskCreateIn(CamelModel):
    title: Any = None
    description: Any = None
    assigned_to_id: Any = None

class TaskUpdateIn(CamelModel):
    # which fields were sent matters, read model_fields_set / exclude_unset
    title: Any = None
    description: Any = None
    status: Any = None
    assigned_to_id: Any = None

class TaskOut(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    status: TaskStatus
    created_by_id: uuid.UUID
    assigned_to_id: uuid.UUID | None
    created_at: datetime
    updated_at: datetime
    created_by: UserSummaryOut
    assigned_to: UserSummaryOut | None
