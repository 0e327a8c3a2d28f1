import uuid
from datetime import datetime
from typing import Any

from pydantic import SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel

from taskmaster.models.enums import HistoryAction, Role, TaskStatus
from taskmaster.schemas.common import CamelModel

DIFF_PAIRS: tuple[tuple[str, str], ...] = (
    ("previous_title", "new_title"),
    ("previous_desc", "new_desc"),
    ("previous_status", "new_status"),
    ("previous_assignee", "new_assignee"),
)

def _drop(data: dict[str, Any], names: list[str]) -> dict[str, Any]:
    # keys are aliased or not depending on the dump call
    for name in names:
        data.pop(name, None)
        data.pop(to_camel(name), None)
    return data

class HistoryActorOut(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    role: Role | None = None

    @model_serializer(mode="wrap")
    def omit_missing_role(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return _drop(handler(self), [] if self.role is not None else ["role"])

class HistoryTaskOut(CamelModel):
    id: uuid.UUID
    title: str
    status: TaskStatus

class HistoryOut(CamelModel):
    id: uuid.UUID
    task_id: uuid.UUID
    user_id: uuid.UUID
    action: HistoryAction
    timestamp: datetime

    previous_title: str | None = None
    new_title: str | None = None
    previous_desc: str | None = None
    new_desc: str | None = None
    previous_status: TaskStatus | None = None
    new_status: TaskStatus | None = None
    previous_assignee: uuid.UUID | None = None
    new_assignee: uuid.UUID | None = None

    user: HistoryActorOut
    task: HistoryTaskOut | None = None

    @model_serializer(mode="wrap")
    def omit_untouched_pairs(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        """
        Leave out diff pairs the row never touched.

        A pair is written as a whole once either half is set, so an
        unassignment shows ``newAssignee: null`` next to the old assignee.
        """
        untouched = [
            name
            for pair in DIFF_PAIRS
            if all(getattr(self, name) is None for name in pair)
            for name in pair
        ]
        if self.task is None:
            untouched.append("task")
        return _drop(handler(self), untouched)

class DeletionLogOut(CamelModel):
    id: uuid.UUID
    task_id: uuid.UUID
    deleted_at: datetime
    title: str
    description: str
    status: TaskStatus
    assignee_id: uuid.UUID | None
    created_by_id: uuid.UUID
    task_created_at: datetime
    deleted_by: HistoryActorOut
