import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from taskmaster.auth.deps import get_current_identity
from taskmaster.auth.identity import Identity
from taskmaster.db import get_db
from taskmaster.models.task import Task
from taskmaster.schemas.common import MessageOut
from taskmaster.schemas.tasks import TaskCreateIn, TaskOut, TaskUpdateIn
from taskmaster.services import tasks as task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])

def to_task_out(t: Task) -> TaskOut:
    return TaskOut.model_validate(t)

@router.get("", response_model=list[TaskOut])
def list_tasks(
    search: str | None = Query(default=None, max_length=200),
    caller: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> list[TaskOut]:
    rows = task_service.list_tasks(db, caller, search=search)
    return [to_task_out(r) for r in rows]

@router.post("", response_model=TaskOut, status_code=201)
def create_task(
    payload: TaskCreateIn,
    caller: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> TaskOut:
    t = task_service.create_task(
        db,
        caller,
        title=payload.title,
        description=payload.description,
        assigned_to_id=payload.assigned_to_id,
    )
    return to_task_out(t)

@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: uuid.UUID,
    caller: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> TaskOut:
    return to_task_out(task_service.get_task(db, caller, task_id))

@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: uuid.UUID,
    payload: TaskUpdateIn,
    caller: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> TaskOut:
    # only what the client sent; an explicit null is still "sent"
    changes = payload.model_dump(exclude_unset=True)
    t = task_service.update_task(db, caller, task_id, changes)
    return to_task_out(t)

@router.delete("/{task_id}", response_model=MessageOut)
def delete_task(
    task_id: uuid.UUID,
    caller: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> MessageOut:
    task_service.delete_task(db, caller, task_id)
    return MessageOut(message="task deleted successfully")
