"""
Task mutations and reads.

Every create/update/delete writes the task change and exactly one
``TaskHistory`` row inside a single commit. Permission and input checks
run before anything is added to the session, so a rejected call leaves
no trace.
"""
from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from taskmaster.auth.identity import Identity
from taskmaster.errors import InternalError, NotFound, ValidationError
from taskmaster.models.base import now_utc
from taskmaster.models.enums import HistoryAction, TaskStatus
from taskmaster.models.task import Task
from taskmaster.models.task_deletion_log import TaskDeletionLog
from taskmaster.models.task_history import TaskHistory
from taskmaster.models.user import User
from taskmaster.rbac.perms import (
    can_create_task,
    can_delete_task,
    can_update_task,
    can_view_task,
    check_role,
    ensure,
)

logger = logging.getLogger(__name__)

# task attribute -> (previous, new) history columns
HISTORY_FIELDS: dict[str, tuple[str, str]] = {
    "title": ("previous_title", "new_title"),
    "description": ("previous_desc", "new_desc"),
    "status": ("previous_status", "new_status"),
    "assigned_to_id": ("previous_assignee", "new_assignee"),
}

@contextmanager
def atomic(db: Session, op: str) -> Iterator[None]:
    """Commit on success; roll back on any failure."""
    try:
        yield
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("%s failed, rolled back", op)
        raise InternalError("could not save changes") from None
    except Exception:
        db.rollback()
        raise

def _require_text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value

def _coerce_status(value: Any) -> TaskStatus:
    if value is None:
        raise ValidationError("status cannot be null")
    try:
        return TaskStatus(value)
    except ValueError:
        raise ValidationError("invalid status value") from None

def _coerce_user_id(value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise ValidationError("invalid user id") from None

def _require_user(db: Session, user_id: Any) -> uuid.UUID:
    user_id = _coerce_user_id(user_id)
    if db.get(User, user_id) is None:
        raise NotFound("assignee user not found")
    return user_id

def _load_task(db: Session, task_id: uuid.UUID) -> Task:
    task = db.get(Task, task_id)
    if task is None:
        raise NotFound("task not found")
    return task

def get_task(db: Session, caller: Identity, task_id: uuid.UUID) -> Task:
    task = _load_task(db, task_id)
    ensure(can_view_task(caller, task))
    return task

def list_tasks(db: Session, caller: Identity, search: str | None = None) -> list[Task]:
    ensure(check_role(caller, "tasks:read"))

    q = select(Task).options(selectinload(Task.created_by), selectinload(Task.assigned_to))
    if not caller.is_lead:
        q = q.where(Task.assigned_to_id == caller.id)

    term = (search or "").strip()
    if term:
        pattern = f"%{term}%"
        q = q.where(or_(Task.title.ilike(pattern), Task.description.ilike(pattern)))

    q = q.order_by(Task.created_at.desc())
    return list(db.scalars(q).all())

def create_task(
    db: Session,
    caller: Identity,
    title: Any,
    description: Any,
    assigned_to_id: Any = None,
) -> Task:
    ensure(can_create_task(caller))

    title = _require_text("title", title)
    description = _require_text("description", description)
    if assigned_to_id is not None:
        assigned_to_id = _require_user(db, assigned_to_id)

    task = Task(
        id=uuid.uuid4(),
        title=title,
        description=description,
        status=TaskStatus.NOT_STARTED,
        created_by_id=caller.id,
        assigned_to_id=assigned_to_id,
    )
    entry = TaskHistory(
        task_id=task.id,
        user_id=caller.id,
        action=HistoryAction.TASK_CREATED,
        new_title=task.title,
        new_desc=task.description,
        new_status=task.status,
        new_assignee=task.assigned_to_id,
    )

    with atomic(db, "create task"):
        db.add(task)
        # task row must exist before its history row references it
        db.flush()
        db.add(entry)

    logger.info("task %s created by %s", task.id, caller.id)
    return task

def _validate_changes(db: Session, changes: Mapping[str, Any]) -> dict[str, Any]:
    clean: dict[str, Any] = {}
    for field, value in changes.items():
        if field in ("title", "description"):
            clean[field] = _require_text(field, value)
        elif field == "status":
            clean[field] = _coerce_status(value)
        elif field == "assigned_to_id":
            clean[field] = None if value is None else _require_user(db, value)
    return clean

def update_task(
    db: Session,
    caller: Identity,
    task_id: uuid.UUID,
    changes: Mapping[str, Any],
) -> Task:
    """
    Apply ``changes`` to a task.

    ``changes`` carries only the fields the caller actually sent. Presence
    is what matters: a TEAM caller sending ``assigned_to_id=None`` is still
    touching the assignment and is refused, and every present field lands
    in the history row even when its value did not change.
    """
    unknown = set(changes) - set(HISTORY_FIELDS)
    if unknown:
        raise ValidationError(f"unknown fields: {', '.join(sorted(unknown))}")

    task = _load_task(db, task_id)
    ensure(can_update_task(caller, task, changes.keys()))
    clean = _validate_changes(db, changes)

    entry = TaskHistory(task_id=task.id, user_id=caller.id, action=HistoryAction.TASK_UPDATED)
    for field, value in clean.items():
        previous_attr, new_attr = HISTORY_FIELDS[field]
        setattr(entry, previous_attr, getattr(task, field))
        setattr(entry, new_attr, value)

    with atomic(db, "update task"):
        for field, value in clean.items():
            setattr(task, field, value)
        task.updated_at = now_utc()
        db.add(task)
        db.add(entry)

    logger.info("task %s updated by %s (%s)", task.id, caller.id, ", ".join(sorted(clean)) or "no fields")
    return task

def delete_task(db: Session, caller: Identity, task_id: uuid.UUID) -> None:
    """
    Delete a task and purge its history.

    The TASK_DELETED row is written and then removed with the rest of the
    task's history; the durable record of the deletion is the
    ``TaskDeletionLog`` snapshot written in the same transaction.
    """
    ensure(can_delete_task(caller))
    task = _load_task(db, task_id)

    entry = TaskHistory(
        task_id=task.id,
        user_id=caller.id,
        action=HistoryAction.TASK_DELETED,
        timestamp=now_utc(),
        previous_title=task.title,
        previous_desc=task.description,
        previous_status=task.status,
        previous_assignee=task.assigned_to_id,
    )

    with atomic(db, "delete task"):
        db.add(entry)
        db.flush()
        db.add(
            TaskDeletionLog(
                task_id=task.id,
                deleted_by_id=caller.id,
                deleted_at=entry.timestamp,
                title=entry.previous_title,
                description=entry.previous_desc,
                status=entry.previous_status,
                assignee_id=entry.previous_assignee,
                created_by_id=task.created_by_id,
                task_created_at=task.created_at,
            )
        )
        db.execute(
            delete(TaskHistory).where(TaskHistory.task_id == task.id),
            execution_options={"synchronize_session": "fetch"},
        )
        db.delete(task)

    logger.info("task %s deleted by %s", task_id, caller.id)
