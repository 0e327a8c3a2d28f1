import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from taskmaster.auth.identity import Identity
from taskmaster.errors import NotFound
from taskmaster.models.task import Task
from taskmaster.models.task_deletion_log import TaskDeletionLog
from taskmaster.models.task_history import TaskHistory
from taskmaster.rbac.perms import can_view_deletions, can_view_task_history, check_role, ensure
from taskmaster.services.pagination import Page, PageRequest

def _page(db: Session, q, count_q, req: PageRequest) -> Page:
    total = db.scalar(count_q) or 0
    items = list(db.scalars(q.offset(req.skip).limit(req.limit)).all())
    return Page(items=items, total=total, page=req.page, limit=req.limit)

def list_for_task(db: Session, caller: Identity, task_id: uuid.UUID, req: PageRequest) -> Page[TaskHistory]:
    task = db.get(Task, task_id)
    if task is None:
        raise NotFound("task not found")
    ensure(can_view_task_history(caller, task))

    q = (
        select(TaskHistory)
        .options(selectinload(TaskHistory.user))
        .where(TaskHistory.task_id == task_id)
        .order_by(TaskHistory.timestamp.desc(), TaskHistory.id.desc())
    )
    count_q = select(func.count()).select_from(TaskHistory).where(TaskHistory.task_id == task_id)
    return _page(db, q, count_q, req)

def list_global(
    db: Session,
    caller: Identity,
    req: PageRequest,
    task_id: uuid.UUID | None = None,
) -> Page[TaskHistory]:
    """
    History across tasks, newest first.

    LEAD sees everything. TEAM sees only rows of tasks currently assigned
    to them; ``task_id`` narrows that set and never widens it.
    """
    ensure(check_role(caller, "history:read"))

    conditions = []
    if task_id is not None:
        conditions.append(TaskHistory.task_id == task_id)
    if not caller.is_lead:
        conditions.append(Task.assigned_to_id == caller.id)

    q = (
        select(TaskHistory)
        .join(Task, Task.id == TaskHistory.task_id)
        .options(selectinload(TaskHistory.user), selectinload(TaskHistory.task))
        .where(*conditions)
        .order_by(TaskHistory.timestamp.desc(), TaskHistory.id.desc())
    )
    count_q = (
        select(func.count())
        .select_from(TaskHistory)
        .join(Task, Task.id == TaskHistory.task_id)
        .where(*conditions)
    )
    return _page(db, q, count_q, req)

def list_deletions(db: Session, caller: Identity, req: PageRequest) -> Page[TaskDeletionLog]:
    ensure(can_view_deletions(caller))

    q = (
        select(TaskDeletionLog)
        .options(selectinload(TaskDeletionLog.deleted_by))
        .order_by(TaskDeletionLog.deleted_at.desc(), TaskDeletionLog.id.desc())
    )
    count_q = select(func.count()).select_from(TaskDeletionLog)
    return _page(db, q, count_q, req)
