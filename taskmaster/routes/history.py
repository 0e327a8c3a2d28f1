import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from taskmaster.auth.deps import get_current_identity
from taskmaster.auth.identity import Identity
from taskmaster.db import get_db
from taskmaster.models.task_deletion_log import TaskDeletionLog
from taskmaster.models.task_history import TaskHistory
from taskmaster.schemas.common import PageOut
from taskmaster.schemas.history import DeletionLogOut, HistoryActorOut, HistoryOut, HistoryTaskOut
from taskmaster.services import history as history_service
from taskmaster.services.pagination import Page, page_request

router = APIRouter(tags=["history"])

def to_history_out(h: TaskHistory, *, with_role: bool = False, with_task: bool = False) -> HistoryOut:
    actor = HistoryActorOut(
        id=h.user.id,
        name=h.user.name,
        email=h.user.email,
        role=h.user.role if with_role else None,
    )
    return HistoryOut(
        id=h.id,
        task_id=h.task_id,
        user_id=h.user_id,
        action=h.action,
        timestamp=h.timestamp,
        previous_title=h.previous_title,
        new_title=h.new_title,
        previous_desc=h.previous_desc,
        new_desc=h.new_desc,
        previous_status=h.previous_status,
        new_status=h.new_status,
        previous_assignee=h.previous_assignee,
        new_assignee=h.new_assignee,
        user=actor,
        task=HistoryTaskOut.model_validate(h.task) if with_task else None,
    )

def to_deletion_out(d: TaskDeletionLog) -> DeletionLogOut:
    return DeletionLogOut(
        id=d.id,
        task_id=d.task_id,
        deleted_at=d.deleted_at,
        title=d.title,
        description=d.description,
        status=d.status,
        assignee_id=d.assignee_id,
        created_by_id=d.created_by_id,
        task_created_at=d.task_created_at,
        deleted_by=HistoryActorOut(id=d.deleted_by.id, name=d.deleted_by.name, email=d.deleted_by.email),
    )

def _envelope(page: Page, items: list, item_type: type) -> PageOut:
    return PageOut[item_type](
        items=items,
        total=page.total,
        page=page.page,
        limit=page.limit,
        has_more=page.has_more,
        total_pages=page.total_pages,
    )

@router.get(
    "/tasks/{task_id}/history",
    response_model=PageOut[HistoryOut],
)
def task_history(
    task_id: uuid.UUID,
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    caller: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> PageOut[HistoryOut]:
    req = page_request(page, limit)
    result = history_service.list_for_task(db, caller, task_id, req)
    return _envelope(result, [to_history_out(h, with_role=True) for h in result.items], HistoryOut)

@router.get(
    "/history",
    response_model=PageOut[HistoryOut],
)
def history(
    task_id: uuid.UUID | None = Query(default=None, alias="taskId"),
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    caller: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> PageOut[HistoryOut]:
    req = page_request(page, limit)
    result = history_service.list_global(db, caller, req, task_id=task_id)
    return _envelope(result, [to_history_out(h, with_task=True) for h in result.items], HistoryOut)

@router.get("/history/deletions", response_model=PageOut[DeletionLogOut])
def deletions(
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    caller: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> PageOut[DeletionLogOut]:
    req = page_request(page, limit)
    result = history_service.list_deletions(db, caller, req)
    return _envelope(result, [to_deletion_out(d) for d in result.items], DeletionLogOut)
