from contextlib import contextmanager

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.exc import OperationalError

from taskmaster.errors import InternalError
from taskmaster.models.enums import TaskStatus
from taskmaster.models.task import Task
from taskmaster.models.task_deletion_log import TaskDeletionLog
from taskmaster.models.task_history import TaskHistory
from taskmaster.services import tasks as task_service

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def count(db, model) -> int:
    return db.scalar(select(func.count()).select_from(model)) or 0

@contextmanager
def failing_insert(model):
    def _boom(mapper, connection, target):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    event.listen(model, "before_insert", _boom)
    try:
        yield
    finally:
        event.remove(model, "before_insert", _boom)

def test_create_rolls_back_task_when_history_insert_fails(client, db_session, lead_jwt):
    with failing_insert(TaskHistory):
        r = client.post("/tasks", json={"title": "t", "description": "d"}, headers=auth(lead_jwt))

    assert r.status_code == 500
    assert r.json() == {"detail": "could not save changes"}
    assert count(db_session, Task) == 0
    assert count(db_session, TaskHistory) == 0

def test_update_rolls_back_task_when_history_insert_fails(client, db_session, lead_jwt):
    r = client.post("/tasks", json={"title": "t", "description": "d"}, headers=auth(lead_jwt))
    task_id = r.json()["id"]

    with failing_insert(TaskHistory):
        r = client.put(f"/tasks/{task_id}", json={"status": "DONE", "title": "new"}, headers=auth(lead_jwt))
    assert r.status_code == 500

    r = client.get(f"/tasks/{task_id}", headers=auth(lead_jwt))
    assert r.json()["status"] == "NOT_STARTED"
    assert r.json()["title"] == "t"
    assert count(db_session, TaskHistory) == 1

def test_delete_keeps_everything_when_log_insert_fails(client, db_session, lead_jwt):
    r = client.post("/tasks", json={"title": "t", "description": "d"}, headers=auth(lead_jwt))
    task_id = r.json()["id"]

    with failing_insert(TaskDeletionLog):
        r = client.delete(f"/tasks/{task_id}", headers=auth(lead_jwt))
    assert r.status_code == 500

    assert client.get(f"/tasks/{task_id}", headers=auth(lead_jwt)).status_code == 200
    assert count(db_session, TaskHistory) == 1
    assert count(db_session, TaskDeletionLog) == 0

def test_service_raises_internal_error_and_session_stays_usable(db_session, lead_identity):
    with failing_insert(TaskHistory):
        with pytest.raises(InternalError):
            task_service.create_task(db_session, lead_identity, title="t", description="d")

    task = task_service.create_task(db_session, lead_identity, title="t2", description="d2")
    assert task.status == TaskStatus.NOT_STARTED
    assert count(db_session, Task) == 1
    assert count(db_session, TaskHistory) == 1
