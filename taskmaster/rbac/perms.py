from collections.abc import Iterable
from dataclasses import dataclass

from taskmaster.auth.identity import Identity
from taskmaster.errors import Forbidden
from taskmaster.models.enums import Role
from taskmaster.models.task import Task

PERMS: dict[str, set[Role]] = {
    "tasks:create": {Role.LEAD},
    "tasks:read": {Role.LEAD, Role.TEAM},
    "tasks:update": {Role.LEAD, Role.TEAM},
    "tasks:delete": {Role.LEAD},

    "history:read": {Role.LEAD, Role.TEAM},
    "history:deletions": {Role.LEAD},

    "users:read": {Role.LEAD, Role.TEAM},
}

# fields a TEAM assignee may touch on update
TEAM_EDITABLE_FIELDS = frozenset({"status", "description"})

@dataclass(frozen=True)
class Allowed:
    pass

@dataclass(frozen=True)
class Denied:
    reason: str

Decision = Allowed | Denied

def check_role(caller: Identity, action: str) -> Decision:
    allowed = PERMS.get(action)
    if allowed is None:
        raise RuntimeError(f"unknown permission action: {action}")
    if caller.role not in allowed:
        return Denied("forbidden")
    return Allowed()

def _is_assignee(caller: Identity, task: Task) -> bool:
    return task.assigned_to_id is not None and task.assigned_to_id == caller.id

def can_create_task(caller: Identity) -> Decision:
    if isinstance(check_role(caller, "tasks:create"), Denied):
        return Denied("only LEAD users can create tasks")
    return Allowed()

def can_view_task(caller: Identity, task: Task) -> Decision:
    decision = check_role(caller, "tasks:read")
    if isinstance(decision, Denied):
        return decision
    if not caller.is_lead and not _is_assignee(caller, task):
        return Denied("forbidden")
    return Allowed()

def can_update_task(caller: Identity, task: Task, fields: Iterable[str]) -> Decision:
    decision = check_role(caller, "tasks:update")
    if isinstance(decision, Denied):
        return decision
    if caller.is_lead:
        return Allowed()
    if not _is_assignee(caller, task):
        return Denied("forbidden - you are not assigned to this task")
    # presence alone is enough, the value is irrelevant
    if set(fields) - TEAM_EDITABLE_FIELDS:
        return Denied("team members can only update status and description")
    return Allowed()

def can_delete_task(caller: Identity) -> Decision:
    if isinstance(check_role(caller, "tasks:delete"), Denied):
        return Denied("only LEAD users can delete tasks")
    return Allowed()

def can_view_task_history(caller: Identity, task: Task) -> Decision:
    decision = check_role(caller, "history:read")
    if isinstance(decision, Denied):
        return decision
    if not caller.is_lead and not _is_assignee(caller, task):
        return Denied("forbidden")
    return Allowed()

def can_view_deletions(caller: Identity) -> Decision:
    return check_role(caller, "history:deletions")

def ensure(decision: Decision) -> None:
    if isinstance(decision, Denied):
        raise Forbidden(decision.reason)
