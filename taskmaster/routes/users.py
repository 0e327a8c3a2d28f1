from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskmaster.auth.deps import get_current_identity
from taskmaster.auth.identity import Identity
from taskmaster.db import get_db
from taskmaster.schemas.users import UserOut
from taskmaster.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=list[UserOut], response_model_exclude_none=True)
def list_users(
    caller: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> list[UserOut]:
    rows = user_service.list_users(db, caller)
    # TEAM gets just enough to render names
    return [
        UserOut(id=u.id, name=u.name, role=u.role, email=u.email if caller.is_lead else None)
        for u in rows
    ]
