from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskmaster.auth.deps import get_current_identity
from taskmaster.auth.identity import Identity
from taskmaster.auth.tokens import issue_access_token
from taskmaster.config import settings
from taskmaster.db import get_db
from taskmaster.ratelimit import rate_limit
from taskmaster.schemas.auth import AuthUserOut, LoginIn, LoginOut, MeOut, RegisterIn
from taskmaster.schemas.common import MessageOut
from taskmaster.services import users as user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=LoginOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit(
            "auth:login",
            limit_per_window=settings.rate_limit_auth_login_per_min,
            window_seconds=60,
        )
    ),
) -> LoginOut:
    user = user_service.authenticate(db, payload.email, payload.password)
    logger.info("user %s logged in", user.id)
    return LoginOut(
        user=AuthUserOut(id=user.id, email=user.email, name=user.name, role=user.role),
        token=issue_access_token(user),
    )

@router.post("/register", response_model=MessageOut, status_code=201)
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit(
            "auth:register",
            limit_per_window=settings.rate_limit_auth_register_per_min,
            window_seconds=60,
        )
    ),
) -> MessageOut:
    user_service.register_user(db, payload.name, payload.email, payload.password, payload.role)
    return MessageOut(message="user registered successfully")

@router.get("/me", response_model=MeOut)
def me(caller: Identity = Depends(get_current_identity)) -> MeOut:
    return MeOut(id=caller.id, email=caller.email, role=caller.role)
