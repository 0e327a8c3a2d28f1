import uuid

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskmaster.auth.identity import Identity
from taskmaster.auth.tokens import decode_access_token
from taskmaster.db import get_db
from taskmaster.errors import Unauthorized
from taskmaster.models.user import User

bearer = HTTPBearer(auto_error=False)

def get_current_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> Identity:
    if creds is None or creds.scheme.lower() != "bearer":
        raise Unauthorized("missing bearer token")

    try:
        payload = decode_access_token(creds.credentials)
        user_id = uuid.UUID(payload["sub"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError, AttributeError):
        raise Unauthorized("invalid token")

    user = db.get(User, user_id)
    if user is None:
        raise Unauthorized("user not found")

    return Identity.from_user(user)
