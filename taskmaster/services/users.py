import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskmaster.auth.identity import Identity
from taskmaster.auth.passwords import hash_password, verify_password
from taskmaster.errors import Conflict, Unauthorized, ValidationError
from taskmaster.models.enums import Role
from taskmaster.models.user import User
from taskmaster.rbac.perms import check_role, ensure

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
NAME_LENGTH = (2, 50)

def normalize_email(email: str) -> str:
    return email.lower().strip()

def authenticate(db: Session, email: str, password: str) -> User:
    user = db.scalar(select(User).where(User.email == normalize_email(email)))
    # same message either way, don't leak which emails exist
    if user is None or not verify_password(password, user.password_hash):
        raise Unauthorized("invalid credentials")
    return user

def register_user(db: Session, name: str, email: str, password: str, role: Role) -> User:
    name = name.strip()
    if not NAME_LENGTH[0] <= len(name) <= NAME_LENGTH[1]:
        raise ValidationError(f"name must be {NAME_LENGTH[0]}-{NAME_LENGTH[1]} characters")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")

    email = normalize_email(email)
    if db.scalar(select(User).where(User.email == email)) is not None:
        raise Conflict("email already registered")

    user = User(name=name, email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration
        db.rollback()
        raise Conflict("email already registered") from None

    logger.info("registered %s user %s", role.value, user.id)
    return user

def list_users(db: Session, caller: Identity) -> list[User]:
    ensure(check_role(caller, "users:read"))
    return list(db.scalars(select(User).order_by(User.name.asc())).all())
