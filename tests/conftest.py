import os

# must be set before taskmaster.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskmaster.auth.identity import Identity
from taskmaster.auth.passwords import hash_password
from taskmaster.db import get_db
from taskmaster.main import create_app
from taskmaster.models import Base
from taskmaster.models.enums import Role
from taskmaster.models.user import User

PASSWORD = "password123"

@pytest.fixture()
def engine():
    database_url = os.environ["DATABASE_URL"]
    if database_url.startswith("sqlite"):
        # one shared connection so every session sees the same in-memory db
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, pool_pre_ping=True)

    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()

@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)

@pytest.fixture()
def db_session(session_factory) -> Session:
    session: Session = session_factory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture()
def client(session_factory) -> TestClient:
    app = create_app()

    # fresh session per request, like production
    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

def _make_user(db: Session, role: Role, name: str | None = None) -> User:
    suffix = uuid.uuid4().hex[:8]
    user = User(
        email=f"{role.value.lower()}+{suffix}@example.com",
        name=name or f"{role.value.title()} {suffix}",
        password_hash=hash_password(PASSWORD),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

@pytest.fixture()
def user_factory(db_session):
    def _factory(role: Role, name: str | None = None) -> User:
        return _make_user(db_session, role, name)

    return _factory

def _login(client, email: str, password: str = PASSWORD) -> str:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]

def _auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

@pytest.fixture()
def lead(db_session) -> User:
    return _make_user(db_session, Role.LEAD, name="Lead User")

@pytest.fixture()
def team(db_session) -> User:
    return _make_user(db_session, Role.TEAM, name="Team Member 1")

@pytest.fixture()
def other_team(db_session) -> User:
    return _make_user(db_session, Role.TEAM, name="Team Member 2")

@pytest.fixture()
def lead_jwt(client, lead) -> str:
    return _login(client, lead.email)

@pytest.fixture()
def team_jwt(client, team) -> str:
    return _login(client, team.email)

@pytest.fixture()
def other_team_jwt(client, other_team) -> str:
    return _login(client, other_team.email)

@pytest.fixture()
def lead_identity(lead) -> Identity:
    return Identity.from_user(lead)

@pytest.fixture()
def team_identity(team) -> Identity:
    return Identity.from_user(team)
