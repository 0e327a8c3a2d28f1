import logging
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.exc import SQLAlchemyError

from taskmaster.config import settings
from taskmaster.models import Base

logger = logging.getLogger(__name__)

def _connect_args(url: str) -> dict:
    # sync endpoints run in a threadpool
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}

engine = create_engine(settings.database_url, pool_pre_ping=True, connect_args=_connect_args(settings.database_url))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# schema bootstrap for local sqlite/dev; production goes through alembic
def init_db() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("database tables initialized")

# db connectivity check
def db_ping() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
