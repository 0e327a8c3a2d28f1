from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase

def now_utc() -> datetime:
    return datetime.now(timezone.utc)

class Base(DeclarativeBase):
    pass
