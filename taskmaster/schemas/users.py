import uuid

from taskmaster.models.enums import Role
from taskmaster.schemas.common import CamelModel

class UserSummaryOut(CamelModel):
    id: uuid.UUID
    name: str
    email: str

class UserOut(CamelModel):
    id: uuid.UUID
    name: str
    role: Role
    # only LEAD callers get emails in the directory
    email: str | None = None
