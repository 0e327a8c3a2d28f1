import uuid
from dataclasses import dataclass

from taskmaster.models.enums import Role
from taskmaster.models.user import User

@dataclass(frozen=True)
class Identity:
    """The authenticated caller, resolved once per request."""

    id: uuid.UUID
    email: str
    role: Role

    @property
    def is_lead(self) -> bool:
        return self.role == Role.LEAD

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, email=user.email, role=user.role)
