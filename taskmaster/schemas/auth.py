import uuid

from pydantic import EmailStr

from taskmaster.models.enums import Role
from taskmaster.schemas.common import CamelModel

class LoginIn(CamelModel):
    email: EmailStr
    password: str

class AuthUserOut(CamelModel):
    id: uuid.UUID
    email: str
    name: str
    role: Role

class LoginOut(CamelModel):
    user: AuthUserOut
    token: str

class RegisterIn(CamelModel):
    name: str
    email: EmailStr
    password: str
    role: Role = Role.TEAM

class MeOut(CamelModel):
    id: uuid.UUID
    email: str
    role: Role
