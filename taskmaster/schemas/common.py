from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class PageOut(CamelModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int
    has_more: bool
    total_pages: int

class MessageOut(CamelModel):
    message: str
